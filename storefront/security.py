# storefront/security.py
import bcrypt


def hash_password(plaintext: str, rounds: int) -> str:
    """Return the bcrypt hash of `plaintext` using a cost factor of `rounds`."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")


def verify_password(plaintext: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
