"""Password hashing utilities (bcrypt)."""
import bcrypt

# bcrypt only uses the first 72 bytes of its input; newer releases raise
# ValueError instead of ignoring the rest
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int) -> str:
    """
    Hash a plaintext password with bcrypt.

    The UTF-8 encoding is cut to 72 bytes first, so passwords of any length
    hash successfully.

    Args:
        password: Plain text password
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        The hash as a str, e.g. "$2b$04$..."
    """
    secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(secret, salt).decode("utf-8")
