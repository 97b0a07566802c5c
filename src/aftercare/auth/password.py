"""Password hashing utilities.

bcrypt handles salting on its own: every hash embeds a fresh random salt
and its cost factor, so hash + salt are stored together as one string and
the plaintext is never persisted.

Hashing is always an explicit call made by the user service before it
writes a row. Nothing hashes implicitly on save.
"""

import bcrypt

DEFAULT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes.
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt.

    The work factor defaults to 12 (~100ms per hash on modern hardware).
    Tests lower it through AFTERCARE_BCRYPT_ROUNDS.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash.

    bcrypt.checkpw compares in constant time. A malformed hash is
    treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def hash_rounds(password_hash: str) -> int | None:
    """Cost factor encoded in a bcrypt hash ("$2b$12$..." -> 12)."""
    parts = password_hash.split("$")
    if len(parts) < 4 or not parts[2].isdigit():
        return None
    return int(parts[2])


def needs_rehash(password_hash: str, rounds: int = DEFAULT_ROUNDS) -> bool:
    """True when the stored hash was made with a different cost factor."""
    return hash_rounds(password_hash) != rounds


class TimingShield:
    """Spends one bcrypt comparison when there is no user to compare against.

    Login for an unknown email then costs about the same as a wrong
    password, so response time does not reveal which emails exist.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._hash = hash_password("timing-shield-placeholder", rounds)

    def burn(self, password: str) -> None:
        verify_password(password, self._hash)
