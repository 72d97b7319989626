"""Password hashing and verification.

Uses bcrypt with a per-hash random salt and a fixed work factor.
"""

from dataclasses import dataclass

import bcrypt

MIN_ROUNDS = 12


@dataclass
class PasswordHasher:
    """One-way salted password hashing."""

    rounds: int = MIN_ROUNDS

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("ascii")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(
                plaintext.encode("utf-8"), password_hash.encode("ascii")
            )
        except (ValueError, TypeError, UnicodeEncodeError):
            return False
