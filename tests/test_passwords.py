"""Tests for password hashing."""

import bcrypt

from recipe_hub.services.passwords import MIN_ROUNDS, PasswordHasher


def test_hash_verifies_only_the_original_password(passwords: PasswordHasher) -> None:
    password_hash = passwords.hash("correct horse")

    assert passwords.verify("correct horse", password_hash)
    assert not passwords.verify("wrong horse", password_hash)


def test_hash_uses_fresh_salt(passwords: PasswordHasher) -> None:
    assert passwords.hash("same") != passwords.hash("same")


def test_default_cost_is_twelve() -> None:
    password_hash = PasswordHasher().hash("secret123")

    assert MIN_ROUNDS == 12
    assert password_hash.startswith("$2b$12$")


def test_malformed_hash_never_verifies(passwords: PasswordHasher) -> None:
    assert not passwords.verify("secret123", "not-a-hash")
    assert not passwords.verify("secret123", "")


def test_hash_shaped_input_is_hashed_again(passwords: PasswordHasher) -> None:
    typed = bcrypt.hashpw(b"secret123", bcrypt.gensalt(rounds=4)).decode("ascii")

    password_hash = passwords.hash(typed)

    assert password_hash != typed
    assert passwords.verify(typed, password_hash)
    assert not passwords.verify("secret123", password_hash)
