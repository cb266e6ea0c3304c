"""Tests for Argon2 password hashing."""

import pytest

from wordbox.services.errors import HashError
from wordbox.services.password import Argon2PasswordHasher


def test_hash_never_contains_plaintext_and_verifies(hasher):
    password = "super-secret-password"

    password_hash = hasher.hash(password)

    assert password_hash != password
    assert password not in password_hash
    assert password_hash.startswith("$argon2id$")
    assert hasher.verify(password, password_hash) is True


def test_wrong_password_fails_verification(hasher):
    password_hash = hasher.hash("correct")

    assert hasher.verify("wrong", password_hash) is False


def test_same_password_hashes_differently(hasher):
    assert hasher.hash("pwd") != hasher.hash("pwd")


def test_hash_from_other_parameters_still_verifies(hasher):
    other = Argon2PasswordHasher(time_cost=2, memory_cost=16, parallelism=1)

    assert hasher.verify("pwd", other.hash("pwd")) is True


@pytest.mark.parametrize("stored", ["", "plaintext", "$argon2id$v=19$garbage"])
def test_malformed_hash_raises_hash_error(hasher, stored):
    with pytest.raises(HashError):
        hasher.verify("pwd", stored)
