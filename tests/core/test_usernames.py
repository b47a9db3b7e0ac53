"""Username Rules — verifies validation messages and generated candidates."""

import random

import pytest

from einfo.core.usernames import (
    GENERATED_MAX_LENGTH, SUFFIX_RETRIES, check_username, normalize_username,
    username_candidates, username_from_email,
)


@pytest.mark.parametrize("username", ["abc", "jane_doe", "Jane-Doe", "a1b2c3"])
def test_valid_usernames(username):
    assert check_username(username) is None


@pytest.mark.parametrize("username, message", [
    ("", "Username is required and must be a string"),
    (None, "Username is required and must be a string"),
    ("ab", "Username must be between 3 and 30 characters"),
    ("a" * 31, "Username must be between 3 and 30 characters"),
    ("jane.doe", "Username can only contain letters, numbers, underscores, and hyphens"),
    ("jane--doe", "Username cannot contain consecutive hyphens"),
    ("-jane", "Username cannot start or end with hyphens or underscores"),
    ("jane_", "Username cannot start or end with hyphens or underscores"),
    ("Admin", "This username is reserved and cannot be used"),
])
def test_invalid_usernames(username, message):
    assert check_username(username) == message


def test_normalize_lowercases_and_strips():
    assert normalize_username("  JaneDoe ") == "janedoe"


def test_username_from_email_uses_clean_prefix():
    name = username_from_email(
        "Jane.Doe+work@example.com", now_ms=1700000123456, rng=random.Random(1),
    )
    assert name.startswith("janedoework")
    assert len(name) <= GENERATED_MAX_LENGTH
    assert check_username(name) is None


def test_username_from_short_email_is_padded():
    name = username_from_email("a@example.com", now_ms=1700000123456, rng=random.Random(1))
    assert name.startswith("a00")
    assert check_username(name) is None


def test_candidates_start_with_base_then_suffixes_then_counter():
    gen = username_candidates("janedoe123", rng=random.Random(7))
    assert next(gen) == "janedoe123"
    suffixed = [next(gen) for _ in range(SUFFIX_RETRIES)]
    assert all(s.startswith("janedoe") for s in suffixed)
    assert next(gen) == "janedoe1"
    assert next(gen) == "janedoe2"
