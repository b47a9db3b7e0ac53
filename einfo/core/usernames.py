"""Username Rules: validation and generation of profile usernames.

Invariants:
    - All functions are PURE apart from the clock and RNG they are handed
    - check_username returns an error message on violation, None on success
    - Stored usernames are lowercase
    - Generated usernames are at most 20 chars and always pass check_username
      for any email whose prefix has at least one alphanumeric char

Design Decisions:
    - One rule set for sign-up, check-username and account updates
    - Candidate generation is separated from the uniqueness lookup, so the
      service layer owns the DB round-trips
"""

import random
import re
import time
from typing import Iterator

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
GENERATED_PREFIX_LENGTH = 12
GENERATED_MAX_LENGTH = 20
COUNTER_BASE_LENGTH = 15
SUFFIX_RETRIES = 5

RESERVED_USERNAMES = frozenset({
    "admin", "api", "www", "mail", "ftp", "blog", "support", "help",
    "info", "news", "about", "contact", "privacy", "terms", "legal",
    "root", "user", "guest", "test", "demo", "example", "null", "undefined",
})

_ALLOWED = re.compile(r"^[a-zA-Z0-9_-]+$")
_TRAILING_DIGITS = re.compile(r"\d+$")


def check_username(username: str | None) -> str | None:
    """Return the first rule the username breaks, or None."""
    if not username or not isinstance(username, str):
        return "Username is required and must be a string"
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return "Username must be between 3 and 30 characters"
    if not _ALLOWED.match(username):
        return "Username can only contain letters, numbers, underscores, and hyphens"
    if "--" in username:
        return "Username cannot contain consecutive hyphens"
    if username[0] in "-_" or username[-1] in "-_":
        return "Username cannot start or end with hyphens or underscores"
    if username.lower() in RESERVED_USERNAMES:
        return "This username is reserved and cannot be used"
    return None


def normalize_username(username: str) -> str:
    return username.strip().lower()


def _suffix(now_ms: int | None, rng: random.Random | None) -> str:
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    rng = rng or random
    return f"{str(now_ms)[-6:]}{rng.randint(0, 999):03d}"


def username_from_email(
    email: str, now_ms: int | None = None, rng: random.Random | None = None,
) -> str:
    """Derive a username from the email prefix plus a timestamp/random suffix."""
    prefix = email.split("@")[0].lower()
    base = re.sub(r"[^a-z0-9]", "", prefix)[:GENERATED_PREFIX_LENGTH]
    base = base.ljust(USERNAME_MIN_LENGTH, "0")
    return f"{base}{_suffix(now_ms, rng)}"[:GENERATED_MAX_LENGTH]


def username_candidates(
    base: str, rng: random.Random | None = None,
) -> Iterator[str]:
    """Yield usernames to try, in order, until one is free.

    The base itself, then SUFFIX_RETRIES fresh timestamp/random suffixes on
    the digit-stripped base, then an unbounded counter.
    """
    yield base
    stem = _TRAILING_DIGITS.sub("", base)
    for _ in range(SUFFIX_RETRIES):
        yield f"{stem[:GENERATED_PREFIX_LENGTH]}{_suffix(None, rng)}"[:GENERATED_MAX_LENGTH]
    counter_base = stem[:COUNTER_BASE_LENGTH]
    counter = 1
    while True:
        yield f"{counter_base}{counter}"
        counter += 1
