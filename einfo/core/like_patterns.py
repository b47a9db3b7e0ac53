"""LIKE Patterns: substring patterns built from user input.

Invariants:
    - %, _ and the escape character in user input match themselves
    - Callers pass escape=LIKE_ESCAPE to like()/ilike()
"""

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def contains(value: str) -> str:
    """Pattern matching value anywhere in the column."""
    return f"%{escape_like(value)}%"
