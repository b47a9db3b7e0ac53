"""LIKE Patterns — verifies escaping of wildcard characters."""

from einfo.core.like_patterns import LIKE_ESCAPE, contains, escape_like


def test_plain_text_unchanged():
    assert escape_like("jane") == "jane"


def test_wildcards_escaped():
    assert escape_like("100%_x") == "100\\%\\_x"


def test_escape_char_doubled_first():
    assert escape_like("a\\%") == "a\\\\\\%"


def test_contains_wraps_escaped_value():
    assert contains("_") == "%\\_%"
    assert LIKE_ESCAPE == "\\"
