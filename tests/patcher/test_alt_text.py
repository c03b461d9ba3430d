# tests/patcher/test_alt_text.py
import pytest

from patcher.services.alt_text_service import FALLBACK_ALT, suggest_alt_text
from patcher.services.diff_service import build_unified_diff


@pytest.mark.parametrize("src, expected", [
    ("images/My-Photo_02.jpg", "My photo"),
    ("hero-banner.jpg", "Hero banner"),
    ("/a/b/LOGO.PNG", "Logo"),
    ("https://cdn.example.com/team_photo.webp?v=3", "Team photo"),
    ("", FALLBACK_ALT),
    ("...", FALLBACK_ALT),
    ("/img/1234.png", FALLBACK_ALT),
])
def test_suggest_alt_text(src, expected):
    assert suggest_alt_text(src) == expected


# --- Diffs ---

def test_identical_text_gives_empty_diff():
    assert build_unified_diff("a\nb\n", "a\nb\n", "x.html") == ""


def test_unified_diff_headers_and_lines():
    diff = build_unified_diff("<html>\n<body>\n", '<html lang="en-US">\n<body>\n', "index.html")
    lines = diff.splitlines()

    assert lines[0] == "--- a/index.html"
    assert lines[1] == "+++ b/index.html"
    assert "-<html>" in lines
    assert '+<html lang="en-US">' in lines


def test_diff_lines_always_end_with_newline():
    diff = build_unified_diff("one", "two", "a.css")
    assert diff.endswith("\n")
    assert "-one\n+two\n" in diff
