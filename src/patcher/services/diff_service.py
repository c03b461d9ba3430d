# src/patcher/services/diff_service.py
import difflib


def build_unified_diff(before_text: str, after_text: str, file_name: str, context: int = 3) -> str:
    """Unified diff between two versions of `file_name`. Identical inputs give an empty string."""
    if before_text == after_text:
        return ""

    before_lines = (before_text or "").splitlines(keepends=True)
    after_lines = (after_text or "").splitlines(keepends=True)

    diff_iter = difflib.unified_diff(
        before_lines,
        after_lines,
        fromfile=f"a/{file_name}",
        tofile=f"b/{file_name}",
        n=context,
    )
    # Last lines without a newline would otherwise run into the next diff line.
    return "".join(line if line.endswith("\n") else line + "\n" for line in diff_iter)
