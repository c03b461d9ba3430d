# src/patcher/services/alt_text_service.py
import re

FALLBACK_ALT = "Image"


def suggest_alt_text(src: str) -> str:
    """
    Derives placeholder alt text from an image reference.

    "images/My-Photo_02.jpg" -> "My photo"; references without usable
    letters fall back to "Image".
    """
    path = re.split(r"[?#]", src or "", maxsplit=1)[0]
    segment = path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    stem = re.sub(r"\.[^./]*$", "", segment)
    words = re.sub(r"[\W\d_]+", " ", stem).strip()
    return words.capitalize() if words else FALLBACK_ALT
