"""
Common utility functions.
"""

import re
from typing import Tuple

_FENCE_OPEN = re.compile(r"^```[\w+#.-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")
_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """
    Remove Markdown code fences wrapped around generated markup.

    Strips a leading fence opener (optionally tagged with a language such as
    ``html``) and a trailing fence closer, then trims whitespace. Repeats
    until nothing changes so the result is stable under re-application.

    Args:
        text: Raw model output

    Returns:
        Unwrapped, trimmed text
    """
    current = text.strip()
    while True:
        stripped = _FENCE_OPEN.sub("", current, count=1)
        stripped = _FENCE_CLOSE.sub("", stripped, count=1).strip()
        if stripped == current:
            return stripped
        current = stripped


def split_data_uri(image_base64: str, default_mime_type: str) -> Tuple[str, str]:
    """
    Split an image payload into MIME type and raw base64 data.

    Clients may send either bare base64 or a ``data:image/png;base64,...``
    URI (what a browser FileReader produces).

    Args:
        image_base64: Bare base64 or data URI
        default_mime_type: MIME type assumed for bare base64

    Returns:
        (mime_type, base64_data)
    """
    match = _DATA_URI.match(image_base64.strip())
    if match:
        return match.group("mime"), match.group("data")
    return default_mime_type, image_base64.strip()


def truncate(text: str, limit: int) -> str:
    """Return at most ``limit`` leading characters of ``text``."""
    return text[:limit]
