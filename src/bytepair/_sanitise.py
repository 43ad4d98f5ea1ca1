"""
Utilities for converting symbol bytes to displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    # control category codes vary: Cc, Cf, Cn etc. so check via first character
    return "".join(
        c if unicodedata.category(c)[0] != "C" else f"\\u{ord(c):04x}" for c in s
    )


def render_bytes(b: bytes) -> str:
    """
    Render a symbol for display.

    Valid UTF-8 is shown as text with control characters escaped as ``\\uXXXX``.
    A merge can hold part of a multi-byte character; bytes that do not decode
    on their own are shown as ``\\xNN``.
    """
    return _escape_ctrl_chars(b.decode("utf-8", errors="backslashreplace"))
