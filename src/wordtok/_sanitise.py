"""
Utilities for converting tokens to displayable strings.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_token(tok: str) -> str:
    """
    Render a token for human-readable output.

    Control characters such as newlines and tabs are escaped so every token
    fits on one line. A plain space is shown as-is.
    """
    return _escape_ctrl_chars(tok)
