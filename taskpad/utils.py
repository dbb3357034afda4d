"""
String measurement and raw output helpers.
"""

import re
import sys


_ANSI_RE = re.compile(r'\x1b\[[0-9;?]*[a-zA-Z]')


def strip_ansi(text: str) -> str:
    """
    Remove ANSI escape sequences from text.

    Args:
        text: Text containing ANSI codes

    Returns:
        Text with ANSI codes removed
    """
    return _ANSI_RE.sub('', text)


def visible_length(text: str) -> int:
    return len(strip_ansi(text))


def pad_string(text: str, width: int, justify: str = "left", fillchar: str = " ") -> str:
    """
    Pad a string to a specific width, ignoring ANSI codes when measuring.

    Args:
        text: Text to pad
        width: Target width
        justify: Justification ("left", "center", "right")
        fillchar: Character to use for padding

    Returns:
        Padded string
    """
    visible_len = visible_length(text)
    if visible_len >= width:
        return text

    padding_needed = width - visible_len

    if justify == "left":
        return text + (fillchar * padding_needed)
    elif justify == "right":
        return (fillchar * padding_needed) + text
    elif justify == "center":
        left_pad = padding_needed // 2
        right_pad = padding_needed - left_pad
        return (fillchar * left_pad) + text + (fillchar * right_pad)
    else:
        return text


def truncate_string(text: str, width: int, ellipsis: str = "...") -> str:
    """Truncate plain text to ``width`` visible characters."""
    if len(text) <= width:
        return text
    if width <= len(ellipsis):
        return text[:width]
    return text[:width - len(ellipsis)] + ellipsis


def write_bytes(data: bytes) -> None:
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def write_text(text: str) -> None:
    write_bytes(text.encode("utf-8", errors="replace"))
