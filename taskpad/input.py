"""
Raw mode input handling and keystroke parsing.
"""

import os
import re
import select
import sys
from typing import List, Optional

try:
    import termios  # type: ignore
    import tty  # type: ignore
except Exception:  # pragma: no cover
    termios = None  # type: ignore
    tty = None  # type: ignore

# Key constants
KEY_ENTER = "\r"
KEY_ESC = "\x1b"
KEY_BACKSPACE = "\x08"
# Note: many terminals send DEL (0x7f) for backspace.
KEY_DELETE = "\x7f"
KEY_TAB = "\t"
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_HOME = "KEY_HOME"
KEY_END = "KEY_END"
KEY_SHIFTTAB = "KEY_SHIFTTAB"

_KEY_NAMES = {
    "enter": KEY_ENTER,
    "return": KEY_ENTER,
    "esc": KEY_ESC,
    "escape": KEY_ESC,
    "tab": KEY_TAB,
    "backtab": KEY_SHIFTTAB,
    "backspace": KEY_DELETE,
    "up": KEY_UP,
    "down": KEY_DOWN,
    "left": KEY_LEFT,
    "right": KEY_RIGHT,
    "home": KEY_HOME,
    "end": KEY_END,
}

_ESC_GRACE_TIMEOUT_S = 0.03
_ESC_SEQUENCE_TIMEOUT_S = 0.1
_ESC_SEQUENCE_MAX = 10

_CSI_MODIFIED_RE = re.compile(r"^\x1b\[[0-9;]*([A-Za-z])$")


def key_from_name(name: str) -> str:
    """
    Translate a configured key name ("enter", "esc", "j") to a key value.

    Single characters map to themselves; names are case-insensitive.
    """
    if len(name) == 1:
        return name
    return _KEY_NAMES.get(name.strip().lower(), name)


def key_display_name(name: str) -> str:
    if len(name) == 1:
        return name
    return name.strip().capitalize()


def parse_ansi_sequence(seq: str) -> Optional[str]:
    """
    Parse ANSI escape sequence to key constant.

    Args:
        seq: Escape sequence (including ESC)

    Returns:
        Key constant or None if not recognized
    """
    # SS3 variants (common in some terminals / keypad modes)
    if len(seq) == 3 and seq.startswith("\x1bO"):
        return {
            "A": KEY_UP,
            "B": KEY_DOWN,
            "C": KEY_RIGHT,
            "D": KEY_LEFT,
            "H": KEY_HOME,
            "F": KEY_END,
        }.get(seq[2])

    # Tilde-terminated CSI sequences
    if seq == "\x1b[1~" or seq == "\x1b[7~":
        return KEY_HOME
    if seq == "\x1b[4~" or seq == "\x1b[8~":
        return KEY_END
    if seq == "\x1b[Z":
        return KEY_SHIFTTAB

    # CSI with optional modifiers, e.g. ESC [ 1 ; 2 B
    m = _CSI_MODIFIED_RE.match(seq)
    if m:
        return {
            "A": KEY_UP,
            "B": KEY_DOWN,
            "C": KEY_RIGHT,
            "D": KEY_LEFT,
            "H": KEY_HOME,
            "F": KEY_END,
        }.get(m.group(1))
    return None


def is_printable(ch: str) -> bool:
    """
    Check if character is printable.

    Args:
        ch: Character to check

    Returns:
        True if printable
    """
    if len(ch) != 1:
        return False
    return ch.isprintable()


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class RawInput:
    """
    Context manager for raw mode keyboard input.

    Reads raise EOFError once the input stream is closed.

    Example:
        >>> with RawInput() as inp:
        ...     key = inp.get_key()
        ...     if key == KEY_ENTER:
        ...         print("Enter pressed")
    """

    def __init__(self, fd: Optional[int] = None):
        self._fd = int(fd) if fd is not None else sys.stdin.fileno()
        self._inbuf = bytearray()
        self._saved_attrs: Optional[List[int]] = None
        self._raw_applied = False
        self._eof = False

    def __enter__(self):
        """Enable raw mode."""
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Disable raw mode."""
        self.disable_raw_mode()
        return False

    def enable_raw_mode(self) -> None:
        if self._raw_applied:
            return
        if termios is None or tty is None:
            return
        if not os.isatty(self._fd):
            return
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd, when=termios.TCSANOW)
        self._raw_applied = True

    def disable_raw_mode(self) -> None:
        if termios is None or not self._raw_applied or self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_attrs)
        finally:
            self._raw_applied = False

    def _fill_inbuf(self, timeout: Optional[float]) -> bool:
        if self._eof:
            return False
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return False
        data = os.read(self._fd, 1024)
        if not data:
            self._eof = True
            return False
        self._inbuf.extend(data)
        return True

    def _read_byte(self, timeout: Optional[float]) -> Optional[int]:
        if not self._inbuf:
            if not self._fill_inbuf(timeout):
                return None
        b = self._inbuf[0]
        del self._inbuf[0]
        return b

    def _pushback_bytes(self, bs: bytes) -> None:
        if not bs:
            return
        self._inbuf = bytearray(bs) + self._inbuf

    def _read_escape(self) -> Optional[str]:
        b1 = self._read_byte(_ESC_GRACE_TIMEOUT_S)
        if b1 is None:
            return KEY_ESC
        if b1 not in (ord("["), ord("O")):
            self._pushback_bytes(bytes([b1]))
            return KEY_ESC

        seq = "\x1b" + chr(b1)
        while len(seq) < _ESC_SEQUENCE_MAX:
            b = self._read_byte(_ESC_SEQUENCE_TIMEOUT_S)
            if b is None:
                break
            seq += chr(b)
            if chr(b).isalpha() or chr(b) == "~":
                break
        # Unrecognized sequences are swallowed whole.
        return parse_ansi_sequence(seq)

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Read a single keystroke (blocking or with timeout).

        Args:
            timeout: Timeout in seconds (None = blocking)

        Returns:
            Key string or key constant, or None on timeout or for an
            escape sequence that maps to no key

        Raises:
            EOFError: The input stream was closed
        """
        b0 = self._read_byte(timeout)
        if b0 is None:
            if self._eof:
                raise EOFError("input stream closed")
            return None

        if b0 == 0x1B:
            return self._read_escape()
        if b0 == 0x0A:
            return KEY_ENTER

        length = _utf8_length(b0)
        raw = bytearray([b0])
        while len(raw) < length:
            b = self._read_byte(_ESC_SEQUENCE_TIMEOUT_S)
            if b is None:
                break
            raw.append(b)
        return raw.decode("utf-8", errors="replace")
