"""
ANSI escape codes and terminal control functions.
"""

from .utils import write_text

# Color codes
RESET = "\x1b[0m"
BLACK = "\x1b[30m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"
WHITE = "\x1b[37m"

BRIGHT_BLACK = "\x1b[90m"
BRIGHT_RED = "\x1b[91m"
BRIGHT_GREEN = "\x1b[92m"
BRIGHT_YELLOW = "\x1b[93m"
BRIGHT_BLUE = "\x1b[94m"
BRIGHT_MAGENTA = "\x1b[95m"
BRIGHT_CYAN = "\x1b[96m"
BRIGHT_WHITE = "\x1b[97m"

# Text styles
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
UNDERLINE = "\x1b[4m"
REVERSE = "\x1b[7m"

CLEAR_SCREEN = "\x1b[2J\x1b[H"
CLEAR_TO_EOL = "\x1b[K"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def goto(x: int, y: int) -> str:
    """
    Cursor positioning sequence (1-indexed).

    Args:
        x: Column (1-indexed)
        y: Row (1-indexed)
    """
    return f"\x1b[{int(y)};{int(x)}H"


def write(text: str) -> None:
    write_text(text)

