"""ANSI color helpers for terminal output."""

import os
import sys

RESET = '\033[0m'
BOLD = '\033[1m'
DIM = '\033[2m'
RED = '\033[31m'
GREEN = '\033[32m'
YELLOW = '\033[33m'
BLUE = '\033[34m'
CYAN = '\033[36m'
BRIGHT_GREEN = '\033[92m'


def _supports_color() -> bool:
    """Detect if the terminal supports ANSI colors."""
    # https://no-color.org/
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        return bool(os.environ.get('WT_SESSION') or os.environ.get('TERM'))
    return True


COLORS_ENABLED = _supports_color()


def style(text: str, *codes: str) -> str:
    """Wrap text in the given ANSI codes if colors are enabled."""
    if not COLORS_ENABLED or not codes:
        return text
    return f"{''.join(codes)}{text}{RESET}"


def green(text: str) -> str:
    return style(text, GREEN)


def red(text: str) -> str:
    return style(text, RED)


def yellow(text: str) -> str:
    return style(text, YELLOW)


def cyan(text: str) -> str:
    return style(text, CYAN)


def dim(text: str) -> str:
    return style(text, DIM)


def bold(text: str) -> str:
    return style(text, BOLD)


def bold_cyan(text: str) -> str:
    return style(text, BOLD, CYAN)


def delta_color(delta: int, text: str) -> str:
    """Green for gains, red for losses, dim for no change."""
    if delta > 0:
        return green(text)
    if delta < 0:
        return red(text)
    return dim(text)


def prob_color(prob: float, text: str) -> str:
    """Color based on how lopsided a matchup is (favorite's win probability)."""
    if prob >= 0.7:
        return green(text)
    if prob >= 0.55:
        return yellow(text)
    return dim(text)


def histogram_bar(bar: str, ratio: float) -> str:
    """Color histogram bar based on relative position."""
    for threshold, code in ((0.9, BRIGHT_GREEN), (0.7, GREEN), (0.5, CYAN), (0.3, BLUE)):
        if ratio >= threshold:
            return style(bar, code)
    return dim(bar)
