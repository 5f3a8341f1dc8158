"""ANSI escape sequence helpers: visible length, colors and the usage gradient."""

from typing import Iterable, NamedTuple

ESC = "\033"
RESET = f"{ESC}[0m"

BOLD_YELLOW = "1;33"


class Rgb(NamedTuple):
    """24-bit color triplet."""

    r: int
    g: int
    b: int


def fg(color: Rgb) -> str:
    """True-color foreground sequence."""
    return f"{ESC}[38;2;{color.r};{color.g};{color.b}m"


def bg(color: Rgb) -> str:
    """True-color background sequence."""
    return f"{ESC}[48;2;{color.r};{color.g};{color.b}m"


def style(text: str, code: str) -> str:
    """Wrap text in an SGR sequence followed by a reset."""
    return f"{ESC}[{code}m{text}{RESET}"


def _visible_chars(s: str) -> Iterable[str]:
    in_escape = False
    for ch in s:
        if ch == ESC:
            in_escape = True
        elif in_escape:
            if ch == "m":
                in_escape = False
        else:
            yield ch


def visible_length(s: str) -> int:
    """
    Count the characters of s that are not part of an ESC ... m sequence.

    Raw len() is useless for padding once color codes are embedded, so every
    width comparison in the report goes through this.
    """
    return sum(1 for _ in _visible_chars(s))


def max_visible_length(lines: Iterable[str]) -> int:
    """Longest visible length in a block of lines (0 for no lines)."""
    return max((visible_length(line) for line in lines), default=0)


def strip_ansi(s: str) -> str:
    """Drop escape sequences, keeping only visible characters."""
    return "".join(_visible_chars(s))


def pad_visible(s: str, width: int) -> str:
    """Right-pad s with spaces up to the given visible width."""
    return s + " " * max(width - visible_length(s), 0)


def gradient_color(index: int, max_index: int) -> Rgb:
    """
    Color for a bar position on a green -> yellow -> red ramp.

    Args:
        index: Position in [0, max_index - 1]
        max_index: Number of positions, at least 2

    Returns:
        Rgb with green at index 0, yellow halfway and red at the end
    """
    if max_index < 2:
        raise ValueError(f"gradient needs at least 2 positions, got {max_index}")

    ratio = index / (max_index - 1)
    if ratio < 0.5:
        # Green to yellow
        return Rgb(int(ratio * 2 * 255), 255, 0)
    # Yellow to red
    return Rgb(255, int((1.0 - (ratio - 0.5) * 2) * 255), 0)
