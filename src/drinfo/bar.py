"""Usage bar rendering: gradient fill with an embedded percentage label."""

from drinfo.ansi import RESET, Rgb, bg, fg, gradient_color
from drinfo.formatting import format_percent
from drinfo.layout import MIN_BAR_LENGTH

FILLED_GLYPH = "█"
EMPTY_GLYPH = "░"

LABEL_FOREGROUND = Rgb(0, 0, 255)
EMPTY_BACKGROUND = Rgb(64, 64, 64)
EMPTY_FOREGROUND = Rgb(160, 160, 160)

EMPTY_CELL = f"{bg(EMPTY_BACKGROUND)}{fg(EMPTY_FOREGROUND)}{EMPTY_GLYPH}{RESET}"


def filled_cells(usage_percent: float, bar_length: int) -> int:
    """Number of filled cells, truncated toward zero."""
    return int((usage_percent / 100.0) * bar_length)


def label_start(filled: int, text_length: int) -> int:
    """First cell of the label, centered within the filled region."""
    if filled > text_length:
        return (filled - text_length) // 2
    return 0


def render_usage_bar(usage_percent: float, bar_length: int) -> str:
    """
    Build the colored usage bar for one drive.

    Filled cells carry the gradient color of their position. The percentage
    label sits centered inside the filled region, each glyph drawn on the
    gradient background of its cell. A label wider than the filled region
    starts at cell 0 and is cut off where the fill ends. Every cell ends with
    a reset so colors never leak into the next one.

    Args:
        usage_percent: Usage in [0, 100]; out of range values are clamped
        bar_length: Number of cells; values below 10 are raised to 10

    Returns:
        A string whose visible length is the (clamped) bar length
    """
    bar_length = max(bar_length, MIN_BAR_LENGTH)
    usage_percent = min(max(usage_percent, 0.0), 100.0)

    filled = filled_cells(usage_percent, bar_length)
    text = format_percent(usage_percent)
    text_start = label_start(filled, len(text))
    text_end = text_start + len(text)

    cells = []
    for i in range(bar_length):
        if text_start <= i < text_end and i < filled:
            color = gradient_color(i, bar_length)
            cells.append(f"{bg(color)}{fg(LABEL_FOREGROUND)}{text[i - text_start]}{RESET}")
        elif i < filled:
            color = gradient_color(i, bar_length)
            cells.append(f"{fg(color)}{FILLED_GLYPH}{RESET}")
        else:
            cells.append(EMPTY_CELL)

    return "".join(cells)
