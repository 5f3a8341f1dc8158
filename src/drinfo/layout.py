"""Card and bar geometry derived from the terminal width."""

import shutil
from dataclasses import dataclass

FALLBACK_WIDTH = 80
MIN_BOX_WIDTH = 40
MAX_BOX_WIDTH = 120
FRAME_WIDTH = 4  # "│ " and " │"
BRACKET_WIDTH = 2  # "[" and "]"
MIN_BAR_LENGTH = 10


@dataclass(frozen=True)
class BarLayout:
    """Dimensions of one drive card."""

    box_width: int
    content_width: int
    bar_length: int


def get_terminal_width() -> int:
    """Column count of the terminal, or 80 when it cannot be queried."""
    columns = shutil.get_terminal_size((FALLBACK_WIDTH, 24)).columns
    return columns if columns > 0 else FALLBACK_WIDTH


def plan_layout(terminal_width: int) -> BarLayout:
    """
    Compute card geometry for a terminal width.

    Cards take roughly 80% of the terminal, clamped to [40, 120] columns.
    The bar keeps room for the frame and its brackets but never drops
    below 10 cells.
    """
    box_width = terminal_width * 4 // 5
    box_width = min(max(box_width, MIN_BOX_WIDTH), MAX_BOX_WIDTH)
    content_width = box_width - FRAME_WIDTH
    bar_length = max(content_width - BRACKET_WIDTH, MIN_BAR_LENGTH)
    return BarLayout(box_width=box_width, content_width=content_width, bar_length=bar_length)
