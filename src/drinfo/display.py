"""Rich terminal display for drinfo."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text

from drinfo import __version__
from drinfo.ansi import BOLD_YELLOW, RESET, Rgb, fg, max_visible_length, pad_visible, style, visible_length
from drinfo.layout import BarLayout
from drinfo.models import DriveKind, DriveRecord

console = Console(highlight=False)

FIELD_WIDTH = 15
PLACEHOLDER = "-"
NO_DATA = "No data"
HEALTHY_STATUSES = ("PASSED", "OK")

HEALTH_GOOD = Rgb(0, 200, 0)
HEALTH_BAD = Rgb(220, 0, 0)


def set_color_enabled(enabled: bool) -> None:
    """Switch the console between colored and plain output."""
    global console
    console = Console(highlight=False, color_system="auto" if enabled else None)


def setup_logging(verbose: bool) -> None:
    """Send debug logs to stderr through rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def show_version() -> None:
    console.print(f"drinfo version {__version__}")


def show_error(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def type_label(record: DriveRecord) -> str:
    """Drive type with the cloud provider, e.g. 'Network (Google Drive)'."""
    if record.is_cloud:
        return f"{record.drive_type} ({record.cloud_service_name})"
    return record.drive_type


def health_label(record: DriveRecord) -> str:
    """Colored SMART status, or a placeholder when unavailable."""
    if not record.health:
        return NO_DATA
    color = HEALTH_GOOD if record.health.upper() in HEALTHY_STATUSES else HEALTH_BAD
    return f"{fg(color)}{record.health}{RESET}"


def inode_label(record: DriveRecord) -> str:
    if record.total_inodes == 0:
        return PLACEHOLDER
    return f"{record.used_inodes:,} / {record.total_inodes:,} ({record.inode_usage_percent:.1f}%)"


def printable(value: str) -> str:
    """Replace control characters (a tab or newline decoded from the mount table) with '?'."""
    return "".join(ch if ch.isprintable() else "?" for ch in value)


def _field(name: str, value: str) -> str:
    return f"{name + ':':<{FIELD_WIDTH}}{value}"


def drive_lines(record: DriveRecord) -> list[str]:
    """Content lines of a drive card, bar last."""
    lines = [
        _field("Mount point", printable(record.mount_point)),
        _field("Filesystem", record.filesystem_type),
        _field("Device", printable(record.device_path)),
        _field("Type", type_label(record)),
        _field("UUID", record.uuid or PLACEHOLDER),
        _field("Label", printable(record.label) or PLACEHOLDER),
        _field("Options", printable(record.mount_options) or PLACEHOLDER),
        _field("Total size", record.total_human),
        _field("Used", f"{record.used_human} ({record.percent_human})"),
        _field("Available", record.available_human),
        _field("Inodes", inode_label(record)),
    ]

    # SMART only applies to physical disks
    if record.category.kind == DriveKind.LOCAL:
        lines.append(_field("Health", health_label(record)))

    mounted = record.mount_time.strftime("%Y-%m-%d %H:%M:%S") if record.mount_time else "unknown"
    lines.append(_field("Mounted", mounted))
    lines.append(f"[{record.rendered_bar}]")
    return lines


def render_card(index: int, record: DriveRecord, layout: BarLayout) -> list[str]:
    """
    Frame a drive's lines in a rounded box.

    The box is as wide as the layout asks for, or wider when a line (a long
    mount point, say) would not fit. Padding is computed on visible length
    since most lines carry color codes.
    """
    body = drive_lines(record)
    inner = max(layout.content_width, max_visible_length(body))

    title = style(f" Drive {index} ", BOLD_YELLOW)
    top = "╭─" + title + "─" * (inner + 1 - visible_length(title)) + "╮"
    bottom = "╰" + "─" * (inner + 2) + "╯"

    return [top] + [f"│ {pad_visible(line, inner)} │" for line in body] + [bottom]


def show_drives(records: list[DriveRecord], layout: BarLayout) -> None:
    """Display every drive card followed by a count."""
    if not records:
        console.print("No drives found.")
        return

    console.print()
    for index, record in enumerate(records, 1):
        for line in render_card(index, record, layout):
            console.print(Text.from_ansi(line), soft_wrap=True)

    count = len(records)
    console.print(f"A total of {count} drive{'s' if count != 1 else ''} found.")


def drives_to_json(records: list[DriveRecord]) -> dict[str, Any]:
    """JSON-ready structure with every drive field except the rendered bar."""
    return {
        "count": len(records),
        "drives": [record.model_dump(mode="json") for record in records],
    }


def show_json(records: list[DriveRecord]) -> None:
    console.print_json(data=drives_to_json(records))
