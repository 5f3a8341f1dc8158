"""CLI interface for drinfo."""

from typing import Optional

import typer

from drinfo.aggregator import sort_drives
from drinfo.display import (
    set_color_enabled,
    setup_logging,
    show_drives,
    show_error,
    show_json,
    show_version,
)
from drinfo.layout import get_terminal_width, plan_layout
from drinfo.models import SortKey
from drinfo.scanner import (
    SMART_TIMEOUT,
    MountTableError,
    SmartctlHealthChecker,
    gvfs_directory,
    scan_drives,
)

# Create Typer app
app = typer.Typer(
    name="drinfo",
    help="Show mounted drives and how full they are",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.command()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Print drives as JSON."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colors and styling."),
    sort: Optional[SortKey] = typer.Option(
        None,
        "--sort",
        "-s",
        case_sensitive=False,
        help="Sort drives by size, usage, mount or name (default: mount table order).",
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Also list mounts that are neither local nor network drives."
    ),
    smart_timeout: float = typer.Option(
        SMART_TIMEOUT,
        "--smart-timeout",
        envvar="DRINFO_SMART_TIMEOUT",
        min=0.1,
        help="Seconds to wait for smartctl per disk.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log skipped mounts and failed lookups."),
) -> None:
    """Show mounted drives with a usage bar for each."""
    set_color_enabled(not no_color)
    setup_logging(verbose)

    # Width is read once; every card in a run shares the same geometry
    layout = plan_layout(get_terminal_width())

    try:
        records = scan_drives(
            layout.bar_length,
            gvfs_dir=gvfs_directory(),
            health_checker=SmartctlHealthChecker(timeout=smart_timeout),
            include_other=show_all,
        )
    except MountTableError as e:
        show_error(str(e))
        raise typer.Exit(1)

    records = sort_drives(records, sort)

    if json_output:
        show_json(records)
    else:
        show_drives(records, layout)


if __name__ == "__main__":
    app()
