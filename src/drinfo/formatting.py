"""Human-readable size and percentage formatting."""

UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_bytes(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units, capped at TB)."""
    size = float(size_bytes)
    unit_index = 0

    while size >= 1024.0 and unit_index < len(UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size:.0f} {UNITS[unit_index]}"
    return f"{size:.2f} {UNITS[unit_index]}"


def format_percent(percent: float) -> str:
    """Format a percentage with one decimal place."""
    return f"{percent:.1f}%"


def calculate_usage_percent(total: int, available: int) -> float:
    """Percentage of total that is not available. 0 for an empty total."""
    if total == 0:
        return 0.0
    used = max(total - available, 0)
    return min((used / total) * 100.0, 100.0)
