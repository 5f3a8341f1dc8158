"""Ordering of the collected drive records."""

from typing import Optional

from drinfo.models import DriveRecord, SortKey


def sort_drives(records: list[DriveRecord], key: Optional[SortKey] = None) -> list[DriveRecord]:
    """
    Return the drives in presentation order.

    The sort is stable, so drives that compare equal keep their discovery
    order. Without a key the discovery order is kept as is.

    Args:
        records: Drive records in discovery order
        key: Sort criterion, or None for discovery order

    Returns:
        A new list; the input is not modified
    """
    if key is None:
        return list(records)
    if key == SortKey.SIZE:
        return sorted(records, key=lambda r: r.total_bytes, reverse=True)
    if key == SortKey.USAGE:
        return sorted(records, key=lambda r: r.usage_percent, reverse=True)
    if key == SortKey.MOUNT:
        return sorted(records, key=lambda r: r.mount_point)
    if key == SortKey.NAME:
        return sorted(records, key=lambda r: r.device_path)
    raise ValueError(f"Unknown sort key: {key}")
