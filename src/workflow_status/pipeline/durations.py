from __future__ import annotations

from datetime import datetime

UNITS = (("d", 86400), ("h", 3600), ("m", 60))


def compute_duration(start: datetime | None, end: datetime | None) -> str:
    """Format the time between two instants as ``1d 2h 3m 4s``.

    Leading units are dropped while zero; seconds are always shown.
    """
    if start is None or end is None:
        return "0s"

    remaining = max(0, int((end - start).total_seconds()))
    parts: list[str] = []
    for suffix, size in UNITS:
        value, remaining = divmod(remaining, size)
        if value > 0:
            parts.append(f"{value}{suffix}")
    parts.append(f"{remaining}s")
    return " ".join(parts)
