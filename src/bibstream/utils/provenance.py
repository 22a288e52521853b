"""Digests and timestamps recorded about parsed sources and audit events."""

import hashlib
from datetime import UTC, datetime
from pathlib import Path

__all__ = ["source_digest", "iso_timestamp", "source_mtime"]


def source_digest(data: bytes) -> str:
    """Fingerprint the raw bytes of a ``.bib`` source.

    Parameters
    ----------
    data : bytes
        Source bytes, before decoding.

    Returns
    -------
    str
        ``sha256:<hex>``.
    """
    return f"sha256:{hashlib.sha256(data).hexdigest()}"


def iso_timestamp(moment: datetime | None = None, *, seconds_only: bool = False) -> str:
    """Render a UTC instant as ISO8601 with a ``Z`` suffix.

    Parameters
    ----------
    moment : datetime | None, optional
        Aware datetime to render, by default now.
    seconds_only : bool, optional
        Drop microseconds, by default False.

    Returns
    -------
    str
        e.g. ``2026-02-03T12:34:56.123456Z``.
    """
    moment = (moment or datetime.now(UTC)).astimezone(UTC)
    if seconds_only:
        moment = moment.replace(microsecond=0)
    return moment.isoformat().replace("+00:00", "Z")


def source_mtime(path: Path) -> str:
    """Modification time of ``path`` to the second, or "" if it cannot be read."""
    try:
        mtime = datetime.fromtimestamp(path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return iso_timestamp(mtime, seconds_only=True)
