"""Common utility functions for bibstream."""

from bibstream.utils.provenance import iso_timestamp, source_digest, source_mtime

__all__ = [
    "iso_timestamp",
    "source_digest",
    "source_mtime",
]
