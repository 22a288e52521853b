"""Helper utilities for audit logging."""

import importlib.metadata
import secrets

from bibstream.utils import iso_timestamp

__all__ = ["generate_run_id", "get_package_version"]


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    return f"{iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Get bibstream package version.

    Returns
    -------
    str
        Package version or "unknown".
    """
    try:
        return importlib.metadata.version("bibstream")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
