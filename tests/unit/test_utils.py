"""Tests for provenance utilities."""

import hashlib
import os
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from bibstream.utils import iso_timestamp, source_digest, source_mtime


@pytest.mark.unit
def test_source_digest_prefix_and_value() -> None:
    assert source_digest(b"@misc{k}") == "sha256:" + hashlib.sha256(b"@misc{k}").hexdigest()


@pytest.mark.unit
def test_iso_timestamp_converts_to_utc() -> None:
    moment = datetime(2026, 2, 3, 14, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))

    assert iso_timestamp(moment) == "2026-02-03T12:00:00.123456Z"
    assert iso_timestamp(moment, seconds_only=True) == "2026-02-03T12:00:00Z"


@pytest.mark.unit
def test_iso_timestamp_defaults_to_now() -> None:
    assert iso_timestamp().endswith("Z")


@pytest.mark.unit
def test_source_mtime(tmp_path: Path) -> None:
    path = tmp_path / "refs.bib"
    path.write_text("@misc{k}")
    stamp = datetime(2024, 1, 30, 12, 0, tzinfo=UTC).timestamp()
    os.utime(path, (stamp, stamp))

    assert source_mtime(path) == "2024-01-30T12:00:00Z"
    assert source_mtime(tmp_path / "missing.bib") == ""
