"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle for efficient I/O.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bibstream.audit.helpers import get_package_version
from bibstream.audit.models import LogEvent
from bibstream.utils import iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current stage context."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        file: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "file_parsed").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        file : str | None, optional
            Source file the event refers to.
        """
        log_event = LogEvent(
            ts=iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            file=file,
        )

        json.dump(asdict(log_event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event with the package version."""
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "version": get_package_version(),
            },
        )

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        entries_parsed: int | None = None,
    ) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success", "failed").
        duration_seconds : float
            Total execution time in seconds.
        entries_parsed : int | None, optional
            Total entries produced.
        """
        data: dict[str, Any] = {
            "status": status,
            "duration_seconds": duration_seconds,
        }
        if entries_parsed is not None:
            data["entries_parsed"] = entries_parsed

        self.event("run_finished", data=data)

    def file_parsed(
        self,
        file: str,
        entries: int,
        encoding: str,
        digest: str,
    ) -> None:
        """Log file_parsed event.

        Parameters
        ----------
        file : str
            Path of the parsed file.
        entries : int
            Number of entries produced.
        encoding : str
            Encoding used to decode the file.
        digest : str
            SHA-256 digest of the file bytes.
        """
        self.event(
            "file_parsed",
            data={"entries": entries, "encoding": encoding, "digest": digest},
            file=file,
        )

    def error(
        self,
        exception_class: str,
        message: str,
        file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        file : str | None, optional
            File where the error occurred.
        line : int | None, optional
            1-based line of a syntax error.
        column : int | None, optional
            1-based column of a syntax error.
        """
        data: dict[str, Any] = {
            "exception_class": exception_class,
            "message": message,
        }
        if line is not None:
            data["line"] = line
        if column is not None:
            data["column"] = column

        self.event("error", data=data, level="ERROR", file=file)
