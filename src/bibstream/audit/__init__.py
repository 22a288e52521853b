"""Audit logging for bibstream runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from bibstream.audit.helpers import generate_run_id, get_package_version
from bibstream.audit.logger import AuditLogger

__all__ = [
    "AuditLogger",
    "generate_run_id",
    "get_package_version",
]
