"""
Audit hook for destructive operations. Every service delete calls it with the loaded row
before removing it, so the last known state of the row ends up in the audit log.
"""

import logging
from typing import Any, Dict

from sqlalchemy import inspect

audit_logger = logging.getLogger("app.audit")


def _snapshot(obj: Any) -> Dict[str, Any]:
    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


def log_deletion(entity_type: str, obj: Any) -> None:
    """Write one audit entry for a row that is about to be deleted. Caller deletes and commits."""
    audit_logger.info("DELETE %s id=%s snapshot=%s", entity_type, obj.id, _snapshot(obj))
