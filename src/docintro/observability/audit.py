"""Audit logging utilities.

Structured audit events are written through the standard logger on
``docintro.audit`` as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


logger = logging.getLogger("docintro.audit")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def audit_log_event(
    *,
    event: str,
    doctor_id: Optional[str] = None,
    video_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    record = {
        "ts": _now_iso(),
        "event": event,
        "doctor_id": doctor_id,
        "video_id": video_id,
        "payload": payload or {},
    }
    logger.info("AUDIT %s", json.dumps(record, ensure_ascii=False, default=str))
