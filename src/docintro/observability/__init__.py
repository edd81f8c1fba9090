"""Observability helpers (audit trail)."""

from .audit import audit_log_event

__all__ = ["audit_log_event"]
