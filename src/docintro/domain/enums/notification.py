"""
Recording invite delivery status values.
"""

from enum import Enum


class NotificationStatus(str, Enum):
    """Outcome of the recording-link email for a doctor."""
    PENDING = "pending"  # Scheduled, not attempted yet
    SENT = "sent"
    FAILED = "failed"    # All attempts exhausted
    SKIPPED = "skipped"  # Email delivery not configured
