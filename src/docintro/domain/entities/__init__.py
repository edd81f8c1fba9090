"""
Domain entities package.
"""

from .doctor import Doctor, EDITABLE_FIELDS

__all__ = [
    "Doctor",
    "EDITABLE_FIELDS",
]
