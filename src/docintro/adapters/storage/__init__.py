"""
Storage adapters for DocIntro.

This module contains the local chunk/video store and the Azure Blob Storage
hosting service for finalized videos.
"""

from .azure_blob_service import AzureVideoHostingService
from .local_video_store import LocalVideoStore, MergeResult, StoredChunk

__all__ = [
    "AzureVideoHostingService",
    "LocalVideoStore",
    "MergeResult",
    "StoredChunk",
]
