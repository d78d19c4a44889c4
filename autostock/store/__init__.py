"""Fachadas de almacenamiento / Record and blob store facades."""

from autostock.store.blobs import BlobStore, BlobStoreError, LocalBlobStore
from autostock.store.client import StoreClient, build_client
from autostock.store.records import RecordStore, SqlRecordStore, StoreError

__all__ = [
    "BlobStore",
    "BlobStoreError",
    "LocalBlobStore",
    "RecordStore",
    "SqlRecordStore",
    "StoreClient",
    "StoreError",
    "build_client",
]
