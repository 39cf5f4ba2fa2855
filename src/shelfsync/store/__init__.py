# ABOUTME: Remote store package: the RecordStore contract and its HTTP implementation.
# ABOUTME: Re-exports the client classes and the store error taxonomy.

from shelfsync.errors import NotFoundError, StoreError, TransportError, ValidationError
from shelfsync.store.client import HttpRecordStore, RecordStore
from shelfsync.store.http import HttpClient, ShelfsyncHttpClient

__all__ = [
    "HttpClient",
    "HttpRecordStore",
    "NotFoundError",
    "RecordStore",
    "ShelfsyncHttpClient",
    "StoreError",
    "TransportError",
    "ValidationError",
]
