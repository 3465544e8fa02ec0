"""Firebase Realtime Database and Auth integration (REST, no firebase-admin)."""

from pindown.infrastructure.firebase.client import (
    build_document_store,
    build_identity_verifier,
)
from pindown.infrastructure.firebase.document_store import DocumentStore

__all__ = [
    "DocumentStore",
    "build_document_store",
    "build_identity_verifier",
]
