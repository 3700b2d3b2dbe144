"""Legacy Firestore document store boundary."""

from stablebook.boundary.firestore.document_store import (
    COLLECTIONS,
    TENANT_FIELD,
    FirestoreDocumentStore,
)

__all__ = ["COLLECTIONS", "TENANT_FIELD", "FirestoreDocumentStore"]
