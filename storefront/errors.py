"""Exceptions shared by the catalog core, the document store and the routes."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class InvalidQueryError(StorefrontError, TypeError):
    """A catalog or relevance call received input of the wrong type."""


class DocumentNotFoundError(StorefrontError):
    """The requested document does not exist in its collection."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"{collection} document {document_id!r} not found")
        self.collection = collection
        self.document_id = document_id


class DuplicateDocumentError(StorefrontError):
    """A unique field value is already taken by another document."""

    def __init__(self, collection: str, field: str, value: str) -> None:
        super().__init__(f"{collection} with {field}={value!r} already exists")
        self.collection = collection
        self.field = field
        self.value = value
