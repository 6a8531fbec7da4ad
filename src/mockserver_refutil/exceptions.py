"""Exception classes for mockserver-refutil."""


class RefResolverError(Exception):
    """Base exception for all reference resolution errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedReferenceError(RefResolverError):
    """A $ref value that cannot be split into a document and a pointer."""


class UnresolvableDocumentError(RefResolverError):
    """The referenced document cannot be located, read or parsed."""


class UnresolvablePointerError(RefResolverError):
    """The document exists but the pointer does not address a node in it."""
