from mockserver_refutil.exceptions import (
    MalformedReferenceError,
    RefResolverError,
    UnresolvableDocumentError,
    UnresolvablePointerError,
)
from mockserver_refutil.loader import Dereferencer, DocumentLoader
from mockserver_refutil.models import ResolutionResult, ResponseNode, SchemaNode
from mockserver_refutil.plumbing.circular import CycleGuard
from mockserver_refutil.plumbing.reference import canonicalize
from mockserver_refutil.resolver import ChainResolver, resolve_response, resolve_schema

__all__ = [
    "ChainResolver",
    "CycleGuard",
    "Dereferencer",
    "DocumentLoader",
    "MalformedReferenceError",
    "RefResolverError",
    "ResolutionResult",
    "ResponseNode",
    "SchemaNode",
    "UnresolvableDocumentError",
    "UnresolvablePointerError",
    "canonicalize",
    "resolve_response",
    "resolve_schema",
]
