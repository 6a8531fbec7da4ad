"""Cycle-safe resolution of $ref chains for schemas and responses."""

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from mockserver_refutil.exceptions import MalformedReferenceError, UnresolvablePointerError
from mockserver_refutil.loader import Dereferencer, DocumentLoader
from mockserver_refutil.models import Node, ResolutionResult, ResponseNode, SchemaNode
from mockserver_refutil.plumbing.circular import CycleGuard
from mockserver_refutil.plumbing.reference import canonicalize

logger = logging.getLogger(__name__)

Visited = CycleGuard | Iterable[str] | None

N = TypeVar("N", bound=Node)


class ChainResolver:
    """Follows $ref chains until a terminal node or a cycle boundary is reached."""

    def __init__(self, loader: Dereferencer | None = None):
        self.loader = loader if loader is not None else DocumentLoader()

    def resolve_schema(
        self,
        base_path: str | os.PathLike[str],
        node: SchemaNode | Mapping[str, Any],
        visited: Visited = None,
    ) -> ResolutionResult:
        """Resolve a schema node to the terminal schema its $ref chain ends at.

        Args:
            base_path: Path of the document the node lives in
            node: The starting schema node
            visited: Cycle guard to extend; a fresh one is used when None

        Returns:
            ResolutionResult; ok is False when the chain revisits an identity, in which case
            schema/own_ref describe the last node fetched before the repeat (None if the
            very first hop was already visited)

        Raises:
            RefResolverError: If a reference is malformed or cannot be located
        """
        node = SchemaNode.coerce(node)
        guard = CycleGuard.coerce(visited)

        if not node.is_alias:
            return ResolutionResult(node, None, guard, True)

        identity = canonicalize(base_path, node.ref)
        if not guard.enter(identity):
            logger.debug(f"Schema reference {identity} already visited")
            return ResolutionResult(None, None, guard, False)

        target, document_path = self._fetch(identity, SchemaNode)
        if not target.is_alias:
            return ResolutionResult(target, identity, guard, True)

        result = self.resolve_schema(document_path, target, guard)
        if result.ok or result.own_ref is not None:
            return result
        return ResolutionResult(target, identity, guard, False)

    def resolve_response(
        self,
        base_path: str | os.PathLike[str],
        node: ResponseNode | Mapping[str, Any],
        visited: Visited = None,
    ) -> ResolutionResult:
        """Resolve a response node to the schema embedded in the response its $ref chain ends at.

        Same contract as resolve_schema. own_ref is the identity of the terminal response,
        unless its embedded schema is itself a reference, which is then followed with the
        same guard and reported with the schema's own identity.
        """
        node = ResponseNode.coerce(node)
        guard = CycleGuard.coerce(visited)

        if node.is_terminal:
            return self._embedded_schema(base_path, node, None, guard)

        identity = canonicalize(base_path, node.ref)
        if not guard.enter(identity):
            logger.debug(f"Response reference {identity} already visited")
            return ResolutionResult(None, None, guard, False)

        target, document_path = self._fetch(identity, ResponseNode)
        if target.is_terminal:
            return self._embedded_schema(document_path, target, identity, guard)

        result = self.resolve_response(document_path, target, guard)
        if result.ok or result.own_ref is not None:
            return result
        return ResolutionResult(target.embedded_schema, identity, guard, False)

    def _embedded_schema(
        self,
        base_path: str | os.PathLike[str],
        response: ResponseNode,
        identity: str | None,
        guard: CycleGuard,
    ) -> ResolutionResult:
        schema = response.embedded_schema
        if schema is None or not schema.is_alias:
            return ResolutionResult(schema, identity, guard, True)

        result = self.resolve_schema(base_path, schema, guard)
        if result.ok or result.own_ref is not None:
            return result
        return ResolutionResult(schema, identity, guard, False)

    def _fetch(self, identity: str, model: type[N]) -> tuple[N, Path]:
        raw, document_path = self.loader.dereference(identity)
        if not isinstance(raw, Mapping):
            raise UnresolvablePointerError(f"Reference {identity} does not address an object")
        try:
            return model.model_validate(dict(raw)), document_path
        except ValidationError as e:
            raise MalformedReferenceError(f"Invalid node at {identity}: {e}") from e


def resolve_schema(
    base_path: str | os.PathLike[str],
    node: SchemaNode | Mapping[str, Any],
    visited: Visited = None,
    *,
    loader: Dereferencer | None = None,
) -> ResolutionResult:
    """Resolve a schema $ref chain. See ChainResolver.resolve_schema."""
    return ChainResolver(loader).resolve_schema(base_path, node, visited)


def resolve_response(
    base_path: str | os.PathLike[str],
    node: ResponseNode | Mapping[str, Any],
    visited: Visited = None,
    *,
    loader: Dereferencer | None = None,
) -> ResolutionResult:
    """Resolve a response $ref chain. See ChainResolver.resolve_response."""
    return ChainResolver(loader).resolve_response(base_path, node, visited)
