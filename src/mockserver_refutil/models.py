from collections.abc import Mapping
from typing import Any, NamedTuple, Self

from pydantic import BaseModel, ConfigDict, Field

from mockserver_refutil.plumbing.circular import CycleGuard

JSON_MEDIA_TYPE = "application/json"


class Node(BaseModel):
    """A document node that may point elsewhere via $ref and may carry its own content as well."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    ref: str | None = Field(default=None, alias="$ref", description="Reference to the node's real definition.")
    description: Any = None

    @property
    def is_alias(self) -> bool:
        return self.ref is not None

    @classmethod
    def coerce(cls, node: "Self | Mapping[str, Any]") -> Self:
        if isinstance(node, cls):
            return node
        return cls.model_validate(dict(node))


class SchemaNode(Node):
    """Schema object; keywords other than $ref and description are kept as extra fields."""


class MediaType(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    schema_: SchemaNode | None = Field(default=None, alias="schema")


class ResponseNode(Node):
    """Response object in either Swagger 2 (schema) or OpenAPI 3 (content) shape."""

    schema_: SchemaNode | None = Field(default=None, alias="schema")
    content: dict[str, MediaType] | None = None

    @property
    def embedded_schema(self) -> SchemaNode | None:
        if self.schema_ is not None:
            return self.schema_
        if not self.content:
            return None
        preferred = self.content.get(JSON_MEDIA_TYPE)
        if preferred is not None and preferred.schema_ is not None:
            return preferred.schema_
        return next((media.schema_ for media in self.content.values() if media.schema_ is not None), None)

    @property
    def is_terminal(self) -> bool:
        return self.embedded_schema is not None or not self.is_alias


class ResolutionResult(NamedTuple):
    """Outcome of following one $ref chain.

    ok is False when the chain ran into an identity that was already visited. In that
    case schema and own_ref are either both None (the first hop was already visited) or
    describe the last node fetched before the cycle boundary.
    """

    schema: SchemaNode | None
    own_ref: str | None
    visited: CycleGuard
    ok: bool
