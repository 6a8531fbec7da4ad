import pytest
from pydantic import ValidationError

from mockserver_refutil.models import ResponseNode, SchemaNode


class TestSchemaNode:
    def test_ref_alias(self):
        node = SchemaNode.model_validate({"$ref": "#/definitions/Pet"})
        assert node.ref == "#/definitions/Pet"
        assert node.is_alias

    def test_populate_by_name(self):
        assert SchemaNode(ref="#/definitions/Pet") == SchemaNode.model_validate({"$ref": "#/definitions/Pet"})

    def test_extra_keywords_kept(self):
        node = SchemaNode.model_validate({"type": "array", "items": {"$ref": "#/definitions/Pet"}})
        assert not node.is_alias
        assert node.model_extra == {"type": "array", "items": {"$ref": "#/definitions/Pet"}}

    def test_coerce_passes_models_through(self):
        node = SchemaNode(description="x")
        assert SchemaNode.coerce(node) is node

    def test_frozen(self):
        node = SchemaNode(description="x")
        with pytest.raises(ValidationError):
            node.description = "y"

    def test_ref_must_be_string(self):
        with pytest.raises(ValidationError):
            SchemaNode.model_validate({"$ref": 42})


class TestResponseNode:
    def test_swagger2_schema(self):
        response = ResponseNode.model_validate({"description": "ok", "schema": {"type": "string"}})
        assert response.embedded_schema.model_extra == {"type": "string"}
        assert response.is_terminal

    def test_alias_without_schema_is_not_terminal(self):
        response = ResponseNode.model_validate({"$ref": "#/responses/NotFound"})
        assert response.embedded_schema is None
        assert not response.is_terminal

    def test_alias_with_schema_is_terminal(self):
        """An embedded schema ends the response chain even next to a $ref."""
        response = ResponseNode.model_validate({"$ref": "#/responses/NotFound", "schema": {"type": "string"}})
        assert response.is_terminal

    def test_response_without_body_is_terminal(self):
        response = ResponseNode.model_validate({"description": "No Content"})
        assert response.embedded_schema is None
        assert response.is_terminal

    def test_swagger2_schema_wins_over_content(self):
        response = ResponseNode.model_validate(
            {
                "schema": {"description": "v2"},
                "content": {"application/json": {"schema": {"description": "v3"}}},
            }
        )
        assert response.embedded_schema.description == "v2"


class TestDescriptionValues:
    def test_non_string_description_accepted(self):
        assert SchemaNode.model_validate({"description": 2021}).description == 2021
        assert ResponseNode.model_validate({"description": 404}).description == 404
