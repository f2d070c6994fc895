from api_doc_pipeline.document.base import Operation, Param
from api_doc_pipeline.routing.base import VersionDescriptor
from api_doc_pipeline.transforms.operations import (
    API_VERSION_DESCRIPTION,
    apply_api_version_parameter,
    apply_deprecated_status,
)
from api_doc_pipeline.transforms.schemas import apply_schema_nullability
from api_doc_pipeline.values import PrimitiveKind

CURRENT = VersionDescriptor(name="v2", version="2.0")
DEPRECATED = VersionDescriptor(name="v1", version="1.0", deprecated=True)


class TestDeprecatedStatus:
    def test_deprecated_version_marks_operation(self):
        op = Operation(method="GET", path="/items")
        assert apply_deprecated_status(op, DEPRECATED).deprecated is True

    def test_deprecated_operation_stays_deprecated(self):
        op = Operation(method="GET", path="/items", deprecated=True)
        assert apply_deprecated_status(op, CURRENT).deprecated is True

    def test_current_operation_in_current_version(self):
        op = Operation(method="GET", path="/items")
        assert apply_deprecated_status(op, CURRENT).deprecated is False


class TestApiVersionParameter:
    def test_parameter_described(self):
        op = Operation(
            method="GET",
            path="/items",
            parameters=[
                Param(name="api-version", location="query", required=True),
                Param(name="pageSize", location="query", description="Page size"),
            ],
        )
        result = apply_api_version_parameter(op, DEPRECATED)
        version_param, page_size = result.parameters
        assert version_param.description == API_VERSION_DESCRIPTION
        assert version_param.example.kind is PrimitiveKind.STRING
        assert version_param.example.value == "1.0"
        assert page_size == op.parameters[1]

    def test_without_parameter_unchanged(self):
        op = Operation(method="GET", path="/items")
        assert apply_api_version_parameter(op, CURRENT) is op


class TestSchemaNullability:
    def test_optional_properties_not_nullable(self):
        schemas = {
            "CatalogItem": {
                "type": "object",
                "required": ["id"],
                "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
            }
        }
        result = apply_schema_nullability(schemas)
        props = result["CatalogItem"]["properties"]
        assert props["name"]["nullable"] is False
        assert "nullable" not in props["id"]

    def test_input_not_mutated(self):
        schemas = {"Item": {"properties": {"name": {"type": "string"}}}}
        apply_schema_nullability(schemas)
        assert "nullable" not in schemas["Item"]["properties"]["name"]

    def test_schema_without_properties(self):
        schemas = {"Id": {"type": "integer"}}
        assert apply_schema_nullability(schemas) == schemas
