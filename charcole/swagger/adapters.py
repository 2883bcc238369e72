"""
Schema adapters used by the registry.

A schema handed to ``register_schemas`` can be a pydantic model, any type a
pydantic ``TypeAdapter`` understands, a plain JSON Schema dict, or an object
implementing ``SchemaAdapter`` directly. The registry only talks to the
adapter interface, so it never reaches into a library's internals to find
the ``body`` of a ``{body, query, params}`` request schema.
"""

from typing import Any, Dict, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter


@runtime_checkable
class SchemaAdapter(Protocol):
    def has_body_field(self) -> bool: ...

    def get_body_field(self) -> "SchemaAdapter": ...

    def to_json_schema(self) -> Dict[str, Any]: ...


class PydanticAdapter:
    """Adapter over a pydantic model class or any TypeAdapter-compatible type."""

    def __init__(self, schema: Any):
        self.schema = schema

    def _is_model(self) -> bool:
        try:
            return isinstance(self.schema, type) and issubclass(self.schema, BaseModel)
        except TypeError:
            # Parametrised generics pass the isinstance check on some interpreters
            return False

    def has_body_field(self) -> bool:
        return self._is_model() and "body" in self.schema.model_fields

    def get_body_field(self) -> "PydanticAdapter":
        if not self.has_body_field():
            raise LookupError(f"{self.schema!r} has no 'body' field")
        return PydanticAdapter(self.schema.model_fields["body"].annotation)

    def to_json_schema(self) -> Dict[str, Any]:
        if self._is_model():
            return self.schema.model_json_schema(mode="validation")
        return TypeAdapter(self.schema).json_schema(mode="validation")

    def __repr__(self) -> str:
        return f"PydanticAdapter({self.schema!r})"


class JsonSchemaAdapter:
    """Adapter over an already-built JSON Schema dict."""

    def __init__(self, schema: Dict[str, Any]):
        self.schema = schema

    def has_body_field(self) -> bool:
        properties = self.schema.get("properties")
        return isinstance(properties, dict) and isinstance(properties.get("body"), dict)

    def get_body_field(self) -> "JsonSchemaAdapter":
        if not self.has_body_field():
            raise LookupError("JSON Schema has no 'body' property")
        body = dict(self.schema["properties"]["body"])
        # Keep shared definitions reachable from the extracted body
        for key in ("$defs", "definitions"):
            if key in self.schema and key not in body:
                body[key] = self.schema[key]
        return JsonSchemaAdapter(body)

    def to_json_schema(self) -> Dict[str, Any]:
        return dict(self.schema)


def adapt(schema: Any) -> SchemaAdapter:
    """Wrap ``schema`` in the adapter that knows how to introspect it."""
    if isinstance(schema, SchemaAdapter):
        return schema
    if isinstance(schema, dict):
        return JsonSchemaAdapter(schema)
    if isinstance(schema, BaseModel):
        return PydanticAdapter(type(schema))
    return PydanticAdapter(schema)
