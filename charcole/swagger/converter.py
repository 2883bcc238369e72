"""
Schema -> OpenAPI component conversion.

Every registered schema is turned into a self-contained OpenAPI 3.0 schema
object: nested definitions are inlined, ``$schema`` is dropped, and the
JSON Schema 2020-12 constructs pydantic emits are rewritten into their
OpenAPI 3.0 spelling.
"""

from typing import Any, Dict, Mapping, Optional

from ..gen_logging import get_logger
from .adapters import SchemaAdapter, adapt

logger = get_logger(__name__)

_DEFINITION_KEYS = ("definitions", "$defs")
_LOCAL_REF_PREFIXES = ("#/$defs/", "#/definitions/")

# Keys whose value maps arbitrary names to sub-schemas
_SCHEMA_MAP_KEYS = ("properties", "patternProperties", "definitions", "$defs")

# Keys whose value is literal data, never a sub-schema
_LITERAL_KEYS = ("default", "example", "examples", "enum", "const", "required")

_NULL_SCHEMA = {"type": "null"}


def extract_body_schema(schema: Any) -> Optional[SchemaAdapter]:
    """
    Return the ``body`` part of a ``{body, query, params}`` request schema.

    Schemas without a ``body`` field come back unchanged (wrapped in their
    adapter). Falsy input yields None.
    """
    if not schema:
        return None

    adapter = adapt(schema)
    try:
        if adapter.has_body_field():
            return adapter.get_body_field()
    except Exception as e:
        logger.debug(f"  [BODY] Falling back to the full schema: {e}")
    return adapter


def convert_to_openapi(schema: Any, name: str) -> Optional[Dict[str, Any]]:
    """
    Convert a schema to an OpenAPI component schema.

    Args:
        schema: pydantic model / type, JSON Schema dict, or SchemaAdapter
        name: Component name, used in log lines and self-references

    Returns:
        The converted schema, or None if ``schema`` is falsy or conversion fails.
    """
    if not schema:
        return None

    try:
        json_schema = adapt(schema).to_json_schema()
        json_schema = _inline_refs(json_schema, name)
        json_schema = _to_openapi3(json_schema)

        json_schema.pop("$schema", None)

        # Recursive schemas come back as a bare $ref into the definitions map
        ref_name = _local_ref_name(json_schema.get("$ref"))
        definitions = json_schema.get("definitions")
        if ref_name and definitions:
            actual = definitions.get(ref_name)
            if actual is not None:
                actual = dict(actual)
                actual.pop("$schema", None)
                return actual

        for key in _DEFINITION_KEYS:
            json_schema.pop(key, None)
        return json_schema
    except Exception as e:
        logger.warning(f'[WARN] Failed to convert schema "{name}": {e}')
        return None


def register_schemas(schemas: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Convert a name -> schema mapping into ``components.schemas`` entries.

    Request schemas shaped as ``{body, query, params}`` are documented by
    their ``body``. Falsy entries are skipped; entries that fail to convert
    are logged and left out, never stored as None. An empty
    ``{}`` result (e.g. ``typing.Any``) is a valid schema and is kept.
    """
    components: Dict[str, Dict[str, Any]] = {}

    for name, schema in schemas.items():
        if not schema:
            continue

        actual_schema = extract_body_schema(schema) or schema
        converted = convert_to_openapi(actual_schema, name)
        if converted is not None:
            components[name] = converted
            logger.debug(f"  [SCHEMA] Registered {name}")

    return components


def _local_ref_name(ref: Any) -> Optional[str]:
    if isinstance(ref, str) and ref.startswith(_LOCAL_REF_PREFIXES):
        return ref.rsplit("/", 1)[-1]
    return None


def _inline_refs(json_schema: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Inline every local ``$ref``. Definitions are normalised under ``definitions``.

    A top-level bare ``$ref`` is kept (the caller dereferences it one level)
    and references back to that root definition point at the component
    itself. Other cyclic references become ``{}``. Discriminator ``mapping``
    targets are dropped since the union members they name are inlined.
    """
    definitions: Dict[str, Any] = {}
    for key in _DEFINITION_KEYS:
        definitions.update(json_schema.get(key) or {})
    if not definitions:
        return json_schema

    root_name = _local_ref_name(json_schema.get("$ref"))

    def resolve(node, stack):
        if isinstance(node, list):
            return [resolve(item, stack) for item in node]
        if not isinstance(node, dict):
            return node

        ref_name = _local_ref_name(node.get("$ref"))
        if ref_name is not None and ref_name in definitions:
            if ref_name == root_name:
                return {"$ref": f"#/components/schemas/{name}"}
            if ref_name in stack:
                # Cycle below the root: becomes an unconstrained schema
                return {}
            siblings = {k: resolve(v, stack) for k, v in node.items() if k != "$ref"}
            return {**resolve(definitions[ref_name], stack | {ref_name}), **siblings}

        resolved = {}
        for key, value in node.items():
            if key in _LITERAL_KEYS:
                resolved[key] = value
            elif key == "discriminator" and isinstance(value, dict):
                resolved[key] = {k: v for k, v in value.items() if k != "mapping"}
            elif key in _SCHEMA_MAP_KEYS and isinstance(value, dict):
                resolved[key] = {k: resolve(v, stack) for k, v in value.items()}
            else:
                resolved[key] = resolve(value, stack)
        return resolved

    inlined = {
        key: resolve(value, frozenset())
        for key, value in json_schema.items()
        if key not in _DEFINITION_KEYS and key != "$ref"
    }
    if root_name:
        inlined["$ref"] = json_schema["$ref"]
    inlined["definitions"] = {
        key: resolve(value, frozenset({key})) for key, value in definitions.items()
    }
    return inlined


def _to_openapi3(node: Any) -> Any:
    """Rewrite JSON Schema 2020-12 constructs into OpenAPI 3.0 ones."""
    if isinstance(node, list):
        return [_to_openapi3(item) for item in node]
    if not isinstance(node, dict):
        return node

    out: Dict[str, Any] = {}
    for key, value in node.items():
        if key in _LITERAL_KEYS:
            out[key] = value
        elif key in _SCHEMA_MAP_KEYS and isinstance(value, dict):
            out[key] = {k: _to_openapi3(v) for k, v in value.items()}
        else:
            out[key] = _to_openapi3(value)

    if "const" in out:
        const = out.pop("const")
        out.setdefault("enum", [const])

    examples = out.get("examples")
    if isinstance(examples, list):
        out.pop("examples")
        if examples:
            out.setdefault("example", examples[0])

    types = out.get("type")
    if isinstance(types, list) and "null" in types:
        remaining = [t for t in types if t != "null"]
        out["nullable"] = True
        if len(remaining) == 1:
            out["type"] = remaining[0]
        else:
            out.pop("type")
            out["anyOf"] = [{"type": t} for t in remaining]

    any_of = out.get("anyOf")
    if isinstance(any_of, list) and _NULL_SCHEMA in any_of:
        remaining = [s for s in any_of if s != _NULL_SCHEMA]
        out.pop("anyOf")
        out["nullable"] = True
        if len(remaining) == 1 and isinstance(remaining[0], dict):
            out = {**remaining[0], **out}
        elif remaining:
            out["anyOf"] = remaining

    return out
