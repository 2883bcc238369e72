"""
OpenAPI documentation helpers: schema registration, common responses and
Swagger UI mounting for FastAPI apps.
"""

from .adapters import JsonSchemaAdapter, PydanticAdapter, SchemaAdapter, adapt
from .converter import convert_to_openapi, extract_body_schema, register_schemas
from .docs import create_swagger_doc, detect_security, endpoint
from .responses import get_common_responses
from .ui import SwaggerOptions, SwaggerServer, build_openapi_document, setup_swagger

__all__ = [
    "JsonSchemaAdapter",
    "PydanticAdapter",
    "SchemaAdapter",
    "SwaggerOptions",
    "SwaggerServer",
    "adapt",
    "build_openapi_document",
    "convert_to_openapi",
    "create_swagger_doc",
    "detect_security",
    "endpoint",
    "extract_body_schema",
    "get_common_responses",
    "register_schemas",
    "setup_swagger",
]
