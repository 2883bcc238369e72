"""
Assemble the OpenAPI document and serve it through Swagger UI on a FastAPI app.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import get_settings
from ..gen_logging import get_logger
from .annotations import collect_annotations, default_api_patterns
from .converter import register_schemas
from .responses import get_common_responses

logger = get_logger(__name__)

OPENAPI_VERSION = "3.0.0"

BEARER_AUTH_SCHEME = {
    "type": "http",
    "scheme": "bearer",
    "bearerFormat": "JWT",
    "description": "Enter your JWT token in the format: your-token-here",
}


class SwaggerServer(BaseModel):
    url: str
    description: str = ""


class SwaggerOptions(BaseModel):
    title: str = "Charcole API"
    version: str = "1.0.0"
    description: str = "Auto-generated API documentation"
    path: str = "/api-docs"
    servers: List[SwaggerServer] = Field(
        default_factory=lambda: [SwaggerServer(url="http://localhost:3000", description="Local server")]
    )
    # name -> pydantic model / type / JSON Schema dict
    schemas: Dict[str, Any] = Field(default_factory=dict)
    include_common_responses: bool = True
    custom_responses: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    # Glob patterns scanned for @swagger blocks; None scans src/modules and src/routes
    apis: Optional[List[str]] = None


def _resolve_options(options: Union[SwaggerOptions, Dict[str, Any], None], overrides: Dict[str, Any]) -> SwaggerOptions:
    if options is None:
        return SwaggerOptions(**overrides)
    if isinstance(options, SwaggerOptions):
        if not overrides:
            return options
        return SwaggerOptions.model_validate({**dict(options), **overrides})
    return SwaggerOptions(**{**options, **overrides})


def build_openapi_document(config: SwaggerOptions, root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Build the OpenAPI document described by ``config``.

    Args:
        config: Swagger options
        root: Project root used for the default annotation globs (cwd if None)

    Returns:
        The OpenAPI 3.0 document as a plain dict
    """
    components: Dict[str, Any] = {
        "securitySchemes": {"bearerAuth": dict(BEARER_AUTH_SCHEME)},
        "schemas": {},
        "responses": {},
    }

    if config.schemas:
        try:
            registered = register_schemas(config.schemas)
            components["schemas"] = dict(registered)
            logger.info(f"[DOCS] Auto-registered {len(registered)} schemas")
        except Exception as e:
            logger.warning(f"[WARN] Failed to register some schemas: {e}")

    common = get_common_responses() if config.include_common_responses else {}
    components["responses"] = {**common, **config.custom_responses}

    document: Dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": config.title,
            "version": config.version,
            "description": config.description,
        },
        "servers": [server.model_dump() for server in config.servers],
        "components": components,
        "paths": {},
    }

    patterns = config.apis if config.apis is not None else default_api_patterns(root or Path.cwd())
    annotations = collect_annotations(patterns)

    document["paths"] = annotations["paths"]
    for section, entries in annotations["components"].items():
        components.setdefault(section, {}).update(entries)
    if annotations["tags"]:
        document["tags"] = annotations["tags"]

    return document


def mount_swagger_ui(app: FastAPI, document: Dict[str, Any], path: str, title: str) -> None:
    """Serve ``document`` at ``{path}/openapi.json`` and Swagger UI at ``path``."""
    path = "/" + path.strip("/")
    openapi_url = f"{path.rstrip('/')}/openapi.json"

    async def openapi_document():
        return JSONResponse(document)

    async def swagger_ui():
        return get_swagger_ui_html(openapi_url=openapi_url, title=f"{title} - Swagger UI")

    app.add_api_route(openapi_url, openapi_document, methods=["GET"], include_in_schema=False)
    app.add_api_route(path, swagger_ui, methods=["GET"], include_in_schema=False)


def setup_swagger(
    app: FastAPI,
    options: Union[SwaggerOptions, Dict[str, Any], None] = None,
    root: Optional[Path] = None,
    **overrides,
) -> Dict[str, Any]:
    """
    Build the API document and mount Swagger UI on ``app``.

    Options can be passed as a SwaggerOptions, a dict, keyword arguments, or
    a mix (keywords win). Schema registration problems never prevent the UI
    from being mounted.

    Returns:
        The assembled OpenAPI document
    """
    config = _resolve_options(options, overrides)
    document = build_openapi_document(config, root=root)
    mount_swagger_ui(app, document, config.path, config.title)

    port = get_settings().port
    logger.info(f"[DOCS] Swagger UI available at http://localhost:{port}{config.path}")
    return document
