"""
Helpers for writing endpoint documentation by hand.

``create_swagger_doc`` renders an ``@swagger`` comment block that the
annotation scanner picks up; ``endpoint`` builds the same information as a
ready-made OpenAPI path object.
"""

from typing import Any, Dict, List, Optional

_AUTH_MARKERS = ("auth", "Auth", "requireAuth", "authenticate", "jwt", "JWT")
_BODY_METHODS = ("post", "put", "patch")


def detect_security(dependencies) -> List[Dict[str, list]]:
    """
    Infer security requirements from a route's dependency / middleware chain.

    Any callable whose name looks like an auth guard marks the route as
    requiring a bearer token.
    """
    if not isinstance(dependencies, (list, tuple)):
        return []

    for dependency in dependencies:
        name = getattr(dependency, "__name__", "") or ""
        if any(marker in name for marker in _AUTH_MARKERS):
            return [{"bearerAuth": []}]
    return []


def create_swagger_doc(
    path: str,
    method: str = "get",
    summary: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    request_schema: Optional[str] = None,
    response_schema_name: Optional[str] = None,
    security: bool = False,
    parameters: Optional[List[Dict[str, Any]]] = None,
) -> str:
    """
    Render a JSDoc-style ``@swagger`` block for one operation.

    Examples:
        >>> print(create_swagger_doc("/api/health", summary="Health check"))
        /**
         * @swagger
         * /api/health:
         *   get:
         *     summary: Health check
         *     responses:
         *       200:
         *         description: Success
         */
    """
    method = method.lower()
    lines = ["@swagger", f"{path}:", f"  {method}:"]

    if summary:
        lines.append(f"    summary: {summary}")
    if description:
        lines.append(f"    description: {description}")

    if tags:
        lines.append("    tags:")
        lines.extend(f"      - {tag}" for tag in tags)

    if security:
        lines.append("    security:")
        lines.append("      - bearerAuth: []")

    if parameters:
        lines.append("    parameters:")
        for param in parameters:
            lines.append(f"      - in: {param['in']}")
            lines.append(f"        name: {param['name']}")
            if param.get("required"):
                lines.append("        required: true")
            lines.append("        schema:")
            lines.append(f"          type: {param.get('type') or 'string'}")
            if param.get("description"):
                lines.append(f"        description: {param['description']}")

    if request_schema and method in _BODY_METHODS:
        lines.extend([
            "    requestBody:",
            "      required: true",
            "      content:",
            "        application/json:",
            "          schema:",
            f"            $ref: '#/components/schemas/{request_schema}'",
        ])

    lines.append("    responses:")
    lines.append("      200:")
    if response_schema_name:
        lines.append(f"        $ref: '#/components/responses/{response_schema_name}'")
    else:
        lines.append("        description: Success")

    if method in _BODY_METHODS:
        lines.append("      400:")
        lines.append("        $ref: '#/components/responses/ValidationError'")

    if security:
        lines.append("      401:")
        lines.append("        $ref: '#/components/responses/Unauthorized'")

    body = "\n".join(f" * {line}" for line in lines)
    return f"/**\n{body}\n */"


def endpoint(
    method: str,
    path: str,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    schema: Optional[str] = None,
    response_schema: Optional[str] = None,
    security: bool = False,
    params: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Dict[str, Any]]:
    """Build ``{path: {method: operation}}`` for direct merging into ``paths``."""
    method = method.lower()
    operation: Dict[str, Any] = {
        "summary": summary,
        "description": description,
        "tags": list(tags or []),
    }

    if security:
        operation["security"] = [{"bearerAuth": []}]

    if params:
        operation["parameters"] = list(params)

    if schema and method in _BODY_METHODS:
        operation["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {"$ref": f"#/components/schemas/{schema}"},
                },
            },
        }

    operation["responses"] = {
        "200": (
            {"$ref": f"#/components/responses/{response_schema}"}
            if response_schema
            else {"description": "Success"}
        ),
    }

    if method in _BODY_METHODS:
        operation["responses"]["400"] = {"$ref": "#/components/responses/ValidationError"}

    if security:
        operation["responses"]["401"] = {"$ref": "#/components/responses/Unauthorized"}

    return {path: {method: operation}}
