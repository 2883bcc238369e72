"""
Pytest configuration and shared fixtures for the charcole test suite.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from charcole import THIS_DIR as PKG_DIR


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def package_dir():
    """Return the charcole package directory (holds base/ and templates/)."""
    return PKG_DIR


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated project output."""
    temp_dir = tempfile.mkdtemp(prefix="charcole_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def _reset_charcole_logger():
    """The CLI detaches the charcole logger from the root; undo that so caplog works."""
    yield
    root = logging.getLogger("charcole")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def write_file(temp_output_dir):
    """Factory fixture writing text (or JSON for dicts) under the temp dir."""
    def _write(relative: str, content) -> Path:
        path = temp_output_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def template_root(write_file, temp_output_dir):
    """
    A miniature template root with one language ("ts") laid out like the
    packaged one: base/ts (copied) and templates/ts (rendered).
    """
    write_file("tpl/base/ts/basePackage.json", {
        "name": "charcole-app",
        "version": "1.0.0",
        "dependencies": {"express": "^4.19.2", "zod": "^3.23.8"},
        "devDependencies": {"typescript": "^5.5.0"},
        "scripts": {"dev": "tsx watch src/server.ts"},
    })
    write_file("tpl/base/ts/env.example", "PORT=3000\n")
    write_file("tpl/base/ts/gitignore", "node_modules/\n")
    write_file("tpl/base/ts/src/server.ts", "import './app.js';\n")
    write_file("tpl/base/ts/src/modules/health/controller.ts", "export const ok = 1;\n")
    write_file("tpl/base/ts/src/modules/auth/package.json", {
        "dependencies": {"jsonwebtoken": "^9.0.2", "zod": "^3.24.0"},
        "scripts": {"auth:seed": "node seed.js"},
    })
    write_file("tpl/base/ts/src/modules/auth/auth.service.ts", "export const AuthService = {};\n")
    write_file("tpl/base/ts/src/modules/auth/nested/tokens.ts", "export const TTL = '7d';\n")
    write_file("tpl/base/ts/src/modules/swagger/package.json", {
        "dependencies": {"@charcole/swagger": "^1.0.0"},
    })
    write_file("tpl/base/ts/src/modules/swagger/setup.ts", "export {};\n")
    write_file(
        "tpl/templates/ts/src/app.ts.jinja",
        "{% if swagger %}import { setupSwagger } from '@charcole/swagger';\n{% endif %}"
        "export const name = '{{ project_name }}';\n"
        "{% if auth %}import './modules/auth/auth.service.js';\n{% endif %}",
    )
    write_file(
        "tpl/templates/ts/src/config/swagger.config.ts.jinja",
        "{% if swagger %}export default { path: '/api-docs' };\n{% endif %}",
    )
    return temp_output_dir / "tpl"


# Schemas shared by the swagger tests

class Address(BaseModel):
    street: str
    city: str


class CreateItemBody(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CreateItemRequest(BaseModel):
    body: CreateItemBody
    query: dict = {}
    params: dict = {}


class Customer(BaseModel):
    email: str
    address: Address


class TreeNode(BaseModel):
    name: str
    children: List["TreeNode"] = []


@pytest.fixture
def schema_models():
    return {
        "Address": Address,
        "CreateItemBody": CreateItemBody,
        "CreateItemRequest": CreateItemRequest,
        "Customer": Customer,
        "TreeNode": TreeNode,
    }
