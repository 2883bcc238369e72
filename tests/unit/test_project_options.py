"""
Unit tests for project options and name validation.
"""

import pytest
from pydantic import ValidationError

from charcole.errors import InvalidProjectNameError
from charcole.scaffold.options import ProjectOptions, validate_project_name


class TestValidateProjectName:

    @pytest.mark.parametrize("name", ["demo", "my-api", "api_v2", "Service.Core", "3d-store"])
    def test_valid(self, name):
        assert validate_project_name(name) == name

    def test_strips_whitespace(self):
        assert validate_project_name("  demo ") == "demo"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_required(self, name):
        with pytest.raises(InvalidProjectNameError, match="required"):
            validate_project_name(name)

    @pytest.mark.parametrize("name", ["../escape", "a/b", "with space", ".hidden", "-dash", "ü"])
    def test_invalid(self, name):
        with pytest.raises(InvalidProjectNameError):
            validate_project_name(name)


class TestProjectOptions:

    def test_defaults(self):
        options = ProjectOptions(name="demo")

        assert options.language == "ts"
        assert options.auth is True
        assert options.swagger is True
        assert options.features == ["auth", "swagger"]

    def test_features_follow_flags(self):
        assert ProjectOptions(name="demo", auth=False).features == ["swagger"]
        assert ProjectOptions(name="demo", auth=False, swagger=False).features == []

    def test_invalid_name_rejected(self):
        with pytest.raises(ValidationError):
            ProjectOptions(name="bad name")

    def test_invalid_language_rejected(self):
        with pytest.raises(ValidationError):
            ProjectOptions(name="demo", language="py")

    def test_template_context(self):
        context = ProjectOptions(name="demo", language="js", auth=False).template_context()

        assert context == {
            "project_name": "demo",
            "language": "js",
            "ext": "js",
            "typescript": False,
            "auth": False,
            "swagger": True,
            "features": ["swagger"],
        }
