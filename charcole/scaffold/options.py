"""Project options chosen once per run (prompt or CLI flags)."""

import re
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, field_validator

from ..errors import InvalidProjectNameError

# Selection order is the merge order of module manifest fragments
OPTIONAL_MODULES = ("auth", "swagger")

LANGUAGES = ("ts", "js")

_PROJECT_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_project_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidProjectNameError("Project name is required")
    if not _PROJECT_NAME.match(name):
        raise InvalidProjectNameError(
            f'Invalid project name "{name}": use letters, digits, ".", "_" or "-", '
            "starting with a letter or digit"
        )
    return name


class ProjectOptions(BaseModel):
    name: str
    language: Literal["ts", "js"] = "ts"
    auth: bool = True
    swagger: bool = True

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_project_name(value)

    @property
    def features(self) -> List[str]:
        return [module for module in OPTIONAL_MODULES if getattr(self, module)]

    def template_context(self) -> Dict[str, Any]:
        return {
            "project_name": self.name,
            "language": self.language,
            "ext": self.language,
            "typescript": self.language == "ts",
            "auth": self.auth,
            "swagger": self.swagger,
            "features": self.features,
        }
