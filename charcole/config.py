# charcole/config.py
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CharcoleSettings(BaseSettings):
    """Environment overrides for the CLI (CHARCOLE_*) and the swagger helpers."""

    model_config = SettingsConfigDict(env_prefix="CHARCOLE_", extra="ignore")

    # Alternate root holding base/<lang> and templates/<lang>
    template_dir: Optional[Path] = None
    default_language: Literal["ts", "js"] = "ts"
    skip_install: bool = False
    skip_git: bool = False
    strict_modules: bool = False

    # Port shown in the Swagger UI log line
    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "CHARCOLE_PORT"))


def get_settings() -> CharcoleSettings:
    return CharcoleSettings()
