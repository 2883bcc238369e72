"""
Charcole: Express.js project scaffolding and OpenAPI helpers for pydantic schemas.
"""

from pathlib import Path

__version__ = "2.0.0"

THIS_DIR = Path(__file__).parent
