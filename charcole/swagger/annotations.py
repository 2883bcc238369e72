"""
Scan source files for ``@swagger`` / ``@openapi`` annotation blocks.

JavaScript / TypeScript files carry them in ``/** ... */`` comments, Python
files in docstrings. The text after the tag line is YAML: top-level keys
starting with ``/`` are path items, ``components`` and ``tags`` are merged
into the document definition.
"""

import glob
import re
import textwrap
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from ..gen_logging import get_logger

logger = get_logger(__name__)

_JSDOC_BLOCK = re.compile(r"/\*\*(.*?)\*/", re.S)
_JSDOC_LINE_PREFIX = re.compile(r"^\s*\* ?")
_DOCSTRING = re.compile(r'("""|\'\'\')(.*?)\1', re.S)
_TAG_LINE = re.compile(r"^\s*@(swagger|openapi)\s*$")


def default_api_patterns(root: Path) -> List[str]:
    """
    Glob patterns scanned when none are configured.

    Projects whose ``src/`` holds TypeScript are scanned for ``.ts`` files,
    everything else for ``.js``.
    """
    src = Path(root) / "src"
    extension = "js"
    if src.is_dir() and any(p.suffix == ".ts" for p in src.iterdir()):
        extension = "ts"
    return [
        f"{src}/modules/**/*.{extension}",
        f"{src}/routes/**/*.{extension}",
    ]


def extract_annotation_blocks(source: str, python: bool = False) -> List[str]:
    """Return the YAML body of every annotation block found in ``source``."""
    blocks = []
    if python:
        for match in _DOCSTRING.finditer(source):
            block = _block_after_tag(match.group(2).splitlines())
            if block is not None:
                blocks.append(block)
    else:
        for match in _JSDOC_BLOCK.finditer(source):
            lines = [_JSDOC_LINE_PREFIX.sub("", line) for line in match.group(1).splitlines()]
            block = _block_after_tag(lines)
            if block is not None:
                blocks.append(block)
    return blocks


def _block_after_tag(lines: List[str]) -> Optional[str]:
    # The tag must be the first non-blank line of the comment
    for index, line in enumerate(lines):
        if _TAG_LINE.match(line):
            return textwrap.dedent("\n".join(lines[index + 1:]))
        if line.strip():
            return None
    return None


def resolve_patterns(patterns: Iterable[str]) -> List[Path]:
    seen = set()
    files = []
    for pattern in patterns:
        for match in sorted(glob.glob(str(pattern), recursive=True)):
            path = Path(match)
            if path.is_file() and path not in seen:
                seen.add(path)
                files.append(path)
    return files


def collect_annotations(patterns: Iterable[str]) -> Dict[str, Any]:
    """
    Parse all annotation blocks in files matching ``patterns``.

    Returns:
        ``{"paths": {...}, "components": {...}, "tags": [...]}``
    """
    collected: Dict[str, Any] = {"paths": {}, "components": {}, "tags": []}

    for path in resolve_patterns(patterns):
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"[WARN] Skipping unreadable file {path}: {e}")
            continue
        for block in extract_annotation_blocks(source, python=path.suffix == ".py"):
            try:
                parsed = yaml.safe_load(block)
            except yaml.YAMLError as e:
                logger.warning(f"[WARN] Skipping malformed annotation in {path}: {e}")
                continue
            if not isinstance(parsed, dict):
                logger.debug(f"  [SKIP] Empty annotation in {path}")
                continue
            merge_annotation(collected, parsed)
            logger.debug(f"  [ANNOTATION] {path}")

    return collected


def merge_annotation(collected: Dict[str, Any], annotation: Dict[str, Any]) -> None:
    for key, value in annotation.items():
        if not isinstance(value, (dict, list)):
            continue
        if str(key).startswith("/") and isinstance(value, dict):
            collected["paths"].setdefault(key, {}).update(value)
        elif key == "components" and isinstance(value, dict):
            for section, entries in value.items():
                if isinstance(entries, dict):
                    collected["components"].setdefault(section, {}).update(entries)
        elif key == "tags" and isinstance(value, list):
            collected["tags"].extend(value)
