"""package.json assembly: base manifest plus one fragment per selected module."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from ..errors import ManifestError, TemplateNotFoundError
from ..gen_logging import get_logger

logger = get_logger(__name__)

MERGED_SECTIONS = ("dependencies", "devDependencies", "scripts")

BASE_MANIFEST = "basePackage.json"
FRAGMENT_MANIFEST = "package.json"


def merge_package_json(base: Dict[str, Any], fragment: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a module fragment into a manifest.

    ``dependencies``, ``devDependencies`` and ``scripts`` are unioned with
    the fragment winning on key collisions; every other base field passes
    through. Neither argument is modified.
    """
    merged = dict(base)
    for section in MERGED_SECTIONS:
        merged[section] = {**(base.get(section) or {}), **(fragment.get(section) or {})}
    return merged


def load_manifest(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ManifestError(path, str(e)) from e
    if not isinstance(data, dict):
        raise ManifestError(path, "expected a JSON object")
    return data


def load_base_manifest(base_dir: Path) -> Dict[str, Any]:
    path = base_dir / BASE_MANIFEST
    if not path.is_file():
        raise TemplateNotFoundError(path)
    return load_manifest(path)


def collect_module_fragments(base_dir: Path, features: Iterable[str], strict: bool = False) -> List[Tuple[str, Dict[str, Any]]]:
    """
    Read ``src/modules/<feature>/package.json`` for each selected feature.

    Args:
        base_dir: Language base tree
        features: Selected modules, in merge order
        strict: Raise on an unreadable fragment instead of skipping it

    Returns:
        ``(feature, fragment)`` pairs in selection order
    """
    fragments = []
    for feature in features:
        path = base_dir / "src" / "modules" / feature / FRAGMENT_MANIFEST
        if not path.is_file():
            logger.debug(f"  [SKIP] {feature} has no {FRAGMENT_MANIFEST}")
            continue
        try:
            fragments.append((feature, load_manifest(path)))
        except ManifestError as e:
            if strict:
                raise
            logger.warning(f"[WARN] Could not parse {feature}/{FRAGMENT_MANIFEST}: {e.reason}")
    return fragments


def build_package_json(base: Dict[str, Any], fragments: Iterable[Tuple[str, Dict[str, Any]]], project_name: str) -> Dict[str, Any]:
    merged = dict(base)
    for feature, fragment in fragments:
        merged = merge_package_json(merged, fragment)
        logger.info(f"[MERGE] Merged {feature} module dependencies")
    merged["name"] = project_name
    return merged


def write_package_json(path: Path, manifest: Dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
