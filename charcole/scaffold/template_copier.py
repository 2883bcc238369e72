"""Copy the language base tree and render the Jinja templates into a new project."""

import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..gen_logging import get_logger
from .options import OPTIONAL_MODULES

logger = get_logger(__name__)

# Manifests never reach the project as files; package.json is generated
EXCLUDED_NAMES = frozenset({"basePackage.json", "package.json", "node_modules", ".DS_Store"})

# Published dependencies consumed at runtime: only their manifest fragment is used
RUNTIME_ONLY_MODULES = frozenset({"swagger"})

# Dotfiles are stored without the dot so packaging tools keep them
DOTFILE_RENAMES = {
    "gitignore": ".gitignore",
    "env.example": ".env.example",
}

TEMPLATE_SUFFIX = ".jinja"


def _is_optional_module(entry: Path) -> bool:
    return entry.parent.name == "modules" and entry.name in OPTIONAL_MODULES


def copy_template_tree(src: Path, dest: Path, features: Iterable[str], exclude=EXCLUDED_NAMES) -> List[Path]:
    """
    Recursively copy ``src`` into ``dest``.

    Optional module directories (``modules/<feature>``) are copied only
    when their feature is selected, and runtime-only modules never are.

    Returns:
        Paths of the files written
    """
    features = set(features)
    dest.mkdir(parents=True, exist_ok=True)
    written = []

    for entry in sorted(src.iterdir()):
        if entry.name in exclude:
            logger.debug(f"  [SKIP] {entry.name}")
            continue

        target = dest / DOTFILE_RENAMES.get(entry.name, entry.name)

        if entry.is_dir():
            if _is_optional_module(entry):
                if entry.name not in features:
                    logger.debug(f"  [SKIP] modules/{entry.name} (not selected)")
                    continue
                if entry.name in RUNTIME_ONLY_MODULES:
                    logger.debug(f"  [SKIP] modules/{entry.name} (installed as a dependency)")
                    continue
                logger.info(f"[MODULE] Including {entry.name} module...")
            written.extend(copy_template_tree(entry, target, features, exclude))
        else:
            shutil.copy2(entry, target)
            written.append(target)
            logger.debug(f"  [COPY] {target}")

    return written


def render_templates(templates_dir: Path, dest: Path, context: Dict[str, Any]) -> List[Path]:
    """
    Render every ``*.jinja`` file under ``templates_dir`` to the same relative
    path in ``dest`` (suffix dropped). Templates rendering to blank output are
    skipped, so a template can opt out for a feature set.
    """
    if not templates_dir.is_dir():
        return []

    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )

    written = []
    for template_path in sorted(templates_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
        relative = template_path.relative_to(templates_dir)
        content = env.get_template(relative.as_posix()).render(**context)
        if not content.strip():
            logger.debug(f"  [SKIP] {relative} (empty for this feature set)")
            continue

        output_name = relative.name[: -len(TEMPLATE_SUFFIX)]
        output_name = DOTFILE_RENAMES.get(output_name, output_name)
        output_path = dest / relative.parent / output_name
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        written.append(output_path)
        logger.debug(f"  [RENDER] {output_path}")

    return written


def prune_deselected_modules(project_dir: Path, features: Iterable[str]) -> List[Path]:
    """Delete ``src/modules/<feature>`` for every optional module not selected."""
    features = set(features)
    removed = []
    for module in OPTIONAL_MODULES:
        if module in features:
            continue
        module_dir = project_dir / "src" / "modules" / module
        if module_dir.exists():
            shutil.rmtree(module_dir)
            removed.append(module_dir)
            logger.debug(f"  [PRUNE] {module_dir}")
    return removed
