"""
Project creation pipeline.

    options -> base tree copy -> template render -> module prune
            -> package.json merge -> .env -> install -> git
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .. import THIS_DIR as PKG_DIR
from ..errors import ProjectExistsError, TemplateNotFoundError
from ..gen_logging import get_logger
from .manifest import (
    build_package_json,
    collect_module_fragments,
    load_base_manifest,
    write_package_json,
)
from .options import ProjectOptions
from .pkg_manager import detect_package_manager, install_dependencies
from .template_copier import copy_template_tree, prune_deselected_modules, render_templates
from .vcs import init_repository

logger = get_logger(__name__)

_APP_NAME_LINE = re.compile(r"^APP_NAME=", re.M)


@dataclass
class ProjectResult:
    target_dir: Path
    package_manager: str
    manifest: Dict[str, Any]
    files: List[Path] = field(default_factory=list)
    installed: bool = False
    git_initialised: bool = False


def resolve_template_dirs(language: str, template_root: Optional[Path] = None) -> Tuple[Path, Path]:
    """Return ``(base_dir, templates_dir)`` for ``language``."""
    root = Path(template_root) if template_root else PKG_DIR
    base_dir = root / "base" / language
    templates_dir = root / "templates" / language
    if not base_dir.is_dir():
        raise TemplateNotFoundError(base_dir)
    return base_dir, templates_dir


def write_env_file(project_dir: Path, project_name: str) -> Optional[Path]:
    """Create ``.env`` from ``.env.example``, adding ``APP_NAME`` when it is missing."""
    example = project_dir / ".env.example"
    if not example.is_file():
        logger.debug("  [SKIP] no .env.example")
        return None

    content = example.read_text(encoding="utf-8")
    if not _APP_NAME_LINE.search(content):
        if content and not content.endswith("\n"):
            content += "\n"
        content += f"APP_NAME={project_name}\n"

    env_file = project_dir / ".env"
    env_file.write_text(content, encoding="utf-8")
    return env_file


def create_project(
    options: ProjectOptions,
    cwd: Optional[Path] = None,
    install: bool = True,
    git: bool = True,
    strict_modules: bool = False,
    template_root: Optional[Path] = None,
) -> ProjectResult:
    """
    Generate a new project directory named after ``options.name`` inside ``cwd``.

    Raises:
        ProjectExistsError: the target directory already exists
        TemplateNotFoundError: the language base tree or basePackage.json is missing
        ManifestError: a module fragment is unreadable and ``strict_modules`` is set
    """
    cwd = Path.cwd() if cwd is None else Path(cwd)
    target_dir = cwd / options.name
    if target_dir.exists():
        raise ProjectExistsError(target_dir)

    base_dir, templates_dir = resolve_template_dirs(options.language, template_root)
    base_manifest = load_base_manifest(base_dir)
    fragments = collect_module_fragments(base_dir, options.features, strict=strict_modules)
    package_manager = detect_package_manager(cwd=cwd)

    logger.info(f"[SCAFFOLD] Creating project in {options.language.upper()}...")
    target_dir.mkdir(parents=True)

    files = copy_template_tree(base_dir, target_dir, options.features)
    files += render_templates(templates_dir, target_dir, options.template_context())
    prune_deselected_modules(target_dir, options.features)

    manifest = build_package_json(base_manifest, fragments, options.name)
    write_package_json(target_dir / "package.json", manifest)
    files.append(target_dir / "package.json")

    env_file = write_env_file(target_dir, options.name)
    if env_file:
        files.append(env_file)

    result = ProjectResult(
        target_dir=target_dir,
        package_manager=package_manager,
        manifest=manifest,
        files=files,
    )

    if install:
        install_dependencies(target_dir, package_manager)
        result.installed = True

    if git:
        result.git_initialised = init_repository(target_dir)

    return result
