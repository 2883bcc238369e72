"""Git repository initialisation for a freshly generated project."""

import shutil
import subprocess
from pathlib import Path

from ..gen_logging import get_logger

logger = get_logger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit from create-charcole"


def git_available() -> bool:
    return shutil.which("git") is not None


def init_repository(project_dir: Path) -> bool:
    """
    ``git init`` + initial commit. Missing git or a failing git command only
    produces a warning.

    Returns:
        True if the repository was created and committed
    """
    if not git_available():
        logger.warning("[WARN] git not found, skipping repository initialisation")
        return False

    commands = [
        ["git", "init"],
        ["git", "add", "-A"],
        ["git", "commit", "-m", INITIAL_COMMIT_MESSAGE],
    ]
    for command in commands:
        result = subprocess.run(command, cwd=str(project_dir), capture_output=True, text=True)
        if result.returncode != 0:
            logger.warning(f"[WARN] '{' '.join(command)}' failed: {result.stderr.strip()}")
            return False

    logger.info("[GIT] Initialised repository with an initial commit")
    return True
