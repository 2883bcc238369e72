"""Package manager detection and dependency installation."""

import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional

from ..errors import CharcoleError
from ..gen_logging import get_logger

logger = get_logger(__name__)

# Checked in order: pnpm > yarn > npm
_USER_AGENT_MANAGERS = ("pnpm", "yarn", "npm")

_LOCKFILES = {
    "pnpm-lock.yaml": "pnpm",
    "yarn.lock": "yarn",
    "package-lock.json": "npm",
}

DEFAULT_MANAGER = "npm"


def detect_package_manager(environ: Optional[Mapping[str, str]] = None, cwd: Optional[Path] = None) -> str:
    """
    Guess which package manager launched us.

    The ``npm_config_user_agent`` variable set by npm/pnpm/yarn wins, then
    a lockfile in the working directory, then npm.
    """
    environ = os.environ if environ is None else environ
    cwd = Path.cwd() if cwd is None else Path(cwd)

    user_agent = environ.get("npm_config_user_agent")
    if user_agent:
        for manager in _USER_AGENT_MANAGERS:
            if manager in user_agent:
                return manager

    for lockfile, manager in _LOCKFILES.items():
        if (cwd / lockfile).exists():
            return manager

    return DEFAULT_MANAGER


def install_command(manager: str) -> list:
    return [manager, "install"]


def run_command(manager: str, script: str) -> str:
    """Shell hint for running a package.json script."""
    return f"{manager} run {script}"


def install_dependencies(target_dir: Path, manager: str) -> None:
    """Run ``<manager> install`` in ``target_dir``; output goes straight to the console."""
    command = install_command(manager)
    logger.info(f"[INSTALL] Installing dependencies using {manager}...")
    try:
        subprocess.run(command, cwd=str(target_dir), check=True)
    except FileNotFoundError as e:
        raise CharcoleError(f"{manager} is not installed or not on PATH") from e
    except subprocess.CalledProcessError as e:
        raise CharcoleError(f"'{' '.join(command)}' exited with status {e.returncode}") from e
