import traceback
from datetime import date
from pathlib import Path

import click
from rich.console import Console

from charcole.config import get_settings
from charcole.errors import CharcoleError
from charcole.gen_logging import configure_gen_logging
from charcole.scaffold.options import LANGUAGES, ProjectOptions, validate_project_name
from charcole.scaffold.pkg_manager import run_command
from charcole.scaffold.project import create_project

console = Console()


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


def _prompt_project_name(value: str) -> str:
    try:
        return validate_project_name(value)
    except CharcoleError as e:
        raise click.BadParameter(str(e))


def gather_options(project_name, language, auth, swagger, assume_defaults, settings) -> ProjectOptions:
    """Fill in whatever the command line left out, prompting unless ``assume_defaults``."""
    if project_name is None:
        if assume_defaults:
            raise click.UsageError("PROJECT_NAME is required with --yes")
        project_name = click.prompt("Project name", value_proc=_prompt_project_name)
    else:
        project_name = validate_project_name(project_name)

    if language is None:
        language = settings.default_language
        if not assume_defaults:
            language = click.prompt(
                "Language",
                type=click.Choice(LANGUAGES, case_sensitive=False),
                default=language,
            )

    if auth is None:
        auth = True if assume_defaults else click.confirm("Include JWT authentication module?", default=True)

    if swagger is None:
        swagger = True if assume_defaults else click.confirm("Include Swagger documentation module?", default=True)

    return ProjectOptions(name=project_name, language=language.lower(), auth=auth, swagger=swagger)


@click.command("create-charcole", help="Create a new Charcole Express.js project.")
@click.pass_context
@click.argument("project_name", required=False)
@click.option(
    "--language", "-l",
    type=click.Choice(LANGUAGES, case_sensitive=False),
    default=None,
    help="Template language (ts or js).",
)
@click.option("--auth/--no-auth", default=None, help="Include the JWT authentication module.")
@click.option("--swagger/--no-swagger", default=None, help="Include the Swagger documentation module.")
@click.option("--install/--skip-install", default=None, help="Install dependencies after generation.")
@click.option("--git/--no-git", default=None, help="Initialise a git repository with an initial commit.")
@click.option("--strict-modules", is_flag=True, default=False, help="Fail when a module's package.json cannot be parsed.")
@click.option("--yes", "-y", "assume_defaults", is_flag=True, default=False, help="Use defaults instead of prompting.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show every copied file.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only show warnings and errors.")
def create_charcole(context, project_name, language, auth, swagger, install, git, strict_modules, assume_defaults, verbose, quiet):
    configure_gen_logging(verbose=verbose, quiet=quiet)
    settings = get_settings()

    try:
        console.print("Welcome to Charcole v2 CLI", style="bold")
        options = gather_options(project_name, language, auth, swagger, assume_defaults, settings)

        if install is None:
            install = not settings.skip_install
        if git is None:
            git = not settings.skip_git

        result = create_project(
            options,
            cwd=Path.cwd(),
            install=install,
            git=git,
            strict_modules=strict_modules or settings.strict_modules,
            template_root=settings.template_dir,
        )
    except (click.UsageError, click.Abort):
        raise
    except CharcoleError as e:
        console.print(f"{_stamp()} Failed to create Charcole project: {e}", style="red")
        context.exit(1)
    except Exception as e:
        console.print(f"{_stamp()} Failed to create Charcole project: {e}", style="red")

        tb_lines = traceback.format_exc().splitlines()
        console.print("\n".join(tb_lines[-50:]), style="red", markup=False)

        context.exit(1)
    else:
        manager = result.package_manager
        console.print(f"{_stamp()} Charcole project created successfully: {result.target_dir}", style="green")
        console.print("\nNext steps:")
        console.print(f"  cd {options.name}", markup=False)
        if not result.installed:
            console.print(f"  {manager} install", markup=False)
        console.print(f"  {run_command(manager, 'dev')}", markup=False)
        context.exit(0)


def main():
    create_charcole(prog_name="create-charcole")
