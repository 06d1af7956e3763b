"""
create_express_app.cli - Command Line Interface
===============================================

This module provides the command-line interface using Typer.

Architecture
------------
The CLI is a single command:

    create-express-app [PROJECT_NAME]

It asks the remaining questions interactively, creates the project in
the current directory, installs dependencies, initializes git and prints
the next steps.

Exit codes:
    0   project created (even if git initialization failed)
    1   invalid environment settings, target directory exists, or
        generation/installation failed

Usage Examples
--------------
    $ create-express-app
    $ create-express-app my-api
    $ create-express-app --version

See Also
--------
- prompts.py: Interactive questions
- scaffold.py: Project creation pipeline
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from create_express_app import __version__
from create_express_app.models import GeneratorSettings
from create_express_app.prompts import prompt_config
from create_express_app.runner import SubprocessRunner
from create_express_app.scaffold import ProjectExistsError, create_project
from create_express_app.stacks import profile_for


if TYPE_CHECKING:
    from create_express_app.models import MongoConfig, PostgresConfig


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="create-express-app",
    help="Generate a production-ready Express TypeScript project.",
    rich_markup_mode="rich",
    add_completion=False,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """
    Display version information and exit.

    Parameters
    ----------
    value : bool
        True if --version was passed.
    """
    if value:
        console.print(Panel(
            f"[bold green]create-express-app[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Express + TypeScript project generator[/]",
            border_style="green",
        ))
        raise typer.Exit()


# =============================================================================
# Output Helpers
# =============================================================================

def show_success_message(config: MongoConfig | PostgresConfig) -> None:
    """
    Print the success banner and the commands to run next.

    The database hints and ORM commands come from the stack profile.
    """
    profile = profile_for(config)

    lines = [
        f"  cd {config.project_name}",
        "  cp .env.example .env",
        "  [dim]# Edit .env with your database connection[/]",
        "",
        f"  [yellow]# {profile.service_hint}[/]",
    ]

    if profile.post_install:
        lines.append("  [dim]# Prisma Client already generated ✓[/]")
    lines.extend(f"  {command}" for command in profile.next_steps)
    if profile.post_install:
        lines.append("  [dim]# Run this to create your database tables[/]")

    lines.extend([
        "",
        "  npm run dev",
        "",
        "  [dim]Server will start at http://localhost:3000[/]",
    ])

    console.print()
    console.print(Panel(
        "[bold green]🎉 Success! Your project is ready![/]\n\n"
        "[bold cyan]📋 Next steps:[/]\n\n" + "\n".join(lines),
        title=f"[bold]{config.label}[/]",
        border_style="green",
    ))
    console.print()
    console.print("[cyan]📚 Documentation: Check README.md[/]")
    console.print()
    console.print("[green]Happy coding! 🚀[/]")
    console.print()


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main(
    project_name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the project",
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]create-express-app[/] - Generate an Express + TypeScript project.

    Asks for the database ([cyan]MongoDB[/] or [cyan]PostgreSQL[/] with
    Prisma or Drizzle) and Docker support, then creates the project,
    installs dependencies and initializes git.

    [bold]Examples:[/]

        create-express-app
        create-express-app my-api
    """
    console.print()
    console.print("[bold blue]🚀 Create Express App[/]")
    console.print()

    try:
        settings = GeneratorSettings.from_env()
    except ValidationError as e:
        console.print(f"[red]❌ Error:[/] {escape(str(e))}")
        console.print()
        raise typer.Exit(1)

    config = prompt_config(project_name)

    try:
        create_project(
            config,
            base_dir=Path.cwd(),
            runner=SubprocessRunner(),
            settings=settings,
        )
    except ProjectExistsError as e:
        console.print()
        console.print(f"[red]❌ {escape(str(e))}[/]")
        console.print()
        raise typer.Exit(1)
    except Exception as e:
        console.print()
        console.print(f"[red]❌ Error:[/] {escape(str(e))}")
        console.print()
        raise typer.Exit(1)

    show_success_message(config)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
