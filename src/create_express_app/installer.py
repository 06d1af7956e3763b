"""
create_express_app.installer - Dependency Installation and Git Setup
====================================================================

Post-generation tasks that shell out to external programs:

    install_dependencies   npm install, stack packages, post-install task
    init_git               git init, identity, add, initial commit

The two have different failure policies. A project without its
dependencies is unusable, so any install failure raises CommandError and
stops the pipeline. Git is a convenience, so init_git reports failure as
a warning and returns False.

All commands go through a CommandRunner so tests can use a fake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from create_express_app.models import GeneratorSettings
from create_express_app.runner import CommandError
from create_express_app.stacks import profile_for


if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from create_express_app.models import MongoConfig, PostgresConfig
    from create_express_app.runner import CommandRunner


# Console for rich output
console = Console()


def _run_step(
    runner: CommandRunner,
    command: str,
    args: Sequence[str],
    cwd: Path,
    message: str,
    *,
    verbose: bool,
) -> None:
    if not verbose:
        runner.run(command, args, cwd)
        return

    with console.status(message):
        runner.run(command, args, cwd)


def install_dependencies(
    config: MongoConfig | PostgresConfig,
    project_path: Path,
    runner: CommandRunner,
    settings: GeneratorSettings | None = None,
    *,
    verbose: bool = True,
) -> None:
    """
    Install base and stack-specific npm packages.

    Runs, in order and one at a time:

    1. ``npm install``
    2. ``npm install <deps>`` if the stack has runtime dependencies
    3. ``npm install --save-dev <dev deps>`` if it has dev dependencies
    4. ``npx <post-install>`` if the stack defines one (Prisma client
       generation)

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Project configuration.

    project_path : Path
        Root of the generated project.

    runner : CommandRunner
        Executes the commands.

    settings : GeneratorSettings | None
        Which programs to call. Defaults to GeneratorSettings().

    verbose : bool, default=True
        Show spinners and status lines.

    Raises
    ------
    CommandError
        On the first failing command. Later steps are not run.
    """
    settings = settings or GeneratorSettings()
    tooling = settings.tooling
    profile = profile_for(config)

    try:
        _run_step(
            runner, tooling.package_manager, ["install"], project_path,
            "Installing dependencies...", verbose=verbose,
        )

        if profile.deps:
            _run_step(
                runner, tooling.package_manager, ["install", *profile.deps],
                project_path, "Installing database dependencies...",
                verbose=verbose,
            )

        if profile.dev_deps:
            _run_step(
                runner, tooling.package_manager,
                ["install", "--save-dev", *profile.dev_deps],
                project_path, "Installing database dev dependencies...",
                verbose=verbose,
            )
    except CommandError:
        if verbose:
            console.print("[red]✗[/] Failed to install dependencies")
        raise

    if verbose:
        console.print("[green]✓[/] Dependencies installed")

    if profile.post_install:
        try:
            _run_step(
                runner, tooling.package_runner, list(profile.post_install),
                project_path, "Generating Prisma Client...", verbose=verbose,
            )
        except CommandError:
            if verbose:
                console.print("[red]✗[/] Failed to generate Prisma Client")
            raise

        if verbose:
            console.print("[green]✓[/] Prisma Client generated")


def init_git(
    project_path: Path,
    runner: CommandRunner,
    settings: GeneratorSettings | None = None,
    *,
    verbose: bool = True,
) -> bool:
    """
    Initialize a git repository with one commit of the generated files.

    Parameters
    ----------
    project_path : Path
        Root of the generated project.

    runner : CommandRunner
        Executes the git commands.

    settings : GeneratorSettings | None
        Git executable, commit identity and message.

    verbose : bool, default=True
        Show a spinner and the outcome.

    Returns
    -------
    bool
        True if every git command succeeded, False otherwise.

    Notes
    -----
    Failures never raise. The project is fully usable without git, and
    the user can run ``git init`` later.
    """
    settings = settings or GeneratorSettings()
    git = settings.tooling.vcs

    steps: list[list[str]] = [
        ["init"],
        ["config", "user.email", settings.git_user_email],
        ["config", "user.name", settings.git_user_name],
        ["add", "."],
        ["commit", "-m", settings.commit_message],
    ]

    try:
        for args in steps:
            _run_step(
                runner, git, args, project_path,
                "Initializing git repository...", verbose=verbose,
            )
    except CommandError as e:
        if verbose:
            console.print("[red]✗[/] Failed to initialize git")
            console.print(f"[yellow]⚠[/] {escape(str(e))}")
            console.print("[yellow]You can initialize git manually later[/]")
        return False

    if verbose:
        console.print("[green]✓[/] Git repository initialized")
    return True
