"""
create_express_app.scaffold - Project Creation Pipeline
=======================================================

This module sequences the whole creation of a project:

    check target  ->  generate  ->  install  ->  git  ->  result
       (fatal)        (fatal)      (fatal)    (warning)

The target directory must not exist; that check happens before anything
is written. Generation and installation errors propagate unchanged and
leave the partial directory in place. A git failure is only recorded as
a warning in the result.

Usage Example
-------------
>>> from pathlib import Path
>>> from create_express_app.models import PostgresConfig, Orm
>>> from create_express_app.scaffold import create_project
>>> result = create_project(
...     PostgresConfig(project_name="api", orm=Orm.PRISMA),
...     base_dir=Path.cwd(),
... )
>>> result.git_initialized
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from create_express_app import generator, installer
from create_express_app.models import GeneratorSettings
from create_express_app.runner import SubprocessRunner


if TYPE_CHECKING:
    from create_express_app.models import MongoConfig, PostgresConfig
    from create_express_app.runner import CommandRunner


# Console for rich output
console = Console()


class ProjectExistsError(FileExistsError):
    """Raised when the project directory is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f'Directory "{path.name}" already exists!')


@dataclass
class GenerationResult:
    """
    Result of a successful project creation.

    Attributes
    ----------
    success : bool
        Whether the project was created.

    project_path : Path
        Absolute path to the created project directory.

    files_created : list[Path]
        Files in the generated tree before installation.

    warnings : list[str]
        Non-fatal problems (currently only git initialization).

    git_initialized : bool
        Whether the repository and initial commit were created.
    """

    success: bool
    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    git_initialized: bool = False


def create_project(
    config: MongoConfig | PostgresConfig,
    *,
    base_dir: Path | None = None,
    runner: CommandRunner | None = None,
    settings: GeneratorSettings | None = None,
    verbose: bool = True,
) -> GenerationResult:
    """
    Create a new project from the given configuration.

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Project configuration.

    base_dir : Path | None
        Directory the project folder is created in. Defaults to the
        current working directory.

    runner : CommandRunner | None
        Runs npm and git. Defaults to SubprocessRunner().

    settings : GeneratorSettings | None
        Template location, programs and git identity.

    verbose : bool, default=True
        Print progress to the console.

    Returns
    -------
    GenerationResult
        Outcome, including whether git was initialized.

    Raises
    ------
    ProjectExistsError
        If ``base_dir / project_name`` exists. Nothing is written.
    CommandError
        If a dependency install step fails. Git is not run.
    OSError
        If copying or editing the template fails.
    """
    settings = settings or GeneratorSettings()
    runner = runner or SubprocessRunner()
    target_path = (base_dir or Path.cwd()) / config.project_name

    if target_path.exists():
        raise ProjectExistsError(target_path)

    result = GenerationResult(success=False, project_path=target_path.resolve())

    if verbose:
        console.print()
        console.print("[cyan]📁 Creating project structure...[/]")

    result.files_created = generator.generate(config, target_path, settings)

    if verbose:
        console.print("[green]✓[/] Project structure created")
        console.print()

    installer.install_dependencies(
        config, target_path, runner, settings, verbose=verbose,
    )

    if verbose:
        console.print()

    result.git_initialized = installer.init_git(
        target_path, runner, settings, verbose=verbose,
    )
    if not result.git_initialized:
        result.warnings.append("Git initialization failed")

    result.success = True
    return result
