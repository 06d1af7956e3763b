"""
create_express_app.generator - Template Materializer
====================================================

This module turns the bundled boilerplate into a concrete project
directory for one ProjectConfig.

Architecture
------------
The generator follows a pipeline pattern:

    1. Copy the boilerplate tree (skipping node_modules/ and dist/)
    2. Keep the chosen database connection, drop the others
    3. Rewrite package.json name, version and scripts
    4. Remove Docker files if Docker was not requested
    5. Remove any .git directory left over from the template

What gets kept or dropped in step 2 comes from the decision table in
``stacks.py``; this module only applies it.

Every removal is best-effort: a path that is already gone is not an
error. Nothing is rolled back if a step fails; the caller is told and
the partial directory stays on disk.

Usage Example
-------------
>>> from pathlib import Path
>>> from create_express_app.generator import generate
>>> from create_express_app.models import MongoConfig
>>> files = generate(MongoConfig(project_name="demo"), Path("demo"))

See Also
--------
- stacks.py: Decision table for database stacks
- templates/: Boilerplate tree and Jinja2 templates
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, PackageLoader, select_autoescape

from create_express_app.models import GeneratorSettings
from create_express_app.stacks import DATABASE_DIR, profile_for


if TYPE_CHECKING:
    from collections.abc import Iterable

    from create_express_app.models import MongoConfig, PostgresConfig


logger = logging.getLogger(__name__)


# =============================================================================
# Module-Level Configuration
# =============================================================================

DOCKER_FILES = ("Dockerfile", "docker-compose.yml", ".dockerignore")

BARREL_FILE = DATABASE_DIR / "index.ts"
PRISMA_SCHEMA = Path("prisma") / "schema.prisma"
PACKAGE_JSON = "package.json"

# Files stored under a different name in the package than in the output
RENAMED_FILES = {"gitignore": ".gitignore"}


# =============================================================================
# Template Engine Setup
# =============================================================================


def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for stack-specific files.

    Autoescaping is off because the output is TypeScript and Prisma
    schema source, not HTML.

    Returns
    -------
    Environment
        Environment loading ``*.j2`` files from create_express_app.templates.
    """
    return Environment(
        loader=PackageLoader("create_express_app", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_template(template_name: str, **context: object) -> str:
    """
    Render one template from the templates package.

    Parameters
    ----------
    template_name : str
        Name of the template file (e.g. "schema.prisma.j2").

    **context
        Variables made available to the template.

    Returns
    -------
    str
        The rendered content.
    """
    template = create_jinja_env().get_template(template_name)
    return template.render(**context)


# =============================================================================
# Filesystem Helpers
# =============================================================================


def remove_path(path: Path) -> bool:
    """
    Remove a file or directory if it exists.

    Parameters
    ----------
    path : Path
        File, symlink or directory to delete.

    Returns
    -------
    bool
        True if something was removed, False if nothing was there.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    else:
        return False

    logger.debug("Removed %s", path)
    return True


def list_files(root: Path) -> list[Path]:
    """Every regular file below ``root``, sorted."""
    return sorted(p for p in root.rglob("*") if p.is_file())


# =============================================================================
# Materializer Steps
# =============================================================================


def copy_template(
    template_dir: Path,
    target_path: Path,
    ignored_names: Iterable[str] = ("node_modules", "dist"),
) -> None:
    """
    Copy the boilerplate tree to the target directory.

    Any entry named in ``ignored_names`` is skipped at every depth.
    Files stored under a package-safe name (``gitignore``) are renamed
    to their real name after copying.

    Parameters
    ----------
    template_dir : Path
        Root of the boilerplate tree.

    target_path : Path
        Destination directory. Must not exist yet.

    ignored_names : Iterable[str]
        Entry names to leave out.

    Raises
    ------
    FileNotFoundError
        If the template directory is missing.
    FileExistsError
        If the target already exists.
    """
    if not template_dir.is_dir():
        raise FileNotFoundError(f"Template directory not found: {template_dir}")

    shutil.copytree(
        template_dir,
        target_path,
        ignore=shutil.ignore_patterns(*ignored_names),
    )

    for stored_name, real_name in RENAMED_FILES.items():
        stored = target_path / stored_name
        if stored.exists():
            stored.rename(target_path / real_name)


def generate_prisma_schema(target_path: Path) -> Path:
    """
    Write ``prisma/schema.prisma`` with a PostgreSQL datasource.

    Parameters
    ----------
    target_path : Path
        Project root.

    Returns
    -------
    Path
        Path of the written schema file.
    """
    schema_path = target_path / PRISMA_SCHEMA
    schema_path.parent.mkdir(parents=True, exist_ok=True)
    schema_path.write_text(
        render_template(
            "schema.prisma.j2",
            provider="postgresql",
            url_env="DATABASE_URL",
        ),
        encoding="utf-8",
    )
    return schema_path


def configure_database(
    config: MongoConfig | PostgresConfig,
    target_path: Path,
) -> None:
    """
    Keep the chosen database connection and drop the others.

    Applies the StackProfile for the config: deletes the connection
    modules, folders and config files of the other stacks, writes the
    Prisma schema when needed, and points the barrel file
    (``src/database/index.ts``) at the kept connection.

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Project configuration.

    target_path : Path
        Project root containing the copied boilerplate.
    """
    profile = profile_for(config)

    for relative in profile.delete_files:
        remove_path(target_path / relative)
    for relative in profile.delete_dirs:
        remove_path(target_path / relative)

    if profile.needs_prisma_schema:
        generate_prisma_schema(target_path)

    barrel_path = target_path / BARREL_FILE
    barrel_path.parent.mkdir(parents=True, exist_ok=True)
    barrel_path.write_text(
        render_template(
            "database_index.ts.j2",
            title=profile.barrel_title,
            module=profile.keep_module,
        ),
        encoding="utf-8",
    )


def update_package_json(
    config: MongoConfig | PostgresConfig,
    target_path: Path,
    version: str = "0.1.0",
) -> dict:
    """
    Set the project name, version and stack scripts in package.json.

    Existing keys keep their order; new scripts are appended.

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Project configuration.

    target_path : Path
        Project root.

    version : str
        Version written to the manifest.

    Returns
    -------
    dict
        The manifest as written.

    Raises
    ------
    FileNotFoundError
        If package.json is missing.
    json.JSONDecodeError
        If package.json is not valid JSON.
    """
    package_json_path = target_path / PACKAGE_JSON
    package_json = json.loads(package_json_path.read_text(encoding="utf-8"))

    package_json["name"] = config.project_name
    package_json["version"] = version

    scripts = profile_for(config).scripts
    if scripts:
        package_json.setdefault("scripts", {}).update(scripts)

    package_json_path.write_text(
        json.dumps(package_json, indent=2) + "\n",
        encoding="utf-8",
    )
    return package_json


def remove_docker_files(target_path: Path) -> None:
    """Delete Dockerfile, docker-compose.yml and .dockerignore."""
    for name in DOCKER_FILES:
        remove_path(target_path / name)


def clean_git_files(target_path: Path) -> None:
    """Delete a .git directory copied from the template, if any."""
    remove_path(target_path / ".git")


# =============================================================================
# Main Generation Function
# =============================================================================


def generate(
    config: MongoConfig | PostgresConfig,
    target_path: Path,
    settings: GeneratorSettings | None = None,
) -> list[Path]:
    """
    Materialize the template for one project configuration.

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Project configuration.

    target_path : Path
        Project directory to create. The caller checks it does not exist.

    settings : GeneratorSettings | None
        Template location and manifest version. Defaults to GeneratorSettings().

    Returns
    -------
    list[Path]
        All files in the generated tree.
    """
    settings = settings or GeneratorSettings()

    copy_template(settings.template_dir, target_path, settings.ignored_names)
    configure_database(config, target_path)
    update_package_json(config, target_path, settings.project_version)

    if not config.include_docker:
        remove_docker_files(target_path)

    clean_git_files(target_path)

    return list_files(target_path)
