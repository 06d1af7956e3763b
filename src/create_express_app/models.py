"""
create_express_app.models - Pydantic Models for Project Configuration
=====================================================================

This module defines the data models used throughout create_express_app.
Pydantic gives us validation of user input with clear error messages and
a discriminated union for the database choice.

Architecture Notes
------------------
The project configuration is a tagged union keyed by ``database``:

    ProjectConfig
    ├── MongoConfig      (database="mongodb", no ORM)
    └── PostgresConfig   (database="postgresql", orm: Orm)

An ORM can only be attached to the PostgreSQL variant, so a MongoDB
config carrying an ORM cannot be constructed.

Generator-wide settings (template location, external programs, git
identity) live in GeneratorSettings and can be overridden from the
environment.

Usage Example
-------------
>>> from create_express_app.models import parse_project_config
>>> config = parse_project_config(
...     {"project_name": "demo", "database": "postgresql", "orm": "prisma"}
... )
>>> config.label
'PostgreSQL + Prisma'
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


# =============================================================================
# Constants
# =============================================================================

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-_]+$")

PROJECT_NAME_ERROR = (
    "Project name can only contain lowercase letters, numbers, "
    "hyphens, and underscores"
)

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates" / "boilerplate"


def validate_project_name(name: str) -> str:
    """
    Check a project name against the allowed character set.

    Used both by the models and by the interactive prompt, so the two can
    never disagree about what a valid name is.

    Parameters
    ----------
    name : str
        Candidate project name.

    Returns
    -------
    str
        The name, unchanged.

    Raises
    ------
    ValueError
        If the name contains anything other than lowercase letters,
        digits, hyphens or underscores.
    """
    if not PROJECT_NAME_PATTERN.match(name):
        raise ValueError(PROJECT_NAME_ERROR)
    return name


# =============================================================================
# Enumerations
# =============================================================================

class Database(str, Enum):
    """
    Database backends the generated project can be wired for.

    Examples
    --------
    >>> Database("mongodb") is Database.MONGODB
    True
    """

    MONGODB = "mongodb"
    POSTGRESQL = "postgresql"

    @property
    def description(self) -> str:
        """Human-readable title for CLI prompts."""
        descriptions = {
            Database.MONGODB: "MongoDB (with Mongoose)",
            Database.POSTGRESQL: "PostgreSQL (with Prisma or Drizzle)",
        }
        return descriptions[self]

    @property
    def display_name(self) -> str:
        """Product name as written in generated files."""
        return {Database.MONGODB: "MongoDB", Database.POSTGRESQL: "PostgreSQL"}[self]


class Orm(str, Enum):
    """
    ORMs available for PostgreSQL projects.

    Attributes
    ----------
    PRISMA : str
        Prisma client with schema file and migrations.

    DRIZZLE : str
        Drizzle ORM with drizzle-kit migrations.
    """

    PRISMA = "prisma"
    DRIZZLE = "drizzle"

    @property
    def description(self) -> str:
        """Human-readable title for CLI prompts."""
        descriptions = {
            Orm.PRISMA: "Prisma (recommended - great DX, migrations)",
            Orm.DRIZZLE: "Drizzle (newer - more type-safe, better performance)",
        }
        return descriptions[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# =============================================================================
# Project Configuration (tagged union)
# =============================================================================

class _BaseProjectConfig(BaseModel):
    """
    Fields shared by every project configuration variant.

    Attributes
    ----------
    project_name : str
        Directory and package.json name of the generated project.

    include_docker : bool
        Keep the Dockerfile, docker-compose.yml and .dockerignore.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = Field(
        description="Project name (directory and package.json name)",
        min_length=1,
    )
    include_docker: bool = Field(
        default=True,
        description="Include Docker configuration",
    )

    @field_validator("project_name")
    @classmethod
    def check_project_name(cls, v: str) -> str:
        return validate_project_name(v)


class MongoConfig(_BaseProjectConfig):
    """
    Configuration for a MongoDB project using Mongoose.

    There is no ORM choice for MongoDB; passing one is a validation error.

    Examples
    --------
    >>> config = MongoConfig(project_name="demo", include_docker=False)
    >>> config.orm is None
    True
    """

    database: Literal["mongodb"] = "mongodb"

    @property
    def database_kind(self) -> Database:
        return Database.MONGODB

    @property
    def orm(self) -> None:
        return None

    @property
    def label(self) -> str:
        return "MongoDB + Mongoose"


class PostgresConfig(_BaseProjectConfig):
    """
    Configuration for a PostgreSQL project.

    Attributes
    ----------
    orm : Orm
        Required; selects Prisma or Drizzle.
    """

    database: Literal["postgresql"] = "postgresql"
    orm: Orm = Field(description="ORM used to talk to PostgreSQL")

    @property
    def database_kind(self) -> Database:
        return Database.POSTGRESQL

    @property
    def label(self) -> str:
        return f"PostgreSQL + {self.orm.display_name}"


ProjectConfig = Annotated[
    Union[MongoConfig, PostgresConfig],
    Field(discriminator="database"),
]

_project_config_adapter: TypeAdapter[MongoConfig | PostgresConfig] = TypeAdapter(
    ProjectConfig
)


def parse_project_config(data: dict[str, Any]) -> MongoConfig | PostgresConfig:
    """
    Build the right ProjectConfig variant from a plain mapping.

    Parameters
    ----------
    data : dict[str, Any]
        Raw answers, e.g. ``{"project_name": "demo", "database": "mongodb"}``.

    Returns
    -------
    MongoConfig | PostgresConfig
        The validated configuration.

    Raises
    ------
    pydantic.ValidationError
        If the name is invalid, the database is unknown, an ORM is given
        for MongoDB, or no ORM is given for PostgreSQL.
    """
    return _project_config_adapter.validate_python(data)


# =============================================================================
# Generator Settings
# =============================================================================

class ToolingConfig(BaseModel):
    """
    External programs invoked while creating a project.

    Attributes
    ----------
    package_manager : str
        Program used for ``install`` (default ``npm``).

    package_runner : str
        Program used for post-install tasks such as ``prisma generate``.

    vcs : str
        Version control executable (default ``git``).
    """

    model_config = ConfigDict(frozen=True)

    package_manager: str = Field(default="npm")
    package_runner: str = Field(default="npx")
    vcs: str = Field(default="git")

    @field_validator("package_manager", "package_runner", "vcs")
    @classmethod
    def validate_program(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Program name cannot be empty"
            raise ValueError(msg)
        return v


class GeneratorSettings(BaseModel):
    """
    Settings shared by every generated project.

    Attributes
    ----------
    template_dir : Path
        Source tree copied into each new project.

    tooling : ToolingConfig
        External programs to run.

    project_version : str
        Version written into the generated package.json.

    git_user_email, git_user_name : str
        Identity configured in the new repository for the initial commit.

    commit_message : str
        Message of the initial commit.

    ignored_names : frozenset[str]
        Entry names skipped at any depth when copying the template.
    """

    model_config = ConfigDict(frozen=True)

    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    tooling: ToolingConfig = Field(default_factory=ToolingConfig)
    project_version: str = Field(default="0.1.0")
    git_user_email: str = Field(default="user@example.com")
    git_user_name: str = Field(default="User")
    commit_message: str = Field(
        default="feat: initial project setup from create-express-app",
    )
    ignored_names: frozenset[str] = Field(
        default=frozenset({"node_modules", "dist"}),
    )

    @classmethod
    def from_env(cls) -> GeneratorSettings:
        """
        Build settings from environment variables.

        Recognised variables (all optional):
            CREATE_EXPRESS_APP_TEMPLATE_DIR, CREATE_EXPRESS_APP_NPM,
            CREATE_EXPRESS_APP_NPX, CREATE_EXPRESS_APP_GIT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_EXPRESS_APP_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["CREATE_EXPRESS_APP_TEMPLATE_DIR"])

        tooling_kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_EXPRESS_APP_NPM"):
            tooling_kwargs["package_manager"] = os.environ["CREATE_EXPRESS_APP_NPM"]
        if os.environ.get("CREATE_EXPRESS_APP_NPX"):
            tooling_kwargs["package_runner"] = os.environ["CREATE_EXPRESS_APP_NPX"]
        if os.environ.get("CREATE_EXPRESS_APP_GIT"):
            tooling_kwargs["vcs"] = os.environ["CREATE_EXPRESS_APP_GIT"]
        if tooling_kwargs:
            kwargs["tooling"] = ToolingConfig(**tooling_kwargs)

        return cls(**kwargs)
