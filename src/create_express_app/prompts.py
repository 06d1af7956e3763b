"""
create_express_app.prompts - Interactive Questions
==================================================

Builds a ProjectConfig by asking the user, in order:

    1. Project name        (validated, re-asked until valid)
    2. Database            (MongoDB or PostgreSQL)
    3. ORM                 (only asked for PostgreSQL)
    4. Include Docker?     (default yes)

Cancelling any question (Ctrl-C) aborts the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import questionary
import typer

from create_express_app.models import Database, Orm, parse_project_config, validate_project_name


if TYPE_CHECKING:
    from create_express_app.models import MongoConfig, PostgresConfig


DEFAULT_PROJECT_NAME = "my-express-app"


def _ask(question: questionary.Question) -> Any:
    result = question.ask()
    if result is None:
        raise typer.Abort()
    return result


def check_project_name(value: str) -> bool | str:
    """
    questionary validator for the project name.

    Returns True for a valid name, otherwise the message shown to the user.
    """
    try:
        validate_project_name(value)
    except ValueError as e:
        return str(e)
    return True


def prompt_project_name(default: str | None = None) -> str:
    """
    Ask for the project name.

    Parameters
    ----------
    default : str | None
        Pre-filled value, usually the CLI argument.

    Returns
    -------
    str
        A name matching ``^[a-z0-9-_]+$``.
    """
    return _ask(questionary.text(
        "Project name:",
        default=default or DEFAULT_PROJECT_NAME,
        validate=check_project_name,
    ))


def prompt_database() -> Database:
    """Ask which database the project should use."""
    choices = [
        questionary.Choice(title=db.description, value=db)
        for db in Database
    ]
    return _ask(questionary.select(
        "Which database do you want to use?",
        choices=choices,
    ))


def prompt_orm() -> Orm:
    """Ask which ORM to use with PostgreSQL."""
    choices = [
        questionary.Choice(title=orm.description, value=orm)
        for orm in Orm
    ]
    return _ask(questionary.select(
        "Which ORM for PostgreSQL?",
        choices=choices,
    ))


def prompt_include_docker() -> bool:
    return _ask(questionary.confirm("Include Docker setup?", default=True))


def prompt_config(project_name: str | None = None) -> MongoConfig | PostgresConfig:
    """
    Ask every question and build the project configuration.

    Parameters
    ----------
    project_name : str | None
        Name given on the command line, used as the default answer.

    Returns
    -------
    MongoConfig | PostgresConfig
        The validated configuration.

    Raises
    ------
    typer.Abort
        If the user cancels a question.
    """
    answers: dict[str, Any] = {"project_name": prompt_project_name(project_name)}

    database = prompt_database()
    answers["database"] = database.value

    if database is Database.POSTGRESQL:
        answers["orm"] = prompt_orm().value

    answers["include_docker"] = prompt_include_docker()

    return parse_project_config(answers)
