"""
pytest configuration and shared fixtures for create_express_app tests.

Fixtures
--------
mongo_config, prisma_config, drizzle_config
    One ProjectConfig per supported database stack.

fake_runner : FakeRunner
    CommandRunner that records calls instead of spawning processes.

template_dir : Path
    A copy of the bundled boilerplate with build artifacts and a .git
    directory planted in it.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

import pytest

from create_express_app.models import (
    DEFAULT_TEMPLATE_DIR,
    GeneratorSettings,
    MongoConfig,
    Orm,
    PostgresConfig,
)
from create_express_app.runner import CommandError, CommandResult


# =============================================================================
# Fake Command Runner
# =============================================================================

class FakeRunner:
    """
    CommandRunner that records every call.

    Parameters
    ----------
    fail_on : Sequence[tuple[str, str]]
        (command, first argument) pairs that should fail, e.g.
        ``[("npm", "install")]`` or ``[("git", "commit")]``.
    """

    def __init__(self, fail_on: Sequence[tuple[str, str]] = ()) -> None:
        self.fail_on = set(fail_on)
        self.calls: list[tuple[str, list[str], Path]] = []

    def run(self, command: str, args: Sequence[str], cwd: Path) -> CommandResult:
        args = list(args)
        self.calls.append((command, args, cwd))

        result = CommandResult(command=command, args=args)
        if (command, args[0] if args else "") in self.fail_on:
            result.returncode = 1
            result.stderr = f"{command} failed"
            raise CommandError(result.display, result)
        return result

    @property
    def command_lines(self) -> list[list[str]]:
        return [[command, *args] for command, args, _ in self.calls]

    def commands_for(self, program: str) -> list[list[str]]:
        return [args for command, args, _ in self.calls if command == program]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner where every command succeeds."""
    return FakeRunner()


@pytest.fixture
def mongo_config() -> MongoConfig:
    return MongoConfig(project_name="demo", include_docker=False)


@pytest.fixture
def prisma_config() -> PostgresConfig:
    return PostgresConfig(project_name="prisma-api", orm=Orm.PRISMA)


@pytest.fixture
def drizzle_config() -> PostgresConfig:
    return PostgresConfig(project_name="drizzle_api", orm=Orm.DRIZZLE)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """
    Copy of the bundled boilerplate with leftovers a real checkout has.

    Contains top-level and nested node_modules/ and dist/ directories and
    a .git directory, none of which may reach a generated project.
    """
    template = tmp_path / "template"
    shutil.copytree(DEFAULT_TEMPLATE_DIR, template)

    (template / "node_modules" / "express").mkdir(parents=True)
    (template / "node_modules" / "express" / "index.js").write_text("module.exports = {};\n")
    (template / "dist").mkdir()
    (template / "dist" / "index.js").write_text("// built\n")
    (template / "src" / "routes" / "dist").mkdir()
    (template / "src" / "routes" / "dist" / "old.js").write_text("// stale\n")
    (template / ".git").mkdir()
    (template / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    return template


@pytest.fixture
def settings(template_dir: Path) -> GeneratorSettings:
    """GeneratorSettings pointing at the planted template copy."""
    return GeneratorSettings(template_dir=template_dir)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Directory new projects are created in."""
    out = tmp_path / "projects"
    out.mkdir()
    return out


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external programs"
    )
