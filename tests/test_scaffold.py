"""
Tests for create_express_app.scaffold
=====================================

End-to-end create_project runs against the bundled template with a fake
command runner.
"""

import json
from pathlib import Path

import pytest

from create_express_app.generator import DOCKER_FILES
from create_express_app.models import GeneratorSettings, MongoConfig, Orm, PostgresConfig
from create_express_app.runner import CommandError
from create_express_app.scaffold import GenerationResult, ProjectExistsError, create_project
from tests.conftest import FakeRunner


class TestCreateProject:
    def test_mongodb_project(
        self,
        mongo_config: MongoConfig,
        fake_runner: FakeRunner,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        result = create_project(
            mongo_config, base_dir=output_dir, runner=fake_runner,
            settings=settings, verbose=False,
        )

        project = output_dir / "demo"
        assert isinstance(result, GenerationResult)
        assert result.success is True
        assert result.git_initialized is True
        assert result.warnings == []
        assert result.project_path == project.resolve()
        assert (project / "src" / "database" / "mongoose.connection.ts").exists()
        assert not (project / "src" / "database" / "prisma.connection.ts").exists()
        assert not (project / "Dockerfile").exists()
        assert json.loads((project / "package.json").read_text())["name"] == "demo"

    def test_prisma_project(
        self,
        prisma_config: PostgresConfig,
        fake_runner: FakeRunner,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        create_project(
            prisma_config, base_dir=output_dir, runner=fake_runner,
            settings=settings, verbose=False,
        )

        project = output_dir / "prisma-api"
        assert 'provider = "postgresql"' in (project / "prisma" / "schema.prisma").read_text()
        scripts = json.loads((project / "package.json").read_text())["scripts"]
        assert scripts["db:migrate"] == "prisma migrate dev"
        for name in DOCKER_FILES:
            assert (project / name).exists()
        assert ["npx", "prisma", "generate"] in fake_runner.command_lines

    def test_commands_run_in_project_directory(
        self,
        drizzle_config: PostgresConfig,
        fake_runner: FakeRunner,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        create_project(
            drizzle_config, base_dir=output_dir, runner=fake_runner,
            settings=settings, verbose=False,
        )
        assert {cwd for _, _, cwd in fake_runner.calls} == {output_dir / "drizzle_api"}

    def test_install_runs_before_git(
        self,
        mongo_config: MongoConfig,
        fake_runner: FakeRunner,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        create_project(
            mongo_config, base_dir=output_dir, runner=fake_runner,
            settings=settings, verbose=False,
        )
        programs = [command for command, _, _ in fake_runner.calls]
        assert programs == ["npm", "npm", "git", "git", "git", "git", "git"]

    def test_existing_directory_raises_without_writing(
        self,
        mongo_config: MongoConfig,
        fake_runner: FakeRunner,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        existing = output_dir / "demo"
        existing.mkdir()
        (existing / "keep.txt").write_text("mine")

        with pytest.raises(ProjectExistsError, match='"demo" already exists'):
            create_project(
                mongo_config, base_dir=output_dir, runner=fake_runner,
                settings=settings, verbose=False,
            )

        assert [p.name for p in existing.iterdir()] == ["keep.txt"]
        assert fake_runner.calls == []

    def test_project_exists_error_is_file_exists_error(self, tmp_path: Path) -> None:
        assert isinstance(ProjectExistsError(tmp_path), FileExistsError)

    def test_install_failure_skips_git_and_keeps_files(
        self,
        mongo_config: MongoConfig,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        runner = FakeRunner(fail_on=[("npm", "install")])

        with pytest.raises(CommandError):
            create_project(
                mongo_config, base_dir=output_dir, runner=runner,
                settings=settings, verbose=False,
            )

        assert runner.commands_for("git") == []
        assert (output_dir / "demo" / "package.json").exists()

    def test_git_failure_is_a_warning(
        self,
        mongo_config: MongoConfig,
        settings: GeneratorSettings,
        output_dir: Path,
    ) -> None:
        runner = FakeRunner(fail_on=[("git", "commit")])

        result = create_project(
            mongo_config, base_dir=output_dir, runner=runner,
            settings=settings, verbose=False,
        )

        assert result.success is True
        assert result.git_initialized is False
        assert result.warnings == ["Git initialization failed"]

    def test_missing_template_is_fatal(
        self, mongo_config: MongoConfig, fake_runner: FakeRunner, output_dir: Path, tmp_path: Path
    ) -> None:
        settings = GeneratorSettings(template_dir=tmp_path / "no-template")

        with pytest.raises(FileNotFoundError):
            create_project(
                mongo_config, base_dir=output_dir, runner=fake_runner,
                settings=settings, verbose=False,
            )

        assert fake_runner.calls == []

    def test_defaults_to_current_directory(
        self,
        mongo_config: MongoConfig,
        fake_runner: FakeRunner,
        output_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(output_dir)

        create_project(mongo_config, runner=fake_runner, verbose=False)

        assert (output_dir / "demo" / "src" / "database" / "index.ts").exists()
