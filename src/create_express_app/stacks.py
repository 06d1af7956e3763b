"""
create_express_app.stacks - Database Stack Decision Table
=========================================================

Every supported (database, ORM) pair maps to one StackProfile describing
what the generated project should contain: which connection module to
keep, which template files and folders to drop, which npm packages and
scripts to add, and which post-install command to run.

Keeping this in a single table (rather than nested conditionals spread
across the generator and installer) means adding a stack is one entry
here plus its template files.

    (mongodb,    None)    -> mongoose.connection.ts
    (postgresql, prisma)  -> prisma.connection.ts  + prisma/schema.prisma
    (postgresql, drizzle) -> drizzle.connection.ts + drizzle.config.ts
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from create_express_app.models import Database, MongoConfig, Orm, PostgresConfig


DATABASE_DIR = PurePosixPath("src/database")

CONNECTION_FILES = {
    "mongoose": "mongoose.connection.ts",
    "prisma": "prisma.connection.ts",
    "drizzle": "drizzle.connection.ts",
}


@dataclass(frozen=True)
class StackProfile:
    """
    Everything the generator and installer need to know about one stack.

    Attributes
    ----------
    keep_file : str
        Connection module kept in ``src/database`` and re-exported by the
        barrel file.

    delete_files : tuple[str, ...]
        Paths (relative to the project root) removed from the copy.

    delete_dirs : tuple[str, ...]
        Directories removed from the copy.

    deps, dev_deps : tuple[str, ...]
        Packages passed to ``npm install`` and ``npm install --save-dev``.

    scripts : dict[str, str]
        Entries merged into package.json ``scripts``.

    post_install : tuple[str, ...] | None
        Arguments for the package runner after installing, if any.

    barrel_title : str
        Stack name written in the barrel file header.

    needs_prisma_schema : bool
        Whether ``prisma/schema.prisma`` is synthesized.

    service_hint : str
        Reminder about the database server shown in next steps.

    next_steps : tuple[str, ...]
        Extra commands shown after creation.
    """

    keep_file: str
    delete_files: tuple[str, ...] = ()
    delete_dirs: tuple[str, ...] = ()
    deps: tuple[str, ...] = ()
    dev_deps: tuple[str, ...] = ()
    scripts: dict[str, str] = field(default_factory=dict)
    post_install: tuple[str, ...] | None = None
    barrel_title: str = ""
    needs_prisma_schema: bool = False
    service_hint: str = ""
    next_steps: tuple[str, ...] = ()

    @property
    def keep_module(self) -> str:
        """Import specifier of the kept module, e.g. ``./prisma.connection``."""
        return "./" + self.keep_file.removesuffix(".ts")


def _connection_path(kind: str) -> str:
    return str(DATABASE_DIR / CONNECTION_FILES[kind])


STACK_PROFILES: dict[tuple[Database, Orm | None], StackProfile] = {
    (Database.MONGODB, None): StackProfile(
        keep_file=CONNECTION_FILES["mongoose"],
        delete_files=(
            _connection_path("prisma"),
            _connection_path("drizzle"),
            "drizzle.config.ts",
        ),
        delete_dirs=("prisma", "drizzle"),
        deps=("mongoose",),
        barrel_title="MongoDB with Mongoose",
        service_hint="Make sure MongoDB is running",
    ),
    (Database.POSTGRESQL, Orm.PRISMA): StackProfile(
        keep_file=CONNECTION_FILES["prisma"],
        delete_files=(
            _connection_path("mongoose"),
            _connection_path("drizzle"),
            "drizzle.config.ts",
        ),
        delete_dirs=("drizzle",),
        # Pinned to Prisma 6
        deps=("@prisma/client@^6.0.0",),
        dev_deps=("prisma@^6.0.0",),
        scripts={
            "db:migrate": "prisma migrate dev",
            "db:generate": "prisma generate",
            "db:studio": "prisma studio",
        },
        post_install=("prisma", "generate"),
        barrel_title="PostgreSQL with Prisma",
        needs_prisma_schema=True,
        service_hint="Make sure PostgreSQL is running",
        next_steps=("npx prisma migrate dev",),
    ),
    (Database.POSTGRESQL, Orm.DRIZZLE): StackProfile(
        keep_file=CONNECTION_FILES["drizzle"],
        delete_files=(
            _connection_path("mongoose"),
            _connection_path("prisma"),
        ),
        delete_dirs=("prisma",),
        deps=("drizzle-orm", "pg"),
        dev_deps=("drizzle-kit", "@types/pg"),
        scripts={
            "db:push": "drizzle-kit push:pg",
            "db:generate": "drizzle-kit generate:pg",
            "db:studio": "drizzle-kit studio",
        },
        barrel_title="PostgreSQL with Drizzle",
        service_hint="Make sure PostgreSQL is running",
        next_steps=("npx drizzle-kit generate:pg", "npx drizzle-kit push:pg"),
    ),
}


def profile_for(config: MongoConfig | PostgresConfig) -> StackProfile:
    """
    Look up the StackProfile for a project configuration.

    Parameters
    ----------
    config : MongoConfig | PostgresConfig
        Validated project configuration.

    Returns
    -------
    StackProfile
        The profile for ``(config.database_kind, config.orm)``.

    Raises
    ------
    KeyError
        If the pair has no entry in STACK_PROFILES.
    """
    return STACK_PROFILES[(config.database_kind, config.orm)]
