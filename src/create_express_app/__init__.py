"""
create_express_app - Express + TypeScript Project Generator
===========================================================

A CLI tool that scaffolds a production-ready Express/TypeScript project
from a bundled template, wired for the database stack you pick.

Features
--------
- **Database Choice**: MongoDB (Mongoose) or PostgreSQL (Prisma/Drizzle)
- **Docker Optional**: Dockerfile and docker-compose.yml on request
- **Ready to Run**: Dependencies installed and git initialized for you

Quick Start
-----------
```bash
# Install create-express-app
pip install create-express-app

# Create a new project interactively
create-express-app my-api
```

Example
-------
>>> from pathlib import Path
>>> from create_express_app import create_project, parse_project_config
>>> config = parse_project_config({"project_name": "demo", "database": "mongodb"})
>>> create_project(config, base_dir=Path.cwd())

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface
- ``prompts``: Interactive questions that build a ProjectConfig
- ``models``: Pydantic models for configuration
- ``stacks``: Decision table mapping (database, ORM) to files and packages
- ``generator``: Template copy and database-specific edits
- ``installer``: npm installs and git initialization
- ``runner``: Narrow interface for running external programs
- ``scaffold``: The end-to-end create_project pipeline

License
-------
MIT License - see LICENSE file for details.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "1.0.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from create_express_app.models import (
    Database,
    GeneratorSettings,
    MongoConfig,
    Orm,
    PostgresConfig,
    ProjectConfig,
    parse_project_config,
)
from create_express_app.scaffold import GenerationResult, create_project


__all__ = [
    # Configuration models
    "Database",
    "GenerationResult",
    "GeneratorSettings",
    "MongoConfig",
    "Orm",
    "PostgresConfig",
    "ProjectConfig",
    # Version info
    "__version__",
    # Core functions
    "create_project",
    "parse_project_config",
]
