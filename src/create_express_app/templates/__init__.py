"""
create_express_app.templates - Project Template Files
=====================================================

This package holds two kinds of templates:

boilerplate/
    The static Express + TypeScript project copied into every new
    project. It contains the connection modules for every supported
    stack; the generator deletes the ones that were not chosen.
    ``boilerplate/gitignore`` is renamed to ``.gitignore`` on copy so
    packaging tools do not treat it as an ignore file.

*.j2
    Jinja2 templates for files whose content depends on the chosen stack:

    - database_index.ts.j2: Barrel file re-exporting the kept connection
    - schema.prisma.j2: Prisma schema for PostgreSQL + Prisma projects

Template Context
----------------
database_index.ts.j2 receives:

    title : str
        Stack name for the header comment (e.g. "PostgreSQL with Prisma")

    module : str
        Import specifier of the kept connection module

schema.prisma.j2 receives:

    provider : str
        Prisma datasource provider ("postgresql")

    url_env : str
        Environment variable holding the connection string

See Also
--------
- generator.py: Module that copies and renders these templates
"""

# Templates are loaded by Jinja2's PackageLoader and shutil.copytree.
