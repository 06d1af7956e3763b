"""Allow ``python -m create_express_app``."""

from create_express_app.cli import app


app(prog_name="create-express-app")
