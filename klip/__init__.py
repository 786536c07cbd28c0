from flask import Flask
from .config import Config
from .extensions import db


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)

    # Flask >= 2.3 reads this from the JSON provider, not app.config
    app.json.ensure_ascii = app.config.get("JSON_AS_ASCII", True)

    from .routes import register_blueprints
    from .cli import register_commands

    register_blueprints(app)
    register_commands(app)

    return app
