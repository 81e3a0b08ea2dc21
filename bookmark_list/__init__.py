from flask import Flask
from flask_cors import CORS

from .config import Config, configure_logging
from .storage import Storage


def create_app(config_class=Config, test_config=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    if test_config is not None:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    # Holds only the file path; connections are opened per request
    app.storage = Storage(app.config["DATABASE_PATH"])

    with app.app_context():
        from .routes import init_routes
        from .api import init_api
        init_routes(app)
        init_api(app)

    app.logger.info(f"Bookmark list using database {app.config['DATABASE_PATH']}")
    return app
