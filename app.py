import logging

from flask import Flask
from flask_cors import CORS

from config import get_config
from utils.db import init_db_connection
from utils.errors import register_error_handlers
from utils.logging_config import setup_logging

# Import controllers
from controllers.subjects_controller import subjects_bp
from controllers.health_controller import health_bp

logger = logging.getLogger(__name__)


def create_app(config_object=None, store=None):
    """
    Build the Flask app.
    `store` lets callers (tests) inject a SubjectStore; otherwise one is
    wired to MongoDB by init_db_connection().
    """
    app = Flask(__name__)                              # Initialize Flask app
    app.config.from_object(config_object or get_config())  # Load configuration class
    setup_logging(app.config["LOG_LEVEL"])

    CORS(app, origins=app.config["CORS_ORIGINS"])      # Allow requests from the frontend

    if store is None:
        store = init_db_connection(app)                # Initialize MongoDB connection
    app.extensions["subject_store"] = store

    register_error_handlers(app)

    # Register Blueprint
    app.register_blueprint(subjects_bp)
    app.register_blueprint(health_bp)

    return app


# Run the app
if __name__ == "__main__":
    app = create_app()
    port = app.config["PORT"]
    logger.info("Server is running on http://localhost:%s", port)
    app.run(port=port, debug=app.config["DEBUG"], threaded=True)
