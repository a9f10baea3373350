"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application.

The client is created at startup, but the subjects store is only attached
once a background ping reaches the server. Until then every subject
request fails fast with "Database not initialized".
"""

import logging
import threading

from flask_pymongo import PyMongo
from pymongo.errors import PyMongoError

from models.subject import SubjectStore

logger = logging.getLogger(__name__)

# Create a global MongoDB instance
mongo = PyMongo()


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Returns a detached SubjectStore that becomes usable as soon as the
    server answers a ping.
    """
    timeout_ms = app.config["MONGO_TIMEOUT_MS"]
    mongo.init_app(
        app,
        uri=app.config["MONGO_URI"],
        serverSelectionTimeoutMS=timeout_ms,
    )

    store = SubjectStore(timeout=timeout_ms / 1000.0)
    thread = threading.Thread(
        target=_connect_in_background,
        args=(app, store),
        name="mongo-connect",
        daemon=True,
    )
    thread.start()
    return store


def _connect_in_background(app, store, stop_event=None):
    db_name = app.config["MONGO_DBNAME"]
    collection_name = app.config["SUBJECTS_COLLECTION"]
    retry_seconds = app.config["MONGO_CONNECT_RETRY_SECONDS"]
    stop_event = stop_event or threading.Event()

    while not stop_event.is_set():
        try:
            mongo.cx.admin.command("ping")
        except PyMongoError as e:
            logger.error("Failed to connect to MongoDB: %s", e)
            stop_event.wait(retry_seconds)
            continue

        store.attach(mongo.cx[db_name][collection_name])
        logger.info("Connected to MongoDB database %s", db_name)
        return
