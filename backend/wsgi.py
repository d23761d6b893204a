"""Production entry point, e.g. ``gunicorn wsgi:app`` from the backend folder"""
import logging
import os
import sys

# Make the backend modules importable when started from another directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app import create_app
from config import Config

app = create_app(Config)

# Route Flask and homepage renderer logs through gunicorn's handlers
gunicorn_logger = logging.getLogger('gunicorn.error')
if gunicorn_logger.handlers:
    app.logger.handlers = gunicorn_logger.handlers
    app.logger.setLevel(gunicorn_logger.level)
    logging.getLogger('homepage').handlers = gunicorn_logger.handlers

# Passenger looks for 'application'
application = app
