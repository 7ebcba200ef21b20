"""WSGI entry point, e.g. ``gunicorn wsgi:app``."""

from server import create_app
from settings import ServerSettings

app = create_app(log_level=ServerSettings.from_env().log_level)
