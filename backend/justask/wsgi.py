"""WSGI entry point for gunicorn (``justask.wsgi:app``)."""

from justask import create_app

app = create_app()
