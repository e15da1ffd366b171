"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py``."""

from authcore import create_app

app = create_app()
