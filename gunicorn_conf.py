"""Gunicorn configuration for tdt_proxy.

Usage:
    gunicorn tdt_proxy.main:app -c gunicorn_conf.py
"""

import os

bind = f"{os.getenv('SERVICE_HOST', '0.0.0.0')}:{os.getenv('SERVICE_PORT', '3000')}"
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
graceful_timeout = 30
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
proc_name = os.getenv("SERVICE_NAME", "tdt_proxy")
preload_app = True
