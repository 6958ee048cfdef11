"""
Gunicorn Configuration for Production Deployment

Each worker process owns its own reschedule tracker and background job, so
every worker runs at most one reschedule pass per day.

Usage:
    gunicorn --config gunicorn_config.py wsgi:app
"""
import os

# Server Socket
bind = os.getenv('GUNICORN_BIND', '0.0.0.0:8000')
backlog = int(os.getenv('GUNICORN_BACKLOG', '2048'))

# Worker Processes
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = os.getenv('GUNICORN_WORKER_CLASS', 'gthread')
threads = int(os.getenv('GUNICORN_THREADS', '4'))
max_requests = int(os.getenv('GUNICORN_MAX_REQUESTS', '10000'))
max_requests_jitter = int(os.getenv('GUNICORN_MAX_REQUESTS_JITTER', '1000'))
timeout = int(os.getenv('GUNICORN_TIMEOUT', '60'))
keepalive = int(os.getenv('GUNICORN_KEEPALIVE', '5'))

# Logging
accesslog = os.getenv('GUNICORN_ACCESS_LOG', '-')  # '-' for stdout
errorlog = os.getenv('GUNICORN_ERROR_LOG', '-')    # '-' for stderr
loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')

# Process Naming
proc_name = 'cornerstone_scheduler'


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting Cornerstone scheduling service")


def when_ready(server):
    """Called just after the server is started."""
    server.log.info("Cornerstone scheduling service is ready. Listening on: %s", bind)


# Graceful Timeout
graceful_timeout = int(os.getenv('GUNICORN_GRACEFUL_TIMEOUT', '30'))

raw_env = [
    f"FLASK_ENV={os.getenv('FLASK_ENV', 'production')}",
]
