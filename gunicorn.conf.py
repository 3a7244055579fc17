"""
Gunicorn configuration for Chukfi production deployment
"""
import os
import multiprocessing

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"
backlog = 1024

# Worker processes (sqlite serializes writes, so keep the pool small)
workers = int(os.environ.get('GUNICORN_WORKERS', min(multiprocessing.cpu_count() * 2 + 1, 4)))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 30
keepalive = 2

# Logging
accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
access_log_format = '%(h)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(L)s'

proc_name = 'chukfi'

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"Chukfi is ready. Listening on {bind}")


def on_exit(server):
    """Called just before exiting."""
    server.log.info("Shutting down Chukfi...")
