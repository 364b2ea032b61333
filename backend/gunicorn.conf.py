# Bind & workers
bind = "0.0.0.0:8000"
# One process: the refresh-token revocation registry lives in process memory,
# so a second worker would not see logouts handled by the first.
workers = 1
threads = 8
timeout = 60
graceful_timeout = 30
keepalive = 5

wsgi_app = "justask.wsgi:app"

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Trust proxy headers; ProxyFix in the app handles X-Forwarded-*
forwarded_allow_ips = "*"
proxy_protocol = False
