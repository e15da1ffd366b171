# Bind & workers
bind = "0.0.0.0:8000"
# Refresh tokens live in process memory: a single worker keeps one store.
workers = 1
threads = 4
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Trust proxy headers (ProxyFix handles them in the app)
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "authcore.wsgi:app"
