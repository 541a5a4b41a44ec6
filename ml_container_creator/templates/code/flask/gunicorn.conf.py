# Gunicorn settings for the {{ projectName }} flask server
bind = "127.0.0.1:8000"
worker_class = "sync"
accesslog = "-"
errorlog = "-"
loglevel = "info"
