"""Start nginx and the {{ modelServer }} workers; stop both if either exits."""

import multiprocessing
import os
import signal
import subprocess
import sys

PROGRAM_DIR = os.path.dirname(os.path.abspath(__file__))
NGINX_CONF = os.path.join(PROGRAM_DIR, "nginx.conf")
WORKERS = int(os.environ.get("MODEL_SERVER_WORKERS", multiprocessing.cpu_count()))
TIMEOUT = int(os.environ.get("MODEL_SERVER_TIMEOUT", 60))


def _server_command():
{% if modelServer == 'flask' %}
    return [
        "gunicorn",
        "--config", os.path.join(PROGRAM_DIR, "flask", "gunicorn.conf.py"),
        "--workers", str(WORKERS),
        "--timeout", str(TIMEOUT),
        "serve:app",
    ]
{% else %}
    return [
        "uvicorn",
        "serve:app",
        "--host", "127.0.0.1",
        "--port", "8000",
        "--workers", str(WORKERS),
        "--timeout-keep-alive", str(TIMEOUT),
    ]
{% endif %}


def main():
    print(f"Starting {{ projectName }} with {WORKERS} workers")
    nginx = subprocess.Popen(["nginx", "-c", NGINX_CONF])
    server = subprocess.Popen(_server_command(), cwd=PROGRAM_DIR)

    def _stop(signum, frame):
        for proc in (nginx, server):
            if proc.poll() is None:
                proc.terminate()
        sys.exit(0)

    signal.signal(signal.SIGTERM, _stop)

    pids = {nginx.pid, server.pid}
    while True:
        pid, _ = os.wait()
        if pid in pids:
            break
    _stop(signal.SIGTERM, None)


if __name__ == "__main__":
    main()
