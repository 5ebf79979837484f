import argparse

import uvicorn

from app.settings import settings

if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument('--host', default=settings.api_host)
    ap.add_argument('--port', type=int, default=settings.api_port)
    args = ap.parse_args()
    # SIGINT/SIGTERM drain in-flight requests for up to shutdown_timeout seconds
    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )
