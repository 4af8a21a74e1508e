"""
Budget allocator backend entry point.

Starts uvicorn on BUDGET_HOST/BUDGET_PORT. When BUDGET_PORT is unset a free
port is picked and announced as "PORT:{port}" on stdout (flushed) so a
wrapping shell can find the server. During development
``uvicorn budget_api.main:app --reload`` works as well.

Environment variables:
  BUDGET_HOST          – bind address (default 127.0.0.1)
  BUDGET_PORT          – port (default: any free port)
  BUDGET_LOG_LEVEL     – logging level name (default INFO)
  BUDGET_CORS_ORIGINS  – extra CORS origins, comma separated
"""

from __future__ import annotations

import logging
import os
import socket

from budget_api.main import app as _fastapi_app


def _find_free_port(host: str) -> int:
    """Bind to port 0, let the OS assign a free port, return it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


def main() -> None:
    level = os.environ.get("BUDGET_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = os.environ.get("BUDGET_HOST", "127.0.0.1")
    port_env = os.environ.get("BUDGET_PORT")
    port = int(port_env) if port_env else _find_free_port(host)

    print(f"PORT:{port}", flush=True)

    import uvicorn

    uvicorn.run(
        _fastapi_app,
        host=host,
        port=port,
        workers=1,
        log_level=level.lower(),
    )


if __name__ == "__main__":
    main()
