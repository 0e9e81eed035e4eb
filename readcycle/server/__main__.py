"""
Run the ReadCycle server with uvicorn.

Usage: ``python -m readcycle.server`` or the ``readcycle-server`` script.
"""

import uvicorn

from readcycle.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "readcycle.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
