"""
Entry point: `python -m diario_api`.

Host, port and log level come from the same Settings the app uses
(BACKEND_HOST, BACKEND_PORT, LOG_LEVEL).
"""

import uvicorn

from diario_api.config import settings


def main() -> None:
    uvicorn.run(
        "diario_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
