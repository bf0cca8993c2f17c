"""
loyalty_bff.api.__main__

`python -m loyalty_bff.api` / `loyalty-bff` entrypoint.
"""

from __future__ import annotations

import uvicorn

from loyalty_bff.api.app import create_app
from loyalty_bff.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        # Logging is structlog's; request lines come from RequestContextMiddleware.
        log_config=None,
        access_log=False,
        # The BFF sits behind the API gateway.
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
