"""Auth service entrypoint.

Run with:
  python -m auth_service
"""

import logging

import uvicorn

from auth_service.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("auth_service.main:app", host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    main()
