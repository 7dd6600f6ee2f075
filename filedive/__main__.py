"""Entry point: python -m filedive"""

import logging

import uvicorn

from filedive.config import settings


def main():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s: %(name)s: %(message)s",
    )
    uvicorn.run(
        "filedive.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
