"""Run the Wordbox API server with uvicorn."""

import uvicorn

from wordbox.core import settings


def main() -> None:
    uvicorn.run(
        "wordbox.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
