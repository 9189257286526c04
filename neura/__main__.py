"""Run the Neura server with uvicorn."""

import uvicorn

from neura.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "neura.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
