import logging
import sys

import uvicorn

from .config import HOST, PORT, configure_logging, load_settings


logger = logging.getLogger("chirpy")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    from .main import app

    logger.info("Chirpy listening on http://%s:%d", HOST, PORT)
    logger.info("Serving files from %s", app.state.api_config.filepath_root)
    try:
        # uvicorn exits with status 1 itself when the port cannot be bound
        uvicorn.run(app, host=HOST, port=PORT, log_level=settings.log_level.lower())
    except KeyboardInterrupt:
        logger.info("Chirpy stopped by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
