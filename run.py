import logging

import uvicorn

import config
from utils.logging_config import setup_logging, silence_sql_loggers

# Initialize centralized logging configuration
setup_logging()

from app import app

# SQLAlchemy may reset logger levels when the engine is created on import
silence_sql_loggers()


def main() -> None:
    logging.info(f"[Startup] Serving storefront API on {config.WEBAPP_HOST}:{config.WEBAPP_PORT} ({config.RUNTIME_ENVIRONMENT.value})")
    uvicorn.run(app, host=config.WEBAPP_HOST, port=config.WEBAPP_PORT)


if __name__ == '__main__':
    main()
