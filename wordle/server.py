"""
Server entry point: `wordle-server`.

Loads settings, configures logging, builds the app and hands it to uvicorn.
With TLS_ENABLED the cert/key files are passed straight to uvicorn.
"""

import logging
import sys

import uvicorn

from .config import load_settings
from .errors import ConfigError
from .logging import setup_logging
from .main import create_app

logger = logging.getLogger(__name__)


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        logger.error("Configuration error: %s", e)
        return 1

    setup_logging(log_dir=settings.log_dir, level=settings.log_level)

    logger.info("Starting Wordle game service on port %d", settings.port)
    logger.info("JWT auth type: %s", settings.jwt_auth_type)
    logger.info("JWT issuer: %s", settings.jwt_issuer or "(not enforced)")
    logger.info("JWT audience: %s", settings.jwt_audience or "(not enforced)")
    logger.info("TLS enabled: %s", settings.tls_enabled)

    app = create_app(settings)

    ssl_options = {}
    if settings.tls_enabled:
        logger.info("Loading certificate from %s and key from %s", settings.tls_cert_file, settings.tls_key_file)
        ssl_options = {"ssl_certfile": settings.tls_cert_file, "ssl_keyfile": settings.tls_key_file}
    else:
        logger.warning("TLS is disabled - serving plain HTTP")

    # log_config=None keeps our root logger setup instead of uvicorn's
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None, **ssl_options)
    return 0


if __name__ == "__main__":
    sys.exit(main())
