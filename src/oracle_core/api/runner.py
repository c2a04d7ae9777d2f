#!/usr/bin/env python3
"""FastAPI server runner."""

import argparse

import uvicorn
import structlog

from oracle_core.api.app import create_app
from oracle_core.config.loader import load_config
from oracle_core.logging.setup import setup_logging

logger = structlog.get_logger()


def main():
    """Run the oracle API server."""
    parser = argparse.ArgumentParser(description="Crypto oracle API server")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(level=config.logging.level, log_format=config.logging.format)

    logger.info("Starting oracle API server", port=config.server.port)

    try:
        uvicorn.run(
            create_app(config),
            host=config.server.host,
            port=config.server.port,
            log_config=None,  # Use our structlog setup
            server_header=False,
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()
