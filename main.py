"""
Moonshine Server Entry Point

Run with: python main.py
Or, once installed: moonshine

MOONSHINE_TRANSPORT selects the transport: "stdio" (MCP, default) or "http".
"""

import asyncio
import os
import sys

import uvicorn

from moonshine.app import create_app
from moonshine.config import Config
from moonshine.server import run_stdio
from moonshine.utils.exceptions import ConfigurationError, StoreError
from moonshine.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    config = Config.from_env_or_yaml(os.getenv("MOONSHINE_CONFIG"))

    setup_logging(
        level=config.logging.level,
        log_to_file=config.logging.log_to_file,
        log_dir=config.logging.log_dir,
        file_rotation=config.logging.file_rotation,
        file_retention=config.logging.file_retention,
        compression=config.logging.compression,
        serialize=config.logging.serialize,
    )

    transport = config.server.transport.lower()
    try:
        if transport == "stdio":
            asyncio.run(run_stdio(config))
        elif transport == "http":
            uvicorn.run(
                create_app(config),
                host=config.server.host,
                port=config.server.port,
                log_level=config.logging.level.lower(),
                log_config=None,
            )
        else:
            raise ConfigurationError(f"Unsupported transport: {config.server.transport}")
    except (StoreError, ConfigurationError) as e:
        logger.error(f"Failed to start Moonshine: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
