"""
Entrypoint: load config, init logging, fetch the item and print it
"""

import asyncio
import logging
import sys

import structlog
from dotenv import load_dotenv

from item_client.config import Config, EndpointConfig
from item_client.errors import ConfigError, DecodeError, RequestError
from item_client.fetcher import create_fetcher


def setup_logging(log_config: dict):
    """Configure stdlib logging and structlog from the logging section of the config."""
    level = str(log_config.get('level', 'INFO')).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        force=True,
    )

    if log_config.get('format', 'json') == 'console':
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def run(endpoint: EndpointConfig) -> int:
    """Fetch the item at endpoint and print it. Returns the process exit code."""
    logger = structlog.get_logger(__name__)
    fetcher = create_fetcher(endpoint)

    try:
        item = await fetcher.fetch()
    except RequestError as e:
        logger.error("failed_to_send_request", url=e.url, error=str(e))
        return 1
    except DecodeError as e:
        logger.error("failed_to_parse_response", url=e.url, status_code=e.status_code, error=str(e))
        return 1

    print(repr(item))
    return 0


def main() -> int:
    """Initialize dependencies and run the fetch"""
    load_dotenv()

    try:
        config = Config()
        endpoint = config.endpoint
    except (ConfigError, FileNotFoundError) as e:
        print(f"Fatal error during startup: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging)
    return asyncio.run(run(endpoint))


if __name__ == "__main__":
    sys.exit(main())
