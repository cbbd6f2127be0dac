import os
import sys

from webdriver_client.config.config import ClientConfig
from webdriver_client.config.logging_config import configure_logging, get_logger
from webdriver_client.infrastructure.config_loader import load_or_default

logger = get_logger(__name__)


def setup_env() -> ClientConfig:
    """Load configuration and configure logging.

    Configuration discovery and environment substitution are handled by the
    config loader; without a config file the defaults are used.
    """
    config = load_or_default()
    configure_logging(os.getenv("LOG_LEVEL", config.log_level))
    return config


def main() -> int:
    # 1. Loggers are configured before the client modules are imported
    config = setup_env()

    # 2. Local imports (lazy loading)
    from webdriver_client.core.errors import WebDriverError
    from webdriver_client.core.session import Session
    from webdriver_client.core.status import wait_for_server_available

    if not wait_for_server_available(timeout=config.server_wait, port=config.port, host=config.host,
                                     verbose=config.verbose):
        logger.error(f"No WebDriver server ready at {config.base_url}")
        return 1

    try:
        session = Session(
            browser=config.browser,
            port=config.port,
            host=config.host,
            verbose=config.verbose,
            capabilities=config.capabilities,
            timeout=config.timeout,
        )
    except WebDriverError as e:
        logger.error(f"Could not open a session: {e}")
        return 1

    exit_code = 0
    try:
        if config.start_url:
            session.navigate(config.start_url)
            logger.info(f"Loaded {session.current_url()} - title: {session.title()!r}")
        else:
            logger.info(f"Server status: {session.status()}")
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, shutting down...")
    except WebDriverError as e:
        logger.error(f"Command failed: {e}")
        exit_code = 1
    finally:
        # Ensure the browser is closed even on error
        try:
            session.close()
        except WebDriverError as e:
            logger.error(f"Could not close session {session.id}: {e}")
            exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
