import functools
import click
import sys
from .cli_logger import logger
from .exceptions import ELException

def handle_exceptions(func):
    """A decorator to handle common exceptions for CLI commands."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.Abort:
            logger.warning("\nCommand aborted by user.")
            sys.exit(1)
        except ELException as e:
            logger.error(f"Error: {e}")
            if e.cause is not None:
                logger.error(f"Caused by: {type(e.cause).__name__}: {e.cause}")
            sys.exit(1)
        except click.ClickException as e:
            logger.error(f"CLI Error: {e}")
            logger.exception(*sys.exc_info())
            sys.exit(1)
        except Exception as e:
            logger.error(f"\nAn unexpected error occurred: {e}")
            logger.exception(*sys.exc_info())
            sys.exit(1)
    return wrapper
