import click
import importlib.metadata
import sys
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of elfactory."""
    try:
        ver = importlib.metadata.version("elfactory")
        click.echo(f"elfactory version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of elfactory. Is it installed correctly?")
    except Exception as e:
        logger.error(f"An unexpected error occurred while determining elfactory version: {e}")
        logger.exception(*sys.exc_info())
