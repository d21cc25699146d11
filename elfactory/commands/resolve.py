import click
from .. import resolver
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ._context import load_resolution_settings

@click.command()
@click.pass_context
@handle_exceptions
def resolve(ctx):
    """Show which ExpressionFactory class would be used, and where it came from."""
    _, sources = load_resolution_settings(ctx)
    class_name, source_name = resolver.resolve_class_name(sources=sources)
    logger.debug(f"Resolved {class_name} from {source_name}")
    click.echo(f"{class_name} ({source_name})")
