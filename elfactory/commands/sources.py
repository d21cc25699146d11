import click
from .. import resolver
from ..decorators import handle_exceptions
from ._context import load_resolution_settings

@click.command()
@click.pass_context
@handle_exceptions
def sources(ctx):
    """List every discovery source, in precedence order, with its value."""
    _, configured = load_resolution_settings(ctx)
    for name, value in resolver.describe_sources(sources=configured):
        click.echo(f"{name}: {value or '-'}")
    click.echo(f"{resolver.DEFAULT_SOURCE}: {resolver.DEFAULT_CLASS_NAME}")
