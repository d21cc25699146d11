import click
from .. import config as config_module
from .. import resolver
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ._context import load_resolution_settings

@click.command()
@click.option("--no-properties", is_flag=True, help="Do not pass the [properties] table to the factory.")
@click.pass_context
@handle_exceptions
def create(ctx, no_properties):
    """Create the ExpressionFactory and report its type."""
    conf, sources = load_resolution_settings(ctx)
    properties = None if no_properties else config_module.get_properties(conf)

    class_name, source_name = resolver.resolve_class_name(sources=sources)
    logger.info(f"Creating {class_name} (from {source_name})...")
    factory = resolver.instantiate(class_name, properties)

    factory_type = type(factory)
    logger.success(f"Created {factory_type.__module__}.{factory_type.__qualname__}")
    click.echo(f"{factory_type.__module__}.{factory_type.__qualname__}")
