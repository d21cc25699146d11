import click
from .cli_logger import logger
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Path to the project directory holding elfactory.toml.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output, including each discovery step.")
@click.pass_context
def cli(ctx, path, verbose):
    """elfactory CLI: locate and create ExpressionFactory implementations."""
    ctx.obj = {"path": path}
    logger.verbose = verbose
    logger.log_to_file = True

cli.add_command(resolve)
cli.add_command(sources)
cli.add_command(create)
cli.add_command(config)
cli.add_command(version)
cli.add_command(log)

if __name__ == '__main__':
    try:
        cli()
    except Exception as e:
        click.echo(f"An unexpected error occurred: {e}", err=True)
        click.echo("Please report this issue to the elfactory developers.", err=True)
