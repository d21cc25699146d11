import click
import os
import sys
import json
from .. import config as config_module
from ..cli_logger import logger

@click.group()
@click.pass_context
def config(ctx):
    """View or edit the elfactory.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View the contents of the elfactory.toml file."""
    config_file_path = config_module.get_config_path(ctx.obj["path"])
    if not os.path.exists(config_file_path):
        logger.error("Error: No elfactory.toml found.")
        return
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading elfactory.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while viewing elfactory.toml: {e}")
        logger.exception(*sys.exc_info())

@config.command(name="list")
@click.pass_context
def list_(ctx):
    """List all configuration keys and values."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No elfactory.toml found.")
        return
    click.echo(json.dumps(conf, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value from the elfactory.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No elfactory.toml found.")
        return

    try:
        value = config_module.get_value(conf, key)
    except KeyError:
        logger.error(f"Error: Key '{key}' not found in elfactory.toml")
        return
    if isinstance(value, dict):
        click.echo(json.dumps(value, indent=4))
    else:
        click.echo(value)

@config.command(name="set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_(ctx, key, value):
    """Set a value in the elfactory.toml file, creating the file if needed."""
    conf = config_module.load_config(path=ctx.obj["path"])
    config_module.set_value(conf, key, value)
    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key from the elfactory.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error("Error: No elfactory.toml found.")
        return

    try:
        config_module.unset_value(conf, key)
    except KeyError:
        logger.error(f"Error: Key '{key}' not found in elfactory.toml")
        return
    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Unset '{key}'")
