import sys
from .. import config as config_module
from .. import resolver


def load_resolution_settings(ctx):
    """
    Reads elfactory.toml from the project directory and prepares discovery.

    The [loader] search_path entries are put in front of sys.path so that both
    the services resource and the factory module are found there.

    Returns:
        A tuple (config, sources) where sources are the discovery sources
        configured with the [platform] root and [system] properties.
    """
    path = ctx.obj["path"]
    conf = config_module.load_config(path=path)
    for entry in reversed(config_module.get_search_path(conf, path)):
        if entry not in sys.path:
            sys.path.insert(0, entry)
    sources = resolver.default_sources(
        platform_root=config_module.get_platform_root(conf, path),
        properties=config_module.get_system_properties(conf),
    )
    return conf, sources
