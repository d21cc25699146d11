import toml
import os
from .cli_logger import logger

CONFIG_FILE = "elfactory.toml"
CONFIG_TABLES = ("properties", "system", "loader", "platform")

def get_config_path(path="."):
    return os.path.join(path, CONFIG_FILE)

def load_config(path="."):
    """
    Reads elfactory.toml from the project directory.

    A missing or unreadable file gives an empty dict. Unknown top-level tables
    are kept but reported, since only CONFIG_TABLES drive resolution.
    """
    config_path = get_config_path(path)
    if not os.path.isfile(config_path):
        logger.debug(f"No {CONFIG_FILE} in {os.path.abspath(path)}")
        return {}
    logger.debug(f"Loading configuration from {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            conf = toml.load(f)
    except toml.TomlDecodeError as e:
        logger.error(f"Error decoding {CONFIG_FILE} at line {e.lineno}: {e.msg}")
        return {}
    except OSError as e:
        logger.error(f"Error reading {config_path}: {e}")
        return {}
    for key, value in conf.items():
        if isinstance(value, dict) and key not in CONFIG_TABLES:
            logger.warning(f"Ignoring unknown table [{key}] in {CONFIG_FILE}")
    return conf

def save_config(config, path="."):
    """Writes ``config`` to elfactory.toml. Returns True on success."""
    config_path = get_config_path(path)
    logger.debug(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config, f)
    except OSError as e:
        logger.error(f"Error saving {config_path}: {e}")
        return False
    return True


def get_value(config, key):
    """Looks up a dotted key such as 'properties.cache'. Raises KeyError if missing."""
    value = config
    for k in key.split('.'):
        if not isinstance(value, dict):
            raise KeyError(key)
        value = value[k]
    return value

def set_value(config, key, value):
    keys = key.split('.')
    d = config
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = value

def unset_value(config, key):
    keys = key.split('.')
    d = get_value(config, '.'.join(keys[:-1])) if len(keys) > 1 else config
    if not isinstance(d, dict):
        raise KeyError(key)
    del d[keys[-1]]


# -------- Resolution settings --------
def get_properties(config):
    """The [properties] table, handed to the factory constructor. None if absent."""
    return config.get("properties")

def get_system_properties(config):
    """os.environ overlaid with the [system] table, as strings."""
    merged = dict(os.environ)
    for key, value in config.get("system", {}).items():
        merged[key] = str(value)
    return merged

def get_search_path(config, path="."):
    """[loader] search_path entries, relative to the project directory."""
    entries = config.get("loader", {}).get("search_path", [])
    return [os.path.join(path, entry) for entry in entries]

def get_platform_root(config, path="."):
    root = config.get("platform", {}).get("root")
    return os.path.join(path, root) if root else None
