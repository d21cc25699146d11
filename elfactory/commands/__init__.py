from .config import config
from .create import create
from .log import log
from .resolve import resolve
from .sources import sources
from .version import version

__all__ = ["config", "create", "log", "resolve", "sources", "version"]
