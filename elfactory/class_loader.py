import contextlib
import contextvars
import importlib
import inspect
import os
import sys

from .cli_logger import logger


class ClassNotFoundError(ImportError):
    """Raised when a class name does not resolve to a loadable class."""

    def __init__(self, class_name, reason=None):
        message = f"No class named '{class_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, name=class_name)
        self.class_name = class_name


class ClassLoader:
    """
    Loads resources and classes by name.

    Args:
        search_path: Directories searched, in order, for resources. When None the
            live ``sys.path`` is used, so later additions to it are seen.
        classes: Optional mapping of class name to class. These entries form an
            explicit registry that is consulted before importing.
    """

    def __init__(self, search_path=None, classes=None):
        self.search_path = list(search_path) if search_path is not None else None
        self._classes = {}
        for name, cls in (classes or {}).items():
            self.register(name, cls)

    def __repr__(self):
        return f"{type(self).__name__}(search_path={self.search_path!r})"

    def _resource_roots(self):
        return self.search_path if self.search_path is not None else sys.path

    def get_resource_as_stream(self, name):
        """
        Opens the first resource called ``name`` found on the search path.

        Args:
            name: A '/' separated resource name, e.g. "META-INF/services/x".

        Returns:
            A binary file object the caller must close, or None if no search path
            entry holds the resource.
        """
        segments = [segment for segment in name.split("/") if segment]
        for root in self._resource_roots():
            if root and not os.path.isdir(root):
                # Zip archives and other non-directory entries hold no loose resources.
                continue
            candidate = os.path.join(root, *segments)
            if os.path.isfile(candidate):
                logger.debug(f"Found resource {name} at {candidate}")
                try:
                    return open(candidate, "rb")
                except FileNotFoundError:
                    continue
        return None

    def register(self, name, cls, accepts_configuration=None):
        """
        Registers ``cls`` under ``name``.

        ``accepts_configuration`` states whether the class is built with the
        configuration object (True), without it (False), or is left to
        signature probing (None).
        """
        if not inspect.isclass(cls):
            raise TypeError(f"Expected a class for '{name}', got {type(cls).__name__}")
        self._classes[name] = (cls, accepts_configuration)

    def unregister(self, name):
        self._classes.pop(name, None)

    def accepts_configuration(self, cls):
        """Returns the registered configuration flag for ``cls``, or None."""
        for registered, flag in self._classes.values():
            if registered is cls and flag is not None:
                return flag
        return None

    def load_class(self, name):
        """
        Returns the class called ``name``.

        Registered classes win. Otherwise ``name`` is imported, either as
        "package.module:Qualified.Name" or as "package.module.Name".

        Raises:
            ClassNotFoundError: The module cannot be imported, the attribute is
                missing, or the attribute is not a class.
        """
        if name in self._classes:
            return self._classes[name][0]

        module_name, sep, qualname = name.partition(":")
        if not sep:
            module_name, _, qualname = name.rpartition(".")
        if not module_name or not qualname:
            raise ClassNotFoundError(name, "not a qualified class name")

        try:
            target = importlib.import_module(module_name)
        except ImportError as e:
            raise ClassNotFoundError(name, str(e)) from e

        for attr in qualname.split("."):
            try:
                target = getattr(target, attr)
            except AttributeError as e:
                raise ClassNotFoundError(name, f"'{module_name}' has no attribute '{qualname}'") from e

        if not inspect.isclass(target):
            raise ClassNotFoundError(name, f"{type(target).__name__} object is not a class")
        return target


SYSTEM_CLASS_LOADER = ClassLoader()

_context_class_loader = contextvars.ContextVar("elfactory_context_class_loader", default=None)


def get_context_class_loader():
    """Returns the class loader active for the current thread or task, or None."""
    return _context_class_loader.get()


def set_context_class_loader(loader):
    """Sets the context class loader. Returns a token for ``reset_context_class_loader``."""
    return _context_class_loader.set(loader)


def reset_context_class_loader(token):
    _context_class_loader.reset(token)


@contextlib.contextmanager
def context_class_loader(loader):
    token = _context_class_loader.set(loader)
    try:
        yield loader
    finally:
        _context_class_loader.reset(token)
