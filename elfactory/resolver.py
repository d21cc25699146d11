import inspect
import os
import sys
import types
import typing
from typing import Any, Union

from jproperties import Properties, PropertyError

from .cli_logger import logger
from .class_loader import ClassNotFoundError, SYSTEM_CLASS_LOADER, get_context_class_loader
from .exceptions import ELException

PROPERTY_NAME = "elfactory.ExpressionFactory"
SERVICE_RESOURCE_NAME = f"META-INF/services/{PROPERTY_NAME}"
PROPERTY_FILE_SEGMENTS = ("jre", "lib", "el.properties")
PLATFORM_ROOT_ENV = "ELFACTORY_HOME"
DEFAULT_CLASS_NAME = "elimpl.ExpressionFactoryImpl"
DEFAULT_SOURCE = "default"

_UnionType = getattr(types, "UnionType", None)


def _clean(value):
    """Returns ``value`` stripped, or None when it is missing or blank."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_platform_root():
    return os.environ.get(PLATFORM_ROOT_ENV) or sys.prefix


def get_property_file(platform_root=None):
    return os.path.join(platform_root or get_platform_root(), *PROPERTY_FILE_SEGMENTS)


def current_class_loader(loader=None):
    """The explicit loader, else the context class loader, else the system one."""
    return loader or get_context_class_loader() or SYSTEM_CLASS_LOADER


class ServiceResourceSource:
    """The first line of META-INF/services/elfactory.ExpressionFactory."""

    name = "service-resource"

    def __init__(self, loader=None):
        self.loader = loader

    def lookup(self):
        loader = current_class_loader(self.loader)
        try:
            stream = loader.get_resource_as_stream(SERVICE_RESOURCE_NAME)
        except OSError as e:
            raise ELException(f"Failed to read {SERVICE_RESOURCE_NAME}", e) from e
        if stream is None:
            logger.debug(f"No {SERVICE_RESOURCE_NAME} resource on {loader!r}")
            return None

        try:
            with stream:
                line = stream.readline()
        except OSError as e:
            raise ELException(f"Failed to read {SERVICE_RESOURCE_NAME}", e) from e

        if isinstance(line, bytes):
            line = line.decode("utf-8-sig", errors="replace")
        # A bare \r also ends the line.
        lines = line.splitlines()
        return _clean(lines[0] if lines else None)


class PlatformPropertiesSource:
    """The elfactory.ExpressionFactory key of <platform-root>/jre/lib/el.properties."""

    name = "platform-properties"

    def __init__(self, platform_root=None):
        self.platform_root = platform_root

    @property
    def path(self):
        return get_property_file(self.platform_root)

    def lookup(self):
        path = self.path
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            logger.debug(f"No readable properties file at {path}")
            return None

        props = Properties()
        try:
            with open(path, "rb") as f:
                props.load(f, "iso-8859-1")
        except FileNotFoundError:
            return None
        except (OSError, PropertyError) as e:
            raise ELException(f"Failed to read {path}", e) from e

        entry = props.get(PROPERTY_NAME)
        return _clean(entry.data if entry is not None else None)


class ProcessPropertySource:
    """The elfactory.ExpressionFactory process property (os.environ by default)."""

    name = "process-property"

    def __init__(self, properties=None):
        self.properties = properties

    def lookup(self):
        properties = self.properties if self.properties is not None else os.environ
        return _clean(properties.get(PROPERTY_NAME))


def default_sources(loader=None, platform_root=None, properties=None):
    """The discovery sources in precedence order, ahead of the built-in default."""
    return [
        ServiceResourceSource(loader),
        PlatformPropertiesSource(platform_root),
        ProcessPropertySource(properties),
    ]


def resolve_class_name(loader=None, sources=None, default=DEFAULT_CLASS_NAME):
    """
    Walks the discovery sources and returns the first class name found.

    Returns:
        A ``(class_name, source_name)`` tuple. When no source yields a name the
        default is returned with source name "default".

    Raises:
        ELException: A source exists but could not be read.
    """
    if sources is None:
        sources = default_sources(loader)

    for source in sources:
        class_name = source.lookup()
        if class_name:
            logger.debug(f"ExpressionFactory class '{class_name}' found via {source.name}")
            return class_name, source.name
        logger.debug(f"No ExpressionFactory class from {source.name}")

    logger.debug(f"Falling back to default ExpressionFactory class '{default}'")
    return default, DEFAULT_SOURCE


def describe_sources(loader=None, sources=None):
    """Pairs every discovery source name with its lookup result (None when absent)."""
    if sources is None:
        sources = default_sources(loader)
    return [(source.name, source.lookup()) for source in sources]


def _annotation_accepts(annotation, properties):
    if annotation is Any:
        return True
    origin = typing.get_origin(annotation)
    if origin is Union or (_UnionType is not None and isinstance(annotation, _UnionType)):
        return any(_annotation_accepts(arg, properties) for arg in typing.get_args(annotation))
    target = origin or annotation
    if not inspect.isclass(target):
        return False
    try:
        return isinstance(properties, target)
    except TypeError:
        return False


def _configuration_parameter(cls):
    """
    Returns the single positional parameter of the constructor of ``cls``, or
    None when the constructor takes anything other than exactly one.
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return None
    params = list(signature.parameters.values())
    if len(params) != 1:
        return None
    param = params[0]
    if param.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
        return None
    return param


def _resolved_annotation(cls, param):
    annotation = param.annotation
    if isinstance(annotation, str):
        try:
            hints = typing.get_type_hints(cls.__init__)
        except (NameError, AttributeError, TypeError, SyntaxError):
            return None
        annotation = hints.get(param.name)
    return annotation


def _accepts_configuration(loader, cls, properties):
    flag = getattr(loader, "accepts_configuration", lambda _cls: None)(cls)
    if flag is not None:
        return flag

    param = _configuration_parameter(cls)
    if param is None:
        return False

    if param.annotation is inspect.Parameter.empty:
        # Unannotated: the default, if any, must be None or of the configuration's type.
        return (
            param.default is inspect.Parameter.empty
            or param.default is None
            or isinstance(param.default, type(properties))
        )

    annotation = _resolved_annotation(cls, param)
    return annotation is not None and _annotation_accepts(annotation, properties)


def instantiate(class_name, properties=None, loader=None):
    """
    Loads ``class_name`` and builds an ExpressionFactory from it.

    When ``properties`` is given and the constructor takes exactly one
    positional argument whose annotation (or default, when unannotated) admits
    the configuration object, it is built with ``properties`` (the same
    object, not a copy).
    Otherwise the zero-argument constructor is used.

    Raises:
        ELException: The class cannot be found, or cannot be created.
    """
    # Imported here, expression_factory imports this module.
    from .expression_factory import ExpressionFactory

    loader = current_class_loader(loader)
    try:
        cls = loader.load_class(class_name)
    except ClassNotFoundError as e:
        raise ELException(f"Unable to find ExpressionFactory of type: {class_name}", e) from e
    except Exception as e:
        raise ELException(f"Unable to create ExpressionFactory of type: {class_name}", e) from e

    with_configuration = properties is not None and _accepts_configuration(loader, cls, properties)
    try:
        if with_configuration:
            logger.debug(f"Creating {class_name} with configuration")
            result = cls(properties)
        else:
            logger.debug(f"Creating {class_name}")
            result = cls()
    except Exception as e:
        raise ELException(f"Unable to create ExpressionFactory of type: {class_name}", e) from e

    if not isinstance(result, ExpressionFactory):
        raise ELException(
            f"Unable to create ExpressionFactory of type: {class_name}",
            TypeError(f"{type(result).__name__} is not an ExpressionFactory"),
        )
    return result


def resolve(properties=None, loader=None, sources=None, default=DEFAULT_CLASS_NAME):
    """Finds the ExpressionFactory class name and returns a new instance of it."""
    loader = current_class_loader(loader)
    class_name, source_name = resolve_class_name(loader, sources, default)
    factory = instantiate(class_name, properties, loader)
    logger.debug(f"Created {type(factory).__name__} from {source_name}")
    return factory
