from .class_loader import (
    SYSTEM_CLASS_LOADER,
    ClassLoader,
    ClassNotFoundError,
    context_class_loader,
    get_context_class_loader,
    reset_context_class_loader,
    set_context_class_loader,
)
from .exceptions import ELException
from .expression_factory import ExpressionFactory, new_instance
from .expressions import ELContext, Expression, MethodExpression, ValueExpression
from .resolver import (
    DEFAULT_CLASS_NAME,
    PROPERTY_NAME,
    SERVICE_RESOURCE_NAME,
)

__all__ = [
    "DEFAULT_CLASS_NAME",
    "PROPERTY_NAME",
    "SERVICE_RESOURCE_NAME",
    "SYSTEM_CLASS_LOADER",
    "ClassLoader",
    "ClassNotFoundError",
    "ELContext",
    "ELException",
    "Expression",
    "ExpressionFactory",
    "MethodExpression",
    "ValueExpression",
    "context_class_loader",
    "get_context_class_loader",
    "new_instance",
    "reset_context_class_loader",
    "set_context_class_loader",
]
