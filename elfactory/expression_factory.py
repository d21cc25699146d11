from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence, overload

from . import resolver
from .expressions import ELContext, MethodExpression, ValueExpression


class ExpressionFactory(ABC):
    """
    Creates value and method expressions for an expression-language runtime.

    Concrete factories are located at runtime by ``new_instance``. The class name
    is taken from the first of these that provides one:

    1. the services resource (META-INF/services/elfactory.ExpressionFactory)
    2. <platform-root>/jre/lib/el.properties, key elfactory.ExpressionFactory
    3. the elfactory.ExpressionFactory process property
    4. the platform default, elimpl.ExpressionFactoryImpl
    """

    @abstractmethod
    def coerce_to_type(self, obj: Any, expected_type: type) -> Any:
        pass

    @overload
    def create_value_expression(self, context: ELContext, expression: str,
                                expected_type: type) -> ValueExpression:
        ...

    @overload
    def create_value_expression(self, instance: Any, expected_type: type) -> ValueExpression:
        ...

    @abstractmethod
    def create_value_expression(self, *args):
        """
        Either parses ``expression`` in ``context`` (three arguments) or wraps an
        existing ``instance`` (two arguments). Both forms coerce to
        ``expected_type``.
        """

    @abstractmethod
    def create_method_expression(self, context: ELContext, expression: str,
                                 expected_return_type: Optional[type],
                                 expected_param_types: Sequence[type]) -> MethodExpression:
        pass

    @classmethod
    def new_instance(cls, properties: Optional[Mapping] = None, loader=None) -> "ExpressionFactory":
        """
        Creates a new ExpressionFactory, re-running discovery on every call.

        Args:
            properties: Optional configuration passed to the implementation's
                single-argument constructor, when it has one.
            loader: The ClassLoader to use. Defaults to the context class loader,
                then the system class loader.

        Raises:
            ELException: No implementation could be read, found or created.
        """
        return resolver.resolve(properties, loader=loader)


def new_instance(properties=None, loader=None):
    return ExpressionFactory.new_instance(properties, loader=loader)
