"""
Collaborator types handed out by an ExpressionFactory.

Parsing and evaluation live in the implementation that the factory locates;
these classes only fix the surface that callers program against.
"""
from abc import ABC, abstractmethod


class ELContext(ABC):
    """Evaluation context passed to expression creation and evaluation."""


class Expression(ABC):

    @abstractmethod
    def get_expression_string(self):
        pass

    @abstractmethod
    def is_literal_text(self):
        pass


class ValueExpression(Expression):

    @abstractmethod
    def get_value(self, context):
        pass

    @abstractmethod
    def set_value(self, context, value):
        pass

    @abstractmethod
    def is_read_only(self, context):
        pass

    @abstractmethod
    def get_type(self, context):
        pass

    @abstractmethod
    def get_expected_type(self):
        pass


class MethodExpression(Expression):

    @abstractmethod
    def get_method_info(self, context):
        pass

    @abstractmethod
    def invoke(self, context, params):
        pass
