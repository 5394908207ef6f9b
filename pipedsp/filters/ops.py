"""Element-wise arithmetic filters.

Binary filters take ``(lhs, rhs)`` pairs, or a plain ``lhs`` when the
right-hand operand is fixed in the config:

    >>> Add().filter((1.0, 4.2))
    5.2
    >>> Mul(rhs=2).filter(3)
    6
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional

from pipedsp.core.stage import Filter


@dataclass(frozen=True)
class OperandConfig:
    """Optional fixed right-hand operand."""

    rhs: Optional[Any] = None


class _BinaryOp(Filter):
    Config = OperandConfig
    _operator: ClassVar[Callable[[Any, Any], Any]]

    def filter(self, input: Any) -> Any:
        rhs = self._config.rhs
        if rhs is None:
            lhs, rhs = input
        else:
            lhs = input
        return type(self)._operator(lhs, rhs)


class Add(_BinaryOp):
    """``lhs + rhs``"""

    _operator = operator.add


class Sub(_BinaryOp):
    """``lhs - rhs``"""

    _operator = operator.sub


class Mul(_BinaryOp):
    """``lhs * rhs``"""

    _operator = operator.mul


class Div(_BinaryOp):
    """``lhs / rhs``; division by zero is left to the caller."""

    _operator = operator.truediv


class Rem(_BinaryOp):
    """``lhs % rhs``"""

    _operator = operator.mod


class Neg(Filter):
    """``-x``"""

    def filter(self, input: Any) -> Any:
        return -input


class Square(Filter):
    """``x * x``"""

    def filter(self, input: Any) -> Any:
        return input * input
