"""Float backing for Num."""

import math
from decimal import Decimal

from .base import Num, NumFactory, NaN


def _wrap(value: float, factory: 'DoubleNumFactory') -> Num:
    # Infinities are mapped to NaN like the decimal backing
    if not math.isfinite(value):
        return NaN
    return DoubleNum(value, factory)


class DoubleNumFactory(NumFactory):
    """Creates DoubleNum values."""

    name = "DoubleNum"

    def __init__(self):
        self._zero = DoubleNum(0.0, self)
        self._one = DoubleNum(1.0, self)
        self._hundred = DoubleNum(100.0, self)

    def num_of(self, value) -> Num:
        if isinstance(value, Num):
            if value.is_nan():
                return NaN
            if isinstance(value, DoubleNum) and value.factory is self:
                return value
            value = value.delegate
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise TypeError(f"Unsupported numeric type: {type(value)}")
        return _wrap(float(value), self)

    def produces(self, num: Num) -> bool:
        return isinstance(num, DoubleNum)

    def zero(self) -> Num:
        return self._zero

    def one(self) -> Num:
        return self._one

    def hundred(self) -> Num:
        return self._hundred


class DoubleNum(Num):
    """Num backed by a Python float."""

    __slots__ = ('_value', '_factory')

    def __init__(self, value: float, factory: DoubleNumFactory):
        self._value = value
        self._factory = factory

    @property
    def delegate(self) -> float:
        return self._value

    @property
    def factory(self) -> DoubleNumFactory:
        return self._factory

    def _plus(self, other: Num) -> Num:
        return _wrap(self._value + other.delegate, self._factory)

    def _minus(self, other: Num) -> Num:
        return _wrap(self._value - other.delegate, self._factory)

    def _multiplied_by(self, other: Num) -> Num:
        return _wrap(self._value * other.delegate, self._factory)

    def _divided_by(self, other: Num) -> Num:
        return _wrap(self._value / other.delegate, self._factory)

    def _remainder(self, other: Num) -> Num:
        return _wrap(math.fmod(self._value, other.delegate), self._factory)

    def _pow(self, other: Num) -> Num:
        try:
            return _wrap(math.pow(self._value, other.delegate), self._factory)
        except (ValueError, OverflowError):
            return NaN

    def sqrt(self) -> Num:
        if self._value < 0:
            return NaN
        return _wrap(math.sqrt(self._value), self._factory)

    def log(self) -> Num:
        if self._value <= 0:
            return NaN
        return _wrap(math.log(self._value), self._factory)

    def abs(self) -> Num:
        return DoubleNum(abs(self._value), self._factory)

    def negate(self) -> Num:
        return DoubleNum(-self._value, self._factory)

    def floor(self) -> Num:
        return DoubleNum(float(math.floor(self._value)), self._factory)

    def ceil(self) -> Num:
        return DoubleNum(float(math.ceil(self._value)), self._factory)
