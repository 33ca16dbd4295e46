"""Exact decimal backing for Num."""

from decimal import Context, Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP

from ..errors import ConfigurationError
from ..utils.numeric import D, DEFAULT_PRECISION
from .base import Num, NumFactory, NaN


class DecimalNumFactory(NumFactory):
    """
    Creates DecimalNum values.

    All arithmetic runs through this factory's own Context, so results do not
    depend on the thread's global decimal context.
    """

    name = "DecimalNum"

    def __init__(self, precision: int = DEFAULT_PRECISION, rounding: str = ROUND_HALF_UP):
        if not isinstance(precision, int) or isinstance(precision, bool) or precision <= 0:
            raise ConfigurationError(f"Decimal precision must be a positive integer, got {precision!r}")
        self.precision = precision
        self.rounding = rounding
        # No traps: undefined results come back as Decimal NaN/Infinity and are
        # mapped to the NaN sentinel
        self.context = Context(prec=precision, rounding=rounding, traps=[])
        self._zero = self.num_of(0)
        self._one = self.num_of(1)
        self._hundred = self.num_of(100)

    def num_of(self, value) -> Num:
        if isinstance(value, Num):
            if value.is_nan():
                return NaN
            if isinstance(value, DecimalNum) and value.factory is self:
                return value
            value = value.delegate
        return self.wrap(self.context.create_decimal(D(value)))

    def wrap(self, value: Decimal) -> Num:
        """Wrap an already-rounded Decimal, mapping NaN/Infinity to NaN."""
        if not value.is_finite():
            return NaN
        return DecimalNum(value, self)

    def produces(self, num: Num) -> bool:
        return isinstance(num, DecimalNum)

    def zero(self) -> Num:
        return self._zero

    def one(self) -> Num:
        return self._one

    def hundred(self) -> Num:
        return self._hundred

    def __repr__(self) -> str:
        return f"DecimalNumFactory(precision={self.precision})"


class DecimalNum(Num):
    """Num backed by decimal.Decimal."""

    __slots__ = ('_value', '_factory')

    def __init__(self, value: Decimal, factory: DecimalNumFactory):
        self._value = value
        self._factory = factory

    @property
    def delegate(self) -> Decimal:
        return self._value

    @property
    def factory(self) -> DecimalNumFactory:
        return self._factory

    def _plus(self, other: Num) -> Num:
        return self._factory.wrap(self._factory.context.add(self._value, other.delegate))

    def _minus(self, other: Num) -> Num:
        return self._factory.wrap(self._factory.context.subtract(self._value, other.delegate))

    def _multiplied_by(self, other: Num) -> Num:
        return self._factory.wrap(self._factory.context.multiply(self._value, other.delegate))

    def _divided_by(self, other: Num) -> Num:
        return self._factory.wrap(self._factory.context.divide(self._value, other.delegate))

    def _remainder(self, other: Num) -> Num:
        return self._factory.wrap(self._factory.context.remainder(self._value, other.delegate))

    def _pow(self, other: Num) -> Num:
        exponent = other.delegate
        if self._value.is_zero() and exponent < 0:
            return NaN
        if self._value < 0 and exponent != exponent.to_integral_value():
            return NaN
        return self._factory.wrap(self._factory.context.power(self._value, exponent))

    def sqrt(self) -> Num:
        if self._value < 0:
            return NaN
        return self._factory.wrap(self._factory.context.sqrt(self._value))

    def log(self) -> Num:
        if self._value <= 0:
            return NaN
        return self._factory.wrap(self._factory.context.ln(self._value))

    def abs(self) -> Num:
        return DecimalNum(self._value.copy_abs(), self._factory)

    def negate(self) -> Num:
        return DecimalNum(self._value.copy_negate(), self._factory)

    def floor(self) -> Num:
        return DecimalNum(self._value.to_integral_value(rounding=ROUND_FLOOR), self._factory)

    def ceil(self) -> Num:
        return DecimalNum(self._value.to_integral_value(rounding=ROUND_CEILING), self._factory)
