"""
Numeric value contract.

Every indicator formula computes through Num so the same code runs over the
exact decimal backing and the float backing. NaN is a tagged sentinel shared by
both backings: it propagates through arithmetic and compares false with
everything, itself included.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from ..errors import NumericTypeMismatchError

# Plain Python values accepted as operands and converted with the left
# operand's factory
NUMBER_TYPES = (int, float, Decimal)


def _is_number(value) -> bool:
    return isinstance(value, NUMBER_TYPES) and not isinstance(value, bool)


def _is_operand(value) -> bool:
    return isinstance(value, Num) or _is_number(value)


class NumFactory(ABC):
    """Creates Num values of one backing representation."""

    name = "Num"

    @abstractmethod
    def num_of(self, value) -> 'Num':
        """Convert a Python number (or a Num) into this backing."""
        pass

    @abstractmethod
    def produces(self, num: 'Num') -> bool:
        """True if num belongs to this factory's backing."""
        pass

    def zero(self) -> 'Num':
        return self.num_of(0)

    def one(self) -> 'Num':
        return self.num_of(1)

    def hundred(self) -> 'Num':
        return self.num_of(100)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Num(ABC):
    """
    Immutable scalar value.

    Named operations (plus, minus, ...) and Python operators are equivalent.
    Subclasses implement the underscore primitives for non-NaN operands of
    their own backing; NaN handling, operand coercion and the division-by-zero
    rule live here.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def delegate(self):
        """Backing Python value (Decimal or float)."""
        pass

    @property
    @abstractmethod
    def factory(self) -> NumFactory:
        pass

    @property
    def name(self) -> str:
        return self.factory.name

    # Backing primitives

    @abstractmethod
    def _plus(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def _minus(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def _multiplied_by(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def _divided_by(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def _remainder(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def _pow(self, other: 'Num') -> 'Num':
        pass

    @abstractmethod
    def sqrt(self) -> 'Num':
        pass

    @abstractmethod
    def log(self) -> 'Num':
        """Natural logarithm; NaN for non-positive values."""
        pass

    @abstractmethod
    def abs(self) -> 'Num':
        pass

    @abstractmethod
    def negate(self) -> 'Num':
        pass

    @abstractmethod
    def floor(self) -> 'Num':
        pass

    @abstractmethod
    def ceil(self) -> 'Num':
        pass

    def _compare(self, other: 'Num') -> int:
        a, b = self.delegate, other.delegate
        return (a > b) - (a < b)

    def _operand(self, other) -> 'Num':
        if isinstance(other, Num):
            if other.is_nan():
                return other
            if type(other) is not type(self):
                raise NumericTypeMismatchError(
                    f"Cannot combine {self.name} with {other.name}"
                )
            return other
        return self.factory.num_of(other)

    # Arithmetic

    def plus(self, augend) -> 'Num':
        other = self._operand(augend)
        return NaN if other.is_nan() else self._plus(other)

    def minus(self, subtrahend) -> 'Num':
        other = self._operand(subtrahend)
        return NaN if other.is_nan() else self._minus(other)

    def multiplied_by(self, multiplicand) -> 'Num':
        other = self._operand(multiplicand)
        return NaN if other.is_nan() else self._multiplied_by(other)

    def divided_by(self, divisor) -> 'Num':
        other = self._operand(divisor)
        if other.is_nan() or other.is_zero():
            return NaN
        return self._divided_by(other)

    def remainder(self, divisor) -> 'Num':
        other = self._operand(divisor)
        if other.is_nan() or other.is_zero():
            return NaN
        return self._remainder(other)

    def pow(self, exponent) -> 'Num':
        other = self._operand(exponent)
        return NaN if other.is_nan() else self._pow(other)

    def min(self, other) -> 'Num':
        other = self._operand(other)
        if other.is_nan():
            return NaN
        return self if self._compare(other) <= 0 else other

    def max(self, other) -> 'Num':
        other = self._operand(other)
        if other.is_nan():
            return NaN
        return self if self._compare(other) >= 0 else other

    # Predicates

    def is_nan(self) -> bool:
        return False

    def is_zero(self) -> bool:
        return self.delegate == 0

    def is_positive(self) -> bool:
        return self.delegate > 0

    def is_positive_or_zero(self) -> bool:
        return self.delegate >= 0

    def is_negative(self) -> bool:
        return self.delegate < 0

    def is_negative_or_zero(self) -> bool:
        return self.delegate <= 0

    def is_equal(self, other) -> bool:
        other = self._operand(other)
        return not other.is_nan() and self._compare(other) == 0

    def is_greater_than(self, other) -> bool:
        other = self._operand(other)
        return not other.is_nan() and self._compare(other) > 0

    def is_greater_than_or_equal(self, other) -> bool:
        other = self._operand(other)
        return not other.is_nan() and self._compare(other) >= 0

    def is_less_than(self, other) -> bool:
        other = self._operand(other)
        return not other.is_nan() and self._compare(other) < 0

    def is_less_than_or_equal(self, other) -> bool:
        other = self._operand(other)
        return not other.is_nan() and self._compare(other) <= 0

    # Constants of the same backing

    def num_of(self, value) -> 'Num':
        return self.factory.num_of(value)

    def zero(self) -> 'Num':
        return self.factory.zero()

    def one(self) -> 'Num':
        return self.factory.one()

    def hundred(self) -> 'Num':
        return self.factory.hundred()

    # Python operators

    def _reflected(self, other) -> 'Num':
        return self.factory.num_of(other)

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self._reflected(other).plus(self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self._reflected(other).minus(self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self._reflected(other).multiplied_by(self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.divided_by(other)

    def __rtruediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self._reflected(other).divided_by(self)

    def __mod__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.remainder(other)

    def __pow__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.pow(other)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def _other_backing(self, other) -> bool:
        return isinstance(other, Num) and not other.is_nan() and type(other) is not type(self)

    def __eq__(self, other):
        if not _is_operand(other):
            return NotImplemented
        # Values of different backings are unequal; only arithmetic raises
        if self._other_backing(other):
            return False
        return self.is_equal(other)

    def __ne__(self, other):
        if not _is_operand(other):
            return NotImplemented
        if self._other_backing(other):
            return True
        return not self.is_equal(other)

    def __lt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.is_less_than_or_equal(other)

    def __gt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.is_greater_than_or_equal(other)

    def __hash__(self):
        return hash(self.delegate)

    def __float__(self):
        return float(self.delegate)

    def __str__(self):
        return str(self.delegate)

    def __repr__(self):
        return f"{self.name}({self.delegate})"


class _NaNFactory(NumFactory):
    """Factory of the NaN sentinel: every value it produces is NaN."""

    name = "NaN"

    def num_of(self, value) -> Num:
        return NaN

    def produces(self, num: Num) -> bool:
        return num is NaN


class _NaN(Num):
    """Not-a-number sentinel shared by every backing."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def delegate(self):
        return float('nan')

    @property
    def factory(self) -> NumFactory:
        return _NAN_FACTORY

    def is_nan(self) -> bool:
        return True

    def _same(self, *args) -> Num:
        return self

    _plus = _minus = _multiplied_by = _divided_by = _remainder = _pow = _same
    plus = minus = multiplied_by = divided_by = remainder = pow = _same
    min = max = _same

    def sqrt(self) -> Num:
        return self

    def log(self) -> Num:
        return self

    def abs(self) -> Num:
        return self

    def negate(self) -> Num:
        return self

    def floor(self) -> Num:
        return self

    def ceil(self) -> Num:
        return self

    def _false(self, *args) -> bool:
        return False

    is_zero = is_positive = is_positive_or_zero = _false
    is_negative = is_negative_or_zero = _false
    is_equal = is_greater_than = is_greater_than_or_equal = _false
    is_less_than = is_less_than_or_equal = _false

    def _reflected(self, other) -> Num:
        return self

    def __hash__(self):
        return id(self)

    def __reduce__(self):
        return (_NaN, ())

    def __str__(self):
        return "NaN"

    def __repr__(self):
        return "NaN"


_NAN_FACTORY = _NaNFactory()
NaN = _NaN()
