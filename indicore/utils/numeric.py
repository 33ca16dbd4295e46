"""Numeric utilities for consistent Decimal handling and backing selection."""

from decimal import Decimal
from typing import Any, Dict, Optional

from ..errors import ConfigurationError

# Default precision for the exact decimal backing
DEFAULT_PRECISION = 32


def D(x) -> Decimal:
    """
    Robust Decimal conversion for ints/floats/strings/Decimals.

    Single source of truth for numeric conversions.
    Avoids binary floating-point artifacts by converting floats to strings first.

    Args:
        x: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal: Converted value

    Raises:
        TypeError: If type is not supported
    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise TypeError(f"Unsupported numeric type: {type(x)}")
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, str):
        return Decimal(x.strip())
    if isinstance(x, float):
        # Convert float to string first to avoid binary FP artifacts
        return Decimal(str(x))
    raise TypeError(f"Unsupported numeric type: {type(x)}")


def num_factory_for(config: Optional[Dict[str, Any]] = None):
    """
    Build a NumFactory from a numeric config section.

    Args:
        config: {"type": "decimal" | "double", "precision": int}
            Missing config selects the decimal backing.

    Returns:
        NumFactory for the requested backing

    Raises:
        ConfigurationError: If the type is unknown or precision is invalid
    """
    from ..num.decimal_num import DecimalNumFactory
    from ..num.double_num import DoubleNumFactory

    config = config or {}
    num_type = str(config.get('type', 'decimal')).lower()

    if num_type == 'decimal':
        precision = config.get('precision', DEFAULT_PRECISION)
        return DecimalNumFactory(precision=precision)
    if num_type == 'double':
        return DoubleNumFactory()
    raise ConfigurationError(f"Unknown numeric type: {num_type!r}")
