"""
Currency Arithmetic Module

Decimal conversion and whole-unit rounding for repayment amounts.
NEVER uses float for monetary values: floats supplied by callers are
converted through their string form before any arithmetic.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, ROUND_FLOOR, getcontext
from typing import Any, Optional
import re

from .exceptions import InvalidInput

# Set global decimal context for financial precision
getcontext().prec = 28  # High precision for financial calculations

WHOLE_UNIT = Decimal('1')


# Currency symbols and whitespace that may surround a typed amount
CURRENCY_NOISE = re.compile(r'[\s$€£¥₦]')


def decimal_from_string(value: str, field: Optional[str] = None) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats
    
    Only currency symbols, whitespace and thousands separators are removed;
    anything else must parse as a Decimal literal, so "1e5" is 100000 and
    "100abc" is rejected rather than read as 100.
    
    Args:
        value: String representation of number, e.g. "₦150,000.50"
        field: Name of the input, reported on failure
        
    Returns:
        Decimal value
        
    Raises:
        InvalidInput: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidInput("Value must be a non-empty string", field=field, value=value)
    
    clean_value = CURRENCY_NOISE.sub('', value)
    
    # Handle comma as decimal separator (European format)
    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif clean_value.count(',') == 1 and len(clean_value.split(',')[1]) <= 2:
        # Single comma with a short fraction - decimal separator
        clean_value = clean_value.replace(',', '.')
    else:
        clean_value = clean_value.replace(',', '')
    
    try:
        return Decimal(clean_value)
    except InvalidOperation:
        label = field or "value"
        raise InvalidInput(f"Cannot convert {label} '{value}' to Decimal", field=field, value=value)


def to_decimal(value: Any, field: Optional[str] = None) -> Decimal:
    """
    Convert a caller-supplied number to Decimal
    
    Args:
        value: Decimal, int, float or numeric string
        field: Name of the input, reported on failure
        
    Returns:
        Finite Decimal value
        
    Raises:
        InvalidInput: If the value is not a finite number
    """
    label = field or "value"
    
    # bool is an int subclass but never a meaningful amount
    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"{label} must be a number, got {value!r}", field=field, value=value)
    
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = decimal_from_string(value, field)
    else:
        raise InvalidInput(f"{label} must be a number, got {type(value).__name__}",
                           field=field, value=value)
    
    if not result.is_finite():
        raise InvalidInput(f"{label} must be finite, got {value!r}", field=field, value=value)
    
    return result


def round_to_unit(value: Decimal) -> int:
    """Round to whole currency units, half away from zero"""
    return int(value.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP))


def floor_to_unit(value: Decimal) -> int:
    """Round down to whole currency units so amounts are never overstated"""
    return int(value.quantize(WHOLE_UNIT, rounding=ROUND_FLOOR))
