from decimal import Decimal, ROUND_HALF_UP
import re

NUMERIC_REGEX = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')


def parse_decimal_input(value, allow_negative=False, quantize=None, error_label='Value'):
    """
    Parser for numeric inputs coming from query strings, forms or JSON.
    Returns a Decimal (optionally quantized); raises ValueError otherwise.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f'{error_label} is required')

    if isinstance(value, (int, float, Decimal)):
        normalized = str(value)
    else:
        normalized = str(value).strip()

    if not normalized:
        raise ValueError(f'{error_label} is required')

    if not NUMERIC_REGEX.match(normalized):
        raise ValueError(f'{error_label} must be a number')

    decimal_value = Decimal(normalized)

    if decimal_value < 0 and not allow_negative:
        raise ValueError(f'{error_label} must be at least 0')

    if quantize:
        decimal_value = decimal_value.quantize(Decimal(quantize), rounding=ROUND_HALF_UP)

    return decimal_value
