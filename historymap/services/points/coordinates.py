"""Coordinate parsing shared by backend records and user-entered form values."""
import math
import re
from numbers import Real
from typing import Any, Optional

_DECIMAL = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_coordinate(value: Any) -> Optional[float]:
    """
    Coerce a latitude/longitude value to a finite float.

    Numbers are taken as-is; strings are parsed as plain decimals, accepting
    either ``.`` or a single ``,`` as the decimal separator. Returns None for
    anything else, including NaN and infinities.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, Real):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        if not _DECIMAL.match(text):
            return None
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number
