from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace

from brightctl.errors import CorruptValue, InvalidArgument, OutOfRange

log = logging.getLogger(__name__)

# ASCII decimal or exponent notation, or an explicit infinity.
_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|[+-]?(inf|infinity)", re.I)


@dataclass(frozen=True)
class BrightnessDevice:
    name: str
    current: int
    maximum: int

    def __post_init__(self) -> None:
        if self.maximum <= 0:
            raise CorruptValue(
                f"maximum brightness of {self.name} must be positive, got {self.maximum}"
            )

    def clamp(self, value: int) -> int:
        return max(0, min(int(value), self.maximum))

    def with_current(self, value: int) -> BrightnessDevice:
        return replace(self, current=self.clamp(value))


@dataclass(frozen=True)
class BrightnessExpression:
    """A parsed brightness argument.

    value is always a fraction of the maximum (percentages are already divided
    by 100) and lies within [-1.0, 1.0].
    """

    value: float
    relative: bool
    percent: bool


def get_percentage(device: BrightnessDevice) -> float:
    """Return current/maximum truncated (never rounded) to two decimals."""

    return math.trunc(device.current / device.maximum * 100) / 100


def parse_expression(expr: str) -> BrightnessExpression:
    """Parse "50%", "+5%", "-0.05", "0.5" and friends.

    A leading sign makes the expression relative; the sign itself is left in
    place for float() to consume.
    """

    text = expr.strip()
    percent = text.endswith("%")
    relative = text.startswith(("+", "-"))

    number = text[:-1] if percent else text
    if not _NUMBER.fullmatch(number):
        raise InvalidArgument("invalid argument, expected a number")
    value = float(number)
    # A finite literal too large for a float overflows to inf.
    if math.isinf(value) and "inf" not in number.lower():
        raise InvalidArgument("invalid argument, expected a number")

    if percent:
        value = value / 100.0

    if not relative and value < 0:
        raise InvalidArgument("absolute value cannot be negative")

    if value > 1 or value < -1:
        raise OutOfRange("value must be between +/- 100% or +/- 1.0")

    return BrightnessExpression(value=value, relative=relative, percent=percent)


def apply_expression(
    device: BrightnessDevice, expression: BrightnessExpression
) -> BrightnessDevice:
    # int() truncates toward zero for negative deltas as well.
    delta = int(expression.value * device.maximum)

    if expression.relative:
        target = device.current + delta
    else:
        target = delta

    updated = device.with_current(target)
    log.debug(
        "brightness %s: %d -> %d (max %d, delta %d)",
        device.name,
        device.current,
        updated.current,
        device.maximum,
        delta,
    )
    return updated


def set_from_expression(device: BrightnessDevice, expr: str) -> BrightnessDevice:
    return apply_expression(device, parse_expression(expr))
