"""
Display formatting for ROI metrics.

Turns raw numeric outputs into money, percent and months strings for a
fixed set of locales.
"""

import math
from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Dict

from .validation import is_nan, is_number

DEFAULT_LOCALE = "de-DE"

NO_PAYBACK = "No payback"
MONEY_PLACEHOLDER = "€--"
PERCENT_PLACEHOLDER = "--%"

_NBSP = "\u00a0"
_WIDE = Context(prec=400)


@dataclass(frozen=True)
class LocaleFormat:
    """Number formatting conventions for one locale."""
    group_separator: str
    decimal_separator: str
    currency_prefix: str
    currency_suffix: str
    percent_suffix: str


@dataclass(frozen=True)
class LocaleTable:
    """Fixed table of supported locales."""
    locales: Dict[str, LocaleFormat]

    def get_format(self, locale: str) -> LocaleFormat:
        """Get formatting conventions for a locale.

        Raises:
            ValueError: If locale is not supported
        """
        if locale not in self.locales:
            raise ValueError(f"Unsupported locale: {locale}")
        return self.locales[locale]


LOCALE_TABLE = LocaleTable({
    "de-DE": LocaleFormat(
        group_separator=".",
        decimal_separator=",",
        currency_prefix="",
        currency_suffix=f"{_NBSP}€",
        percent_suffix=f"{_NBSP}%",
    ),
    "en-US": LocaleFormat(
        group_separator=",",
        decimal_separator=".",
        currency_prefix="€",
        currency_suffix="",
        percent_suffix="%",
    ),
})


def _round_half_up(value: float, decimals: int, scale: int = 1) -> Decimal:
    quant = Decimal("1") if decimals == 0 else Decimal("1." + "0" * decimals)
    # Scale in Decimal; a float product can overflow to inf
    exact = _WIDE.multiply(Decimal(str(float(value))), Decimal(scale))
    return exact.quantize(quant, rounding=ROUND_HALF_UP, context=_WIDE)


def _group(value: Decimal, decimals: int, fmt: LocaleFormat) -> str:
    # Format with neutral separators, then swap in the locale's
    text = f"{value.copy_abs():,.{decimals}f}"
    text = text.replace(",", "\x00").replace(".", fmt.decimal_separator)
    return text.replace("\x00", fmt.group_separator)


def _is_displayable(value: Any) -> bool:
    return is_number(value) and not is_nan(value)


def to_money(value: Any, locale: str = DEFAULT_LOCALE) -> str:
    """Format a EUR amount as whole euros with grouping."""
    fmt = LOCALE_TABLE.get_format(locale)
    if not _is_displayable(value):
        return MONEY_PLACEHOLDER

    if math.isinf(value):
        body = "∞"
        negative = value < 0
    else:
        rounded = _round_half_up(value, 0)
        body = _group(rounded, 0, fmt)
        negative = rounded < 0
    sign = "-" if negative else ""
    return f"{sign}{fmt.currency_prefix}{body}{fmt.currency_suffix}"


def to_pct(value: Any, locale: str = DEFAULT_LOCALE) -> str:
    """Format a decimal fraction (0.42) as a percentage with two decimals."""
    fmt = LOCALE_TABLE.get_format(locale)
    if not _is_displayable(value):
        return PERCENT_PLACEHOLDER
    if math.isinf(value):
        return "∞%" if value > 0 else "-∞%"

    rounded = _round_half_up(value, 2, scale=100)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{_group(rounded, 2, fmt)}{fmt.percent_suffix}"


def to_months(value: Any) -> str:
    """Format a payback period, rounded to one decimal.

    Infinite, negative and non-numeric values mean the one-time cost is
    never recovered.
    """
    if not _is_displayable(value) or math.isinf(value) or value < 0:
        return NO_PAYBACK
    rounded = _round_half_up(value, 1)
    if rounded == rounded.to_integral_value():
        return f"{int(rounded)} months"
    return f"{rounded} months"
