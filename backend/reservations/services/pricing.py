from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _read_price(option: Any) -> Any:
    if isinstance(option, Mapping):
        return option.get("price")
    return getattr(option, "price", None)


def _read_id(option: Any) -> Any:
    if isinstance(option, Mapping):
        return option.get("id")
    return getattr(option, "id", None)


def calculate_total_price(options: Iterable[Any]) -> Decimal:
    """Sum the ``price`` of each resolved option, rounded to cents.

    Accepts mappings or objects exposing ``price``; an empty iterable
    totals zero. A missing or unparseable price counts as zero and is
    logged as a warning.
    """
    total = Decimal("0")
    for option in options:
        raw = _read_price(option)
        price = _to_decimal(raw)
        if price is None or not price.is_finite():
            logger.warning(
                "Option price unusable, counted as zero",
                extra={"option_id": _read_id(option), "price": repr(raw)},
            )
            continue
        total += price
    return total.quantize(_CENT, rounding=ROUND_HALF_UP)
