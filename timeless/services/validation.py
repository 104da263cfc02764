"""
Validation of watch create/update payloads
"""
import math
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from timeless.core.config import settings
from timeless.core.exceptions import ValidationError
from timeless.core.logging import log
from timeless.schemas.watch import WatchCreate, WatchUpdate
from timeless.utils.normalization import normalize_condition

REQUIRED_WATCH_FIELDS = ("model", "year", "rental_day_price", "condition", "quantity", "brand_id")

# Column limits of the watch and brand tables
MAX_NAME_LENGTH = 255
MAX_QUANTITY = 2**31 - 1


def current_year() -> int:
    return datetime.now(timezone.utc).year


def is_valid_year(year: Any, this_year: Optional[int] = None) -> bool:
    """True when ``year`` is an integer between the minimum year and this year"""
    year = parse_int(year)
    if year is None:
        return False
    return settings.min_watch_year <= year <= (this_year or current_year())


def is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any) -> Optional[float]:
    """Finite float from a JSON number or numeric string, else None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> Optional[int]:
    """Integer from an int, integral float or numeric string, else None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _require_payload(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid request body")
    return payload


def check_name_length(value: str, label: str) -> str:
    if len(value) > MAX_NAME_LENGTH:
        raise ValidationError(f"{label} must be at most {MAX_NAME_LENGTH} characters")
    return value


def _check_model(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Model must be a non-empty string")
    return check_name_length(value.strip(), "Model")


def _check_price(value: Any) -> float:
    price = parse_number(value)
    if price is None or price < 0:
        raise ValidationError("Rental day price must be a non-negative number")
    return price


def _check_quantity(value: Any) -> int:
    quantity = parse_int(value)
    if quantity is None or quantity < 0:
        raise ValidationError("Quantity must be a non-negative integer")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Quantity must be at most {MAX_QUANTITY}")
    return quantity


def _check_condition(value: Any) -> str:
    if normalize_condition(value) is None:
        raise ValidationError("Invalid condition")
    return value


def validate_watch_create(payload: Any, this_year: Optional[int] = None) -> WatchCreate:
    """
    Check a creation payload and return it as a WatchCreate.

    Missing fields (absent, null or blank) are reported first, all at once.
    The condition is checked case-insensitively and returned as received;
    canonicalising it is the caller's job.
    """
    payload = _require_payload(payload)

    missing = [field for field in REQUIRED_WATCH_FIELDS if is_missing(payload.get(field))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing=missing)

    condition = _check_condition(payload["condition"])

    if not is_valid_year(payload["year"], this_year):
        raise ValidationError(
            f"Year must be between {settings.min_watch_year} and {this_year or current_year()}"
        )

    return WatchCreate(
        model=_check_model(payload["model"]),
        year=parse_int(payload["year"]),
        rental_day_price=_check_price(payload["rental_day_price"]),
        condition=condition,
        quantity=_check_quantity(payload["quantity"]),
        brand_id=str(payload["brand_id"]).strip(),
    )


def validate_watch_update(payload: Any, this_year: Optional[int] = None) -> WatchUpdate:
    """
    Check a partial update and return only the fields to apply.

    Null and absent fields are skipped, unknown keys are ignored. A year
    outside the allowed range is dropped rather than rejected; every other
    invalid field rejects the whole update.
    """
    payload = _require_payload(payload)
    accepted: Dict[str, Any] = {}

    if payload.get("model") is not None:
        accepted["model"] = _check_model(payload["model"])

    if payload.get("year") is not None:
        if is_valid_year(payload["year"], this_year):
            accepted["year"] = parse_int(payload["year"])
        else:
            log.warning("Dropping out-of-range year from update", year=payload["year"])

    if payload.get("rental_day_price") is not None:
        accepted["rental_day_price"] = _check_price(payload["rental_day_price"])

    if payload.get("condition") is not None:
        accepted["condition"] = _check_condition(payload["condition"])

    if payload.get("quantity") is not None:
        accepted["quantity"] = _check_quantity(payload["quantity"])

    if payload.get("brand_id") is not None:
        if is_missing(payload["brand_id"]):
            raise ValidationError("Brand id must not be empty")
        accepted["brand_id"] = str(payload["brand_id"]).strip()

    return WatchUpdate(**accepted)
