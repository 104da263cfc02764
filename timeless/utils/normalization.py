"""
Normalization of free-form enum-like input
"""
from enum import Enum
from typing import Any, Optional


class WatchCondition(str, Enum):
    NEW = "New"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


_CONDITIONS_BY_KEY = {condition.value.lower(): condition.value for condition in WatchCondition}


def normalize_condition(value: Any) -> Optional[str]:
    """
    Map any casing of a known condition to its title-cased form.

    >>> normalize_condition("EXCELLENT")
    'Excellent'

    Returns None for anything outside the vocabulary.
    """
    if not isinstance(value, str):
        return None
    return _CONDITIONS_BY_KEY.get(value.strip().lower())


def normalize_brand_name(name: str) -> str:
    """Collapse whitespace and casing for duplicate detection"""
    return " ".join(name.split()).lower()
