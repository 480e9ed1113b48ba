# catalog_pipeline/pipeline/normalizers.py
"""Pure helpers that turn raw node values into ProductRecord field values."""

import math
import re
from typing import Optional
from urllib.parse import urljoin

from ..models.product_record import RATING_LABELS

RATING_MARKER_CLASS = "star-rating"

_NON_PRICE_CHARS = re.compile(r"[^\d.]")


def normalize_price(price_text: Optional[str]) -> Optional[float]:
    """
    Keeps only digits and dots, then parses what is left.
    Returns None when nothing numeric remains ("Free"), the result is not a number
    ("1.2.3") or it overflows to infinity.
    """
    if price_text is None:
        return None
    cleaned = _NON_PRICE_CHARS.sub("", price_text)
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    # A long enough run of digits overflows to inf.
    return value if math.isfinite(value) else None


def rating_from_classes(class_attr: Optional[str]) -> Optional[str]:
    """'star-rating Three' -> 'Three'. Anything outside the rating labels yields None."""
    if not class_attr:
        return None
    tokens = [token for token in class_attr.split() if token != RATING_MARKER_CLASS]
    if not tokens or tokens[0] not in RATING_LABELS:
        return None
    return tokens[0]


def resolve_url(base_url: str, relative: Optional[str]) -> Optional[str]:
    if not relative:
        return None
    return urljoin(base_url, relative.strip())


def clean_text(text: Optional[str]) -> Optional[str]:
    """Strips and collapses whitespace runs; None stays None."""
    if text is None:
        return None
    return re.sub(r"\s+", " ", text).strip()
