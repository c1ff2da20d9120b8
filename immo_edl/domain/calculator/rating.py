"""Condition rating scale (1-5) and its legal severity bands."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from immo_edl.core.exceptions import InvalidRatingError
from immo_edl.core.inventory_constants import RATING_MAX, RATING_MIN, RATING_SCALE


class SeverityBand(str, Enum):
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"


class RatingInfo(BaseModel):
    rating: int
    label: str
    short_label: str
    description: str
    severity_band: SeverityBand

    model_config = {
        "frozen": True,
    }


def validate_rating(rating: Any) -> int:
    """Return the rating if it is an int in [1, 5], raise otherwise."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(rating)
    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidRatingError(rating)
    return rating


def severity_band(rating: int) -> SeverityBand:
    """Classify a rating: {1, 2} poor, {3} average, {4, 5} good."""
    rating = validate_rating(rating)
    if rating <= 2:
        return SeverityBand.POOR
    if rating == 3:
        return SeverityBand.AVERAGE
    return SeverityBand.GOOD


def describe(rating: int) -> RatingInfo:
    """Labels and severity band for a rating.

    Raises:
        InvalidRatingError: rating is not an integer between 1 and 5.
    """
    entry = RATING_SCALE[validate_rating(rating)]
    return RatingInfo(
        rating=rating,
        label=entry["label"],
        short_label=entry["short_label"],
        description=entry["description"],
        severity_band=severity_band(rating),
    )
