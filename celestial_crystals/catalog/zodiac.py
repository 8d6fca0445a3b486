"""Western zodiac lookup by birth date."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Tuple

from pydantic import BaseModel


class ZodiacInfo(BaseModel):
    sign: str
    element: str
    traits: List[str]
    dates: str


# (sign, (start month, start day), (end month, end day)); both ends inclusive.
_SIGN_RANGES: List[Tuple[str, Tuple[int, int], Tuple[int, int]]] = [
    ("Aries", (3, 21), (4, 19)),
    ("Taurus", (4, 20), (5, 20)),
    ("Gemini", (5, 21), (6, 20)),
    ("Cancer", (6, 21), (7, 22)),
    ("Leo", (7, 23), (8, 22)),
    ("Virgo", (8, 23), (9, 22)),
    ("Libra", (9, 23), (10, 22)),
    ("Scorpio", (10, 23), (11, 21)),
    ("Sagittarius", (11, 22), (12, 21)),
    ("Capricorn", (12, 22), (1, 19)),
    ("Aquarius", (1, 20), (2, 18)),
    ("Pisces", (2, 19), (3, 20)),
]

ZODIAC_SIGNS: List[str] = [sign for sign, _, _ in _SIGN_RANGES]

ZODIAC_INFO: Dict[str, ZodiacInfo] = {
    info.sign: info
    for info in [
        ZodiacInfo(sign="Aries", element="Fire", traits=["Courageous", "Energetic", "Leadership"], dates="March 21 - April 19"),
        ZodiacInfo(sign="Taurus", element="Earth", traits=["Reliable", "Patient", "Practical"], dates="April 20 - May 20"),
        ZodiacInfo(sign="Gemini", element="Air", traits=["Adaptable", "Curious", "Communicative"], dates="May 21 - June 20"),
        ZodiacInfo(sign="Cancer", element="Water", traits=["Intuitive", "Emotional", "Protective"], dates="June 21 - July 22"),
        ZodiacInfo(sign="Leo", element="Fire", traits=["Confident", "Generous", "Creative"], dates="July 23 - August 22"),
        ZodiacInfo(sign="Virgo", element="Earth", traits=["Analytical", "Practical", "Helpful"], dates="August 23 - September 22"),
        ZodiacInfo(sign="Libra", element="Air", traits=["Balanced", "Diplomatic", "Harmonious"], dates="September 23 - October 22"),
        ZodiacInfo(sign="Scorpio", element="Water", traits=["Intense", "Passionate", "Mysterious"], dates="October 23 - November 21"),
        ZodiacInfo(
            sign="Sagittarius",
            element="Fire",
            traits=["Adventurous", "Optimistic", "Philosophical"],
            dates="November 22 - December 21",
        ),
        ZodiacInfo(
            sign="Capricorn",
            element="Earth",
            traits=["Ambitious", "Disciplined", "Responsible"],
            dates="December 22 - January 19",
        ),
        ZodiacInfo(
            sign="Aquarius",
            element="Air",
            traits=["Independent", "Innovative", "Humanitarian"],
            dates="January 20 - February 18",
        ),
        ZodiacInfo(sign="Pisces", element="Water", traits=["Compassionate", "Intuitive", "Artistic"], dates="February 19 - March 20"),
    ]
}


def _in_range(month_day: Tuple[int, int], start: Tuple[int, int], end: Tuple[int, int]) -> bool:
    if start <= end:
        return start <= month_day <= end
    # Capricorn wraps the new year.
    return month_day >= start or month_day <= end


def zodiac_sign_for(birth_date: date) -> str:
    """Return the sun sign for a birth date."""
    month_day = (birth_date.month, birth_date.day)
    for sign, start, end in _SIGN_RANGES:
        if _in_range(month_day, start, end):
            return sign
    # Unreachable: the ranges cover the whole year.
    raise ValueError(f"No zodiac sign for {birth_date.isoformat()}")
