"""Utility functions for summarising interview round scores."""

from typing import Dict, Optional


def average_score(scores: Optional[Dict[str, Optional[float]]]) -> Optional[float]:
    """Average a round's criterion scores to one decimal place.

    Criteria are whatever the round carries; there is no fixed set.

    Args:
        scores: Criterion name to rating.

    Returns:
        Mean rating rounded to one decimal, or None if there are no scores.

    Examples:
        >>> average_score({"communication": 4, "technical": 3, "culture_fit": 5})
        4.0
    """
    if not scores:
        return None
    values = [value for value in scores.values() if value is not None]
    if not values:
        return None
    return round(sum(values) / len(values), 1)


def format_average(scores: Optional[Dict[str, Optional[float]]]) -> str:
    """Render the average score as "4.0/5", or "N/A" without scores."""
    average = average_score(scores)
    return f"{average:.1f}/5" if average is not None else "N/A"
