"""
Where to look: subreddit tiers and per-category search plans.

A SearchPlan is a list of queries crossed with (at most three) subreddits;
each (query, subreddit) pair is one retrieval source.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from services.mining.models.category import Category, parse_category

MAX_SUBREDDITS_PER_SEARCH = 3
DEFAULT_SEARCH_LIMIT = 15

LUXURY_BUDGET_MIN = 5000
MID_BUDGET_MIN = 2000

LUXURY_SUBREDDITS = ["fattravel", "luxurytravel", "travel"]
MID_SUBREDDITS = ["travel", "solotravel", "TravelHacks"]
BUDGET_SUBREDDITS = ["budgettravel", "solotravel", "shoestring", "backpacking"]

AREA_SUBREDDITS = ["travel", "solotravel", "TravelHacks", "backpacking"]
EATERY_SUBREDDITS = ["travel", "solotravel", "foodtravel", "AskCulinary"]
AIRLINE_SUBREDDITS = ["travel", "flights", "aviation"]
HOTEL_SUBREDDITS = ["travel", "hotels", "solotravel"]

AIRLINE_SEARCH_LIMIT = 20


def subreddits_for_budget_tier(per_person_budget: Optional[float]) -> list[str]:
    """
    Default subreddits for a per-person trip budget.

    >= 5000 luxury, >= 2000 mid-range, anything lower budget. No budget
    given means mid-range.
    """
    if per_person_budget is None:
        return list(MID_SUBREDDITS)
    if per_person_budget >= LUXURY_BUDGET_MIN:
        return list(LUXURY_SUBREDDITS)
    if per_person_budget >= MID_BUDGET_MIN:
        return list(MID_SUBREDDITS)
    return list(BUDGET_SUBREDDITS)


@dataclass(frozen=True)
class SearchPlan:
    queries: tuple[str, ...]
    subreddits: tuple[str, ...]
    limit: int = DEFAULT_SEARCH_LIMIT

    @property
    def searched_subreddits(self) -> list[str]:
        return list(self.subreddits[:MAX_SUBREDDITS_PER_SEARCH])

    @property
    def sources(self) -> list[tuple[str, str]]:
        """(query, subreddit) pairs in query order, then subreddit order."""
        return [(q, s) for q in self.queries for s in self.searched_subreddits]


def recommendation_plan(
    category: Category | str,
    destination: str,
    *,
    budget_per_person: Optional[float] = None,
    area: Optional[str] = None,
    activities: Sequence[str] = (),
    subreddits: Optional[Sequence[str]] = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> SearchPlan:
    """
    Queries and subreddits for mining one category around a destination.

    `subreddits` overrides the category default when non-empty.
    """
    category = parse_category(category)
    destination = " ".join(destination.split())

    if category is Category.LODGING:
        queries = [
            f"{destination} hotel recommendation",
            f"{destination} where to stay",
            f"{destination} best hotel",
        ]
        default = subreddits_for_budget_tier(budget_per_person)
    elif category is Category.AREA:
        queries = [
            f"{destination} best areas where to stay",
            f"{destination} itinerary must visit",
        ]
        # One activity-specific search at most
        if activities:
            queries.append(f"{destination} {activities[0]}")
        default = AREA_SUBREDDITS
    else:
        location = f"{area.strip()} {destination}" if area and area.strip() else destination
        queries = [
            f"{location} best restaurants",
            f"{location} where to eat",
            f"{location} food recommendations",
            f"{location} must try food",
        ]
        default = EATERY_SUBREDDITS

    chosen = list(subreddits) if subreddits else list(default)
    return SearchPlan(queries=tuple(queries), subreddits=tuple(chosen), limit=limit)


def destination_plan(destination: str, budget_per_person: Optional[float], limit: int) -> SearchPlan:
    return SearchPlan(
        queries=(destination,),
        subreddits=tuple(subreddits_for_budget_tier(budget_per_person)),
        limit=limit,
    )


def lodging_plan(hotel_name: str, city: str, limit: int = DEFAULT_SEARCH_LIMIT) -> SearchPlan:
    return SearchPlan(queries=(f"{hotel_name} {city}",), subreddits=tuple(HOTEL_SUBREDDITS), limit=limit)


def airline_plan(airline_name: str) -> SearchPlan:
    return SearchPlan(
        queries=(airline_name,),
        subreddits=tuple(AIRLINE_SUBREDDITS),
        limit=AIRLINE_SEARCH_LIMIT,
    )
