"""Pure helpers behind the fixture heat map and pick efficiency views."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

SEASON_GAMEWEEKS = 38
DEFAULT_DIFFICULTY = 3
MAX_DIFFICULTY = 5
RECOMMENDATION_COUNT = 3


@dataclass
class FixtureDifficulty:
    team: str
    current_difficulty: int
    next_five_games: list[int]
    average_difficulty: float


@dataclass
class EfficiencyData:
    gameweek: int
    points_earned: int
    max_possible: int
    efficiency: float = 0.0


@dataclass
class PickRecommendation:
    club: str
    gameweek: int
    win_probability: float


def difficulties_from_row(row: dict[str, Any]) -> list[int]:
    """Read ``gw1``..``gw38`` from a row, defaulting missing values."""
    return [row.get(f"gw{i}") or DEFAULT_DIFFICULTY for i in range(1, SEASON_GAMEWEEKS + 1)]


def win_probability(difficulty: int) -> float:
    """Rough chance of winning a fixture rated 1 (easiest) to 5."""
    return (MAX_DIFFICULTY + 1 - difficulty) / (MAX_DIFFICULTY + 1)


def win_probabilities_from_rows(rows: list[dict[str, Any]]) -> dict[str, list[float | None]]:
    """Per-gameweek win probability for each team; None where it has no fixture."""
    probabilities = {}
    for row in rows:
        probabilities[row["team"]] = [
            win_probability(row[f"gw{i}"]) if row.get(f"gw{i}") else None
            for i in range(1, SEASON_GAMEWEEKS + 1)
        ]
    return probabilities


def process_fixture_difficulty(
    rows: list[dict[str, Any]], current_gameweek: int = 1
) -> list[FixtureDifficulty]:
    start = max(current_gameweek - 1, 0)
    processed = []
    for row in rows:
        difficulties = difficulties_from_row(row)
        current = difficulties[start] if start < len(difficulties) else DEFAULT_DIFFICULTY
        remaining = difficulties[start:]
        average = sum(remaining) / len(remaining) if remaining else DEFAULT_DIFFICULTY
        processed.append(
            FixtureDifficulty(
                team=row["team"],
                current_difficulty=current,
                next_five_games=difficulties[start:start + 5],
                average_difficulty=round(average, 1),
            )
        )
    return processed


def calc_overall_efficiency(items: list[EfficiencyData]) -> float:
    total_max = sum(item.max_possible for item in items)
    if total_max == 0:
        return 0.0
    total_earned = sum(item.points_earned for item in items)
    return total_earned / total_max * 100


def calc_efficiency_by_gameweek(items: list[EfficiencyData]) -> list[EfficiencyData]:
    return [
        replace(
            item,
            efficiency=item.points_earned / item.max_possible * 100 if item.max_possible > 0 else 0.0,
        )
        for item in items
    ]


def get_pick_recommendations(
    win_probabilities: dict[str, list[float | None]],
    remaining_uses: dict[str, int],
    current_gameweek: int,
) -> list[PickRecommendation]:
    """Best clubs to back this gameweek, among those with uses left.

    ``win_probabilities`` maps a club to its per-gameweek win probability.
    """
    index = current_gameweek - 1
    recs = []
    for club, uses in remaining_uses.items():
        if uses <= 0:
            continue
        probabilities = win_probabilities.get(club)
        if not probabilities or index < 0 or index >= len(probabilities):
            continue
        prob = probabilities[index]
        if prob is None or prob != prob:  # NaN
            continue
        recs.append(PickRecommendation(club=club, gameweek=current_gameweek, win_probability=prob))

    recs.sort(key=lambda r: r.win_probability, reverse=True)
    return recs[:RECOMMENDATION_COUNT]
