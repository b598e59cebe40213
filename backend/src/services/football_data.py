import logging
from datetime import datetime

import httpx

from config import settings

logger = logging.getLogger(__name__)

MATCH_STATUS = {
    "FINISHED": "finished",
    "AWARDED": "finished",
    "IN_PLAY": "live",
    "PAUSED": "live",
    "POSTPONED": "postponed",
    "CANCELLED": "cancelled",
}


class FootballDataClient:
    """Thin wrapper over the third-party league table and fixtures API."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self.base_url = settings.FOOTBALL_API_URL.rstrip("/")
        self.competition = settings.FOOTBALL_COMPETITION
        self.client = client or httpx.AsyncClient(
            timeout=10.0,
            headers={"X-Auth-Token": settings.FOOTBALL_API_KEY},
        )

    async def get_standings(self) -> list[dict]:
        response = await self.client.get(
            f"{self.base_url}/competitions/{self.competition}/standings"
        )
        response.raise_for_status()
        tables = response.json().get("standings", [])
        if not tables:
            return []

        return [
            {
                "position": row["position"],
                "team_id": row["team"]["id"],
                "team_name": row["team"]["name"],
                "short_name": row["team"].get("tla") or row["team"].get("shortName", ""),
                "played": row.get("playedGames", 0),
                "won": row.get("won", 0),
                "draw": row.get("draw", 0),
                "lost": row.get("lost", 0),
                "goal_difference": row.get("goalDifference", 0),
                "points": row.get("points", 0),
            }
            for row in tables[0].get("table", [])
        ]

    async def get_matches(self, matchday: int) -> list[dict]:
        response = await self.client.get(
            f"{self.base_url}/competitions/{self.competition}/matches",
            params={"matchday": matchday},
        )
        response.raise_for_status()

        matches = []
        for match in response.json().get("matches", []):
            full_time = match.get("score", {}).get("fullTime", {})
            matches.append({
                "external_id": match["id"],
                "kickoff_time": datetime.fromisoformat(match["utcDate"].replace("Z", "+00:00")),
                "status": MATCH_STATUS.get(match.get("status", ""), "scheduled"),
                "home_team_id": match["homeTeam"]["id"],
                "away_team_id": match["awayTeam"]["id"],
                "home_score": full_time.get("home"),
                "away_score": full_time.get("away"),
            })
        return matches

    async def aclose(self) -> None:
        await self.client.aclose()
