from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.gameweek import Fixture, Gameweek
from models.team import Team


class FixtureService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_difficulty_rows(self) -> list[dict]:
        """One row per team: ``{"team": name, "gw1": 2, "gw2": 4, ...}``."""
        teams_result = await self.db.execute(select(Team))
        names = {team.id: team.name for team in teams_result.scalars().all()}

        result = await self.db.execute(
            select(
                Gameweek.number,
                Fixture.home_team_id,
                Fixture.away_team_id,
                Fixture.home_difficulty,
                Fixture.away_difficulty,
            ).join(Gameweek, Fixture.gameweek_id == Gameweek.id)
        )

        rows: dict[str, dict] = defaultdict(dict)
        for number, home_id, away_id, home_difficulty, away_difficulty in result.all():
            rows[names[home_id]][f"gw{number}"] = home_difficulty
            rows[names[away_id]][f"gw{number}"] = away_difficulty

        return [{"team": name, **rows.get(name, {})} for name in sorted(names.values())]
