import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.gameweek import Fixture, Gameweek
from models.team import Team
from services.football_data import FootballDataClient
from services.gameweeks import get_current_gameweek, get_gameweek_by_number

logger = logging.getLogger(__name__)

# Picks lock this long before the first kickoff of a gameweek
DEADLINE_OFFSET = timedelta(minutes=90)


class SyncService:
    def __init__(self, db: AsyncSession, client: FootballDataClient):
        self.db = db
        self.client = client

    async def sync_teams(self) -> dict:
        table = await self.client.get_standings()
        created = updated = 0

        for row in table:
            team = await self.db.scalar(select(Team).where(Team.external_id == row["team_id"]))
            if team:
                team.name = row["team_name"]
                team.short_name = row["short_name"]
                updated += 1
            else:
                self.db.add(
                    Team(
                        external_id=row["team_id"],
                        name=row["team_name"],
                        short_name=row["short_name"],
                    )
                )
                created += 1
        await self.db.flush()

        logger.info("Teams synced: %d created, %d updated", created, updated)
        return {"success": True, "created": created, "updated": updated}

    async def sync_fixtures(self, gameweek_number: int) -> dict:
        matches = await self.client.get_matches(gameweek_number)
        if not matches:
            return {"error": f"No fixtures found for gameweek {gameweek_number}.", "code": "not_found"}

        teams_result = await self.db.execute(select(Team))
        teams = {team.external_id: team for team in teams_result.scalars().all()}

        mapped = []
        skipped = 0
        for match in matches:
            home = teams.get(match["home_team_id"])
            away = teams.get(match["away_team_id"])
            if not home or not away:
                logger.warning("Skipping match %s: unknown team", match["external_id"])
                skipped += 1
                continue
            mapped.append((match, home, away))

        if not mapped:
            logger.warning("Gameweek %d: no fixtures matched known teams", gameweek_number)
            return {"success": True, "created": 0, "updated": 0, "skipped": skipped}

        deadline = min(match["kickoff_time"] for match, _, _ in mapped) - DEADLINE_OFFSET
        gameweek = await get_gameweek_by_number(self.db, gameweek_number)
        if not gameweek:
            gameweek = Gameweek(number=gameweek_number, deadline=deadline)
            self.db.add(gameweek)
        else:
            gameweek.deadline = deadline
        if not gameweek.is_current and not await get_current_gameweek(self.db):
            gameweek.is_current = True
            logger.info("Gameweek %d opened", gameweek_number)
        await self.db.flush()

        created = updated = 0
        for match, home, away in mapped:
            fixture = await self.db.scalar(
                select(Fixture).where(Fixture.external_id == match["external_id"])
            )
            if not fixture:
                fixture = Fixture(
                    external_id=match["external_id"],
                    gameweek_id=gameweek.id,
                    home_team_id=home.id,
                    away_team_id=away.id,
                )
                self.db.add(fixture)
                created += 1
            else:
                updated += 1
            fixture.kickoff_time = match["kickoff_time"]
            fixture.status = match["status"]
            fixture.home_score = match["home_score"]
            fixture.away_score = match["away_score"]
        await self.db.flush()

        logger.info(
            "Gameweek %d fixtures synced: %d created, %d updated, %d skipped",
            gameweek_number, created, updated, skipped,
        )
        return {"success": True, "created": created, "updated": updated, "skipped": skipped}
