"""Seed script to populate the database with sample data for testing."""
import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend" / "src"))

from core.database import get_db  # noqa: E402
from core.sanitization import generate_invite_code  # noqa: E402
from models.gameweek import Fixture, Gameweek  # noqa: E402
from models.league import League, LeagueMember  # noqa: E402
from models.profile import Profile  # noqa: E402
from models.team import Team  # noqa: E402


async def seed():
    async with get_db() as db:
        # Create profiles
        profiles = [
            Profile(user_id="user_marie", username="marie", email="marie@example.com"),
            Profile(user_id="user_paul", username="paul", email="paul@example.com"),
            Profile(user_id="user_lucas", username="lucas", email="lucas@example.com"),
        ]
        for p in profiles:
            db.add(p)
        await db.flush()

        # Create teams
        teams_data = [
            {"external_id": 57, "name": "Arsenal", "short_name": "ARS", "team_color": "#EF0107"},
            {"external_id": 61, "name": "Chelsea", "short_name": "CHE", "team_color": "#034694"},
            {"external_id": 64, "name": "Liverpool", "short_name": "LIV", "team_color": "#C8102E"},
            {"external_id": 65, "name": "Manchester City", "short_name": "MCI", "team_color": "#6CABDD"},
        ]
        teams = []
        for td in teams_data:
            t = Team(**td)
            db.add(t)
            teams.append(t)
        await db.flush()

        # Create the opening gameweek, picks lock 90 minutes before kickoff
        kickoff = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0) + timedelta(days=3)
        gameweek = Gameweek(number=1, deadline=kickoff - timedelta(minutes=90), is_current=True)
        db.add(gameweek)
        await db.flush()

        # Create fixtures: (home, away, home difficulty, away difficulty)
        fixtures_data = [(0, 1, 3, 4), (2, 3, 4, 4)]
        for home, away, home_diff, away_diff in fixtures_data:
            db.add(
                Fixture(
                    gameweek_id=gameweek.id,
                    home_team_id=teams[home].id,
                    away_team_id=teams[away].id,
                    kickoff_time=kickoff,
                    home_difficulty=home_diff,
                    away_difficulty=away_diff,
                )
            )
        await db.flush()

        # Create a league owned by the first profile, everyone joins
        league = League(
            name="Sunday Survivors",
            invite_code=generate_invite_code(),
            creator_id=profiles[0].user_id,
            max_members=20,
        )
        db.add(league)
        await db.flush()
        for p in profiles:
            db.add(LeagueMember(league_id=league.id, user_id=p.user_id))
        await db.flush()

    print(f"Seed complete! League invite code: {league.invite_code}")


if __name__ == "__main__":
    asyncio.run(seed())
