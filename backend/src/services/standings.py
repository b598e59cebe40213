import logging
import uuid
from typing import Iterable, NamedTuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.analytics import EfficiencyData, calc_efficiency_by_gameweek
from models.gameweek import Fixture, Gameweek
from models.league import LeagueMember
from models.pick import GameweekScore, Pick, UserStanding

logger = logging.getLogger(__name__)

POINTS_PER_CORRECT_PICK = 1


class StandingTotals(NamedTuple):
    user_id: str
    total_points: int
    correct_picks: int
    total_picks: int


def assign_ranks(totals: Iterable[StandingTotals]) -> list[tuple[StandingTotals, int]]:
    """Dense-rank users by points; equal points share a rank."""
    ordered = sorted(totals, key=lambda t: (-t.total_points, -t.correct_picks, t.user_id))
    ranked = []
    rank = 0
    previous_points = None
    for row in ordered:
        if row.total_points != previous_points:
            rank += 1
            previous_points = row.total_points
        ranked.append((row, rank))
    return ranked


class StandingsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def calculate_gameweek_scores(self, gameweek_id: uuid.UUID) -> dict:
        rows = await self.db.execute(
            select(Pick, Fixture)
            .join(Fixture, Pick.fixture_id == Fixture.id)
            .where(Pick.gameweek_id == gameweek_id, Fixture.status == "finished")
        )
        picks = rows.all()

        existing_result = await self.db.execute(
            select(GameweekScore).where(GameweekScore.gameweek_id == gameweek_id)
        )
        existing = {score.user_id: score for score in existing_result.scalars().all()}

        correct = 0
        for pick, fixture in picks:
            is_correct = fixture.winner_id() == pick.picked_team_id
            points = POINTS_PER_CORRECT_PICK if is_correct else 0
            correct += int(is_correct)

            score = existing.get(pick.user_id)
            if score:
                score.points = points
                score.is_correct = is_correct
            else:
                self.db.add(
                    GameweekScore(
                        user_id=pick.user_id,
                        gameweek_id=gameweek_id,
                        points=points,
                        is_correct=is_correct,
                    )
                )
        await self.db.flush()

        logger.info("Scored gameweek %s: %d picks, %d correct", gameweek_id, len(picks), correct)
        return {"success": True, "scored": len(picks), "correct": correct}

    async def refresh_standings(self) -> dict:
        result = await self.db.execute(
            select(
                GameweekScore.user_id,
                func.sum(GameweekScore.points),
                func.sum(case((GameweekScore.is_correct.is_(True), 1), else_=0)),
                func.count(GameweekScore.id),
            ).group_by(GameweekScore.user_id)
        )
        totals = [
            StandingTotals(user_id, int(points or 0), int(correct_picks or 0), int(total or 0))
            for user_id, points, correct_picks, total in result.all()
        ]

        existing_result = await self.db.execute(select(UserStanding))
        existing = {s.user_id: s for s in existing_result.scalars().all()}

        for row, rank in assign_ranks(totals):
            standing = existing.get(row.user_id)
            if not standing:
                standing = UserStanding(user_id=row.user_id)
                self.db.add(standing)
            standing.total_points = row.total_points
            standing.correct_picks = row.correct_picks
            standing.total_picks = row.total_picks
            standing.current_rank = rank
        await self.db.flush()

        logger.info("Standings refreshed for %d users", len(totals))
        return {"success": True, "users": len(totals)}

    async def get_standings(self) -> list[UserStanding]:
        result = await self.db.execute(
            select(UserStanding).order_by(UserStanding.current_rank.asc().nulls_last())
        )
        return list(result.scalars().all())

    async def get_gameweek_scores(self, user_id: str | None = None) -> list[GameweekScore]:
        stmt = select(GameweekScore).order_by(GameweekScore.created_at.desc())
        if user_id:
            stmt = stmt.where(GameweekScore.user_id == user_id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_league_standings(self, league_id: uuid.UUID) -> list[dict]:
        """Standings of a league's members, ranked among themselves."""
        result = await self.db.execute(
            select(UserStanding)
            .join(LeagueMember, LeagueMember.user_id == UserStanding.user_id)
            .where(LeagueMember.league_id == league_id)
        )
        totals = [
            StandingTotals(s.user_id, s.total_points, s.correct_picks, s.total_picks)
            for s in result.scalars().all()
        ]
        return [
            {**row._asdict(), "league_id": league_id, "current_rank": rank}
            for row, rank in assign_ranks(totals)
        ]

    async def get_efficiency(self, user_id: str) -> list[EfficiencyData]:
        """Per-gameweek efficiency; one correct pick is the most a gameweek can give."""
        result = await self.db.execute(
            select(Gameweek.number, GameweekScore.points)
            .join(Gameweek, GameweekScore.gameweek_id == Gameweek.id)
            .where(GameweekScore.user_id == user_id)
            .order_by(Gameweek.number.asc())
        )
        items = [
            EfficiencyData(gameweek=number, points_earned=points, max_possible=POINTS_PER_CORRECT_PICK)
            for number, points in result.all()
        ]
        return calc_efficiency_by_gameweek(items)
