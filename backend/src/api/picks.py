from fastapi import APIRouter, Depends

from api.dependencies import get_current_user_id
from api.errors import raise_for_error
from api.schemas import PickIn, PickOut, PickRecommendationOut
from core.database import get_db
from services.picks import PickService

router = APIRouter(prefix="/picks", tags=["picks"])


@router.get("", response_model=list[PickOut])
async def list_picks(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await PickService(db).list_picks(user_id)


@router.get("/current", response_model=PickOut | None)
async def current_pick(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        return await PickService(db).get_current_pick(user_id)


@router.get("/recommendations", response_model=list[PickRecommendationOut])
async def recommendations(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        result = await PickService(db).get_recommendations(user_id)
    raise_for_error(result)
    return result["recommendations"]


@router.post("", response_model=PickOut, status_code=201)
async def submit_pick(body: PickIn, user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        result = await PickService(db).submit_pick(user_id, body.fixture_id, body.team_id)
        raise_for_error(result)
        return result["pick"]


@router.delete("/current")
async def undo_pick(user_id: str = Depends(get_current_user_id)):
    async with get_db() as db:
        result = await PickService(db).undo_pick(user_id)
    raise_for_error(result)
    return {"success": True}
