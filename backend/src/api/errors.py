from fastapi import HTTPException

ERROR_STATUS = {
    "invalid": 400,
    "invalid_team": 400,
    "deadline_passed": 400,
    "no_gameweek": 400,
    "forbidden": 403,
    "locked": 403,
    "not_found": 404,
    "already_picked": 409,
    "already_member": 409,
    "team_exhausted": 409,
    "league_full": 409,
    "league_limit": 409,
    "conflict": 409,
    "not_complete": 409,
    "payment_invalid": 402,
}


def raise_for_error(result: dict) -> dict:
    """Turn a service error dict into an HTTP error, pass successes through."""
    if "error" in result:
        status = ERROR_STATUS.get(result.get("code", ""), 400)
        raise HTTPException(status_code=status, detail=result["error"])
    return result
