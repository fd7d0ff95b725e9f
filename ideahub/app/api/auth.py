"""Identity endpoints."""

from fastapi import APIRouter, Depends

from ideahub.app.core.security import Caller, get_current_caller

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=Caller)
async def who_am_i(caller: Caller = Depends(get_current_caller)) -> Caller:
    """Return the identity carried by the bearer token.

    Args:
        caller: Caller resolved from the Authorization header

    Returns:
        The verified Caller
    """
    return caller
