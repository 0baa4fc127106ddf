from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_repository
from ..repository import Repository
from ..schemas import ConversionHistoryCreate, ConversionHistoryOut

router = APIRouter()


@router.get("/conversion-history", response_model=list[ConversionHistoryOut])
def list_conversion_history(
    user_id: Optional[int] = Query(None, alias="userId"),
    repo: Repository = Depends(get_repository),
):
    return repo.get_conversion_history(user_id)


@router.post("/conversion-history", response_model=ConversionHistoryOut, status_code=201)
def save_conversion_history(
    payload: ConversionHistoryCreate,
    repo: Repository = Depends(get_repository),
):
    """Persist a recipe conversion the client chose to keep."""
    return repo.save_conversion_history(payload.model_dump())
