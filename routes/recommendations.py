from __future__ import annotations
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session
from config.database import get_session
from config.settings import settings
from models import User
from models.catalog import Mode
from models.user_history import Action
from routes.api import get_current_user
from services.recommendation import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


class TrackActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: Mode
    item_id: int = Field(..., alias="itemId")
    store_id: int = Field(..., alias="storeId")
    action: Action


class RecommendedItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    price: float
    image: Optional[str] = None
    store_id: int = Field(..., alias="storeId")


@router.post("/track")
def track_action(
    body: TrackActionRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    svc = RecommendationService(session)
    ok = svc.track(current_user.id, body.mode, body.item_id, body.store_id, body.action)
    if not ok:
        return JSONResponse(status_code=500, content={"error": "Failed to track user action"})
    return {"success": True}


@router.get("", response_model=List[RecommendedItemResponse], response_model_by_alias=True)
def get_recommendations(
    mode: Mode = Mode.SHOP,
    limit: int = Query(settings.DEFAULT_RECOMMENDATION_LIMIT, ge=1, le=settings.MAX_RECOMMENDATION_LIMIT),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    svc = RecommendationService(session)
    return svc.recommend(current_user.id, mode, limit)


@router.delete("/history")
def clear_history(
    mode: Optional[Mode] = None,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    svc = RecommendationService(session)
    if not svc.clear_history(current_user.id, mode):
        return JSONResponse(status_code=500, content={"error": "Failed to clear history"})
    return {"success": True}
