from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth.dependencies import get_current_active_user
from app.api.auth.models import User
from app.api.episodes.schemas import EpisodeInfo, EpisodeRequest
from app.api.episodes.service import EpisodeService
from app.core.responses import ApiResponse, ok
from app.database.database import get_db

router = APIRouter(prefix="/api/v1/episodes", tags=["episodes"])


def get_episode_service(db: Session = Depends(get_db)) -> EpisodeService:
    return EpisodeService(db)


@router.post("", response_model=ApiResponse[EpisodeInfo])
async def mark_watched(
        data: EpisodeRequest,
        current_user: User = Depends(get_current_active_user),
        episode_service: EpisodeService = Depends(get_episode_service)
):
    return ok(episode_service.mark_watched(current_user.id, data), "Episodio marcado como visto")


@router.post("/bulk", response_model=ApiResponse[List[EpisodeInfo]])
async def mark_watched_bulk(
        data: List[EpisodeRequest],
        current_user: User = Depends(get_current_active_user),
        episode_service: EpisodeService = Depends(get_episode_service)
):
    created = episode_service.mark_watched_bulk(current_user.id, data)
    return ok(created, f"{len(created)} episodios marcados como vistos")


@router.get("/viewing/{viewing_id}", response_model=ApiResponse[List[EpisodeInfo]])
async def list_watched(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        episode_service: EpisodeService = Depends(get_episode_service)
):
    episodes = episode_service.list_watched(current_user.id, viewing_id)
    return ok(episodes, f"{len(episodes)} episodios vistos")


@router.delete("/viewing/{viewing_id}/season/{season_id}/episode/{episode_id}", response_model=ApiResponse[bool])
async def unmark(
        viewing_id: int,
        season_id: int,
        episode_id: int,
        current_user: User = Depends(get_current_active_user),
        episode_service: EpisodeService = Depends(get_episode_service)
):
    return ok(episode_service.unmark(current_user.id, viewing_id, season_id, episode_id), "Episodio desmarcado")


@router.delete("/{episode_row_id}", response_model=ApiResponse[bool])
async def unmark_by_id(
        episode_row_id: int,
        current_user: User = Depends(get_current_active_user),
        episode_service: EpisodeService = Depends(get_episode_service)
):
    return ok(episode_service.unmark_by_id(current_user.id, episode_row_id), "Episodio desmarcado")
