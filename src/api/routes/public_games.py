"""
公開遊戲查詢的 API 路由。
熱門、最新、標題搜尋、使用者搜尋與全體統計。
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.routes.dependencies import get_game_service
from src.application.dto.game_dto import (
    GameListResponse,
    PublicGameListResponse,
    StatsResponse,
)
from src.application.services.game_service import GameService

router = APIRouter(prefix="/games/public", tags=["public-games"])


@router.get("/popular", response_model=PublicGameListResponse)
async def popular_games(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: GameService = Depends(get_game_service)
):
    return await service.get_popular_games(page, limit)


@router.get("/recent", response_model=PublicGameListResponse)
async def recent_games(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: GameService = Depends(get_game_service)
):
    return await service.get_recent_games(page, limit)


@router.get("/search", response_model=PublicGameListResponse)
async def search_by_title(
    title: Optional[str] = Query(None, description="標題關鍵字（不分大小寫）"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: GameService = Depends(get_game_service)
):
    return await service.search_games_by_title(title, page, limit)


@router.get("/by-user", response_model=GameListResponse)
async def search_by_user(
    email: Optional[str] = Query(None, description="email 關鍵字（不分大小寫）"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: GameService = Depends(get_game_service)
):
    return await service.search_games_by_user(email, page, limit)


@router.get("/stats", response_model=StatsResponse)
async def global_stats(service: GameService = Depends(get_game_service)):
    return await service.get_global_stats()
