"""
使用者遊戲紀錄的 API 路由。
提供 CRUD、使用者統計與單筆查詢的 HTTP 端點。
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from src.api.routes.dependencies import get_game_service
from src.application.dto.game_dto import (
    DeleteGameResponse,
    GameCreateRequest,
    GameListResponse,
    GameOwnerRequest,
    GameResponse,
    GameUpdateRequest,
    StatsResponse,
)
from src.application.services.game_service import GameService

router = APIRouter(prefix="/games", tags=["games"])


@router.get("", response_model=GameListResponse)
async def list_user_games(
    email: Optional[str] = Query(None, description="擁有者 email"),
    searchField: Optional[str] = Query(None, description="title / rating / timespent / dateadded"),
    searchValue: Optional[str] = Query(None, description="搜尋值"),
    page: Optional[str] = Query(None, description="頁碼，預設 1"),
    limit: Optional[str] = Query(None, description="每頁筆數，預設 10"),
    service: GameService = Depends(get_game_service)
):
    """
    取得使用者自己的遊戲列表。

    - **email**: 必填
    - **searchField** / **searchValue**: 可選的欄位過濾
    """
    return await service.get_user_games(email, searchField, searchValue, page, limit)


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
async def create_game(
    request: GameCreateRequest,
    service: GameService = Depends(get_game_service)
):
    """
    新增遊戲紀錄，id 與 dateadded 由資料庫指定。
    """
    return await service.create_game(request)


# 必須在 /{game_id} 之前註冊
@router.get("/stats", response_model=StatsResponse)
async def get_user_stats(
    email: Optional[str] = Query(None, description="擁有者 email"),
    service: GameService = Depends(get_game_service)
):
    return await service.get_user_stats(email)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(
    game_id: int = Path(..., description="遊戲紀錄 ID"),
    email: Optional[str] = Query(None, description="提供時只允許擁有者讀取"),
    service: GameService = Depends(get_game_service)
):
    return await service.get_game_by_id(game_id, email)


@router.put("/{game_id}", response_model=GameResponse)
async def update_game(
    request: GameUpdateRequest,
    game_id: int = Path(..., description="遊戲紀錄 ID"),
    email: Optional[str] = Query(None, description="請求者 email（body 未提供時使用）"),
    service: GameService = Depends(get_game_service)
):
    """
    更新遊戲紀錄，只有擁有者可以更新。
    """
    if not request.email and email:
        request.email = email
    return await service.update_game(game_id, request)


@router.delete("/{game_id}", response_model=DeleteGameResponse)
async def delete_game(
    game_id: int = Path(..., description="遊戲紀錄 ID"),
    request: Optional[GameOwnerRequest] = Body(None),
    email: Optional[str] = Query(None, description="請求者 email（body 未提供時使用）"),
    service: GameService = Depends(get_game_service)
):
    """
    刪除遊戲紀錄，只有擁有者可以刪除。
    """
    owner = (request.email if request else None) or email
    await service.delete_game(game_id, owner)
    return DeleteGameResponse()
