"""
遊戲紀錄的服務層邏輯。
組合過濾條件、分頁、統計與擁有者授權，提供公開查詢與使用者 CRUD。
"""
from typing import Optional, Union

from src.application.dto.game_dto import (
    GameCreateRequest,
    GameListResponse,
    GameResponse,
    GameUpdateRequest,
    PublicGameListResponse,
    PublicGameResponse,
    StatsResponse,
)
from src.application.services.ownership import OwnershipAuthorizer
from src.config import settings
from src.domain.logic.game_validation import validate_game_changes, validate_new_game
from src.domain.logic.pagination import build_page_request
from src.domain.logic.search_filter import (
    build_game_filter,
    owned_by,
    owner_contains,
    title_contains,
)
from src.domain.logic.stats import summarize
from src.domain.models.game import GameFilter, PageRequest, PaginatedResult, SortOrder
from src.infrastructure.database.game_record_repo import GameRecordRepository
from src.utils.exceptions import (
    DeleteFailedError,
    ResourceNotFoundError,
    UpdateFailedError,
    ValidationError,
)
from src.utils.logger import logger

PageArg = Union[str, int, None]
SEARCH_TERM_MAX_LENGTH = 100


class GameService:
    def __init__(self, repo: GameRecordRepository, authorizer: Optional[OwnershipAuthorizer] = None):
        self.repo = repo
        self.authorizer = authorizer or OwnershipAuthorizer(repo)

    # ========== 內部工具 ==========

    def _page(self, page: PageArg, limit: PageArg) -> PageRequest:
        return build_page_request(
            page,
            limit,
            default_limit=settings.default_page_size,
            max_limit=settings.max_page_size,
        )

    async def _public_list(self, game_filter: GameFilter, sort: SortOrder, page: PageRequest) -> PublicGameListResponse:
        result: PaginatedResult = await self.repo.paginate(game_filter, sort, page)
        return PublicGameListResponse(
            results=[PublicGameResponse.model_validate(row) for row in result.results],
            total=result.total,
        )

    async def _owner_list(self, game_filter: GameFilter, sort: SortOrder, page: PageRequest) -> GameListResponse:
        result: PaginatedResult = await self.repo.paginate(game_filter, sort, page)
        return GameListResponse(
            results=[GameResponse.model_validate(row) for row in result.results],
            total=result.total,
        )

    @staticmethod
    def _search_term(value: Optional[str], name: str) -> str:
        term = (value or "").strip()
        if not term:
            raise ValidationError(f"{name} is required")
        if len(term) > SEARCH_TERM_MAX_LENGTH:
            raise ValidationError(f"{name} search term must be less than {SEARCH_TERM_MAX_LENGTH} characters")
        return term

    @staticmethod
    def _required_email(email: Optional[str]) -> str:
        if not email or not email.strip():
            raise ValidationError("Email is required")
        return email.strip()

    # ========== 公開查詢 ==========

    async def get_popular_games(self, page: PageArg = None, limit: PageArg = None) -> PublicGameListResponse:
        return await self._public_list(GameFilter(), SortOrder.POPULAR, self._page(page, limit))

    async def get_recent_games(self, page: PageArg = None, limit: PageArg = None) -> PublicGameListResponse:
        return await self._public_list(GameFilter(), SortOrder.RECENT, self._page(page, limit))

    async def search_games_by_title(
        self,
        title: Optional[str],
        page: PageArg = None,
        limit: PageArg = None
    ) -> PublicGameListResponse:
        """
        依標題搜尋所有使用者的遊戲（不分大小寫子字串）。

        Raises:
            ValidationError: 標題為空白或超過長度
        """
        term = self._search_term(title, "Title")
        return await self._public_list(title_contains(term), SortOrder.INSERTION, self._page(page, limit))

    async def search_games_by_user(
        self,
        email: Optional[str],
        page: PageArg = None,
        limit: PageArg = None
    ) -> GameListResponse:
        """
        依擁有者 email 搜尋（不分大小寫子字串），結果包含 email。

        Raises:
            ValidationError: email 為空白或超過長度
        """
        term = self._search_term(email, "Email")
        return await self._owner_list(owner_contains(term), SortOrder.RECENT, self._page(page, limit))

    async def get_global_stats(self) -> StatsResponse:
        return await self._stats(owned_by(None))

    # ========== 使用者操作 ==========

    async def get_user_games(
        self,
        email: Optional[str],
        search_field: Optional[str] = None,
        search_value: Optional[str] = None,
        page: PageArg = None,
        limit: PageArg = None
    ) -> GameListResponse:
        """
        取得使用者自己的遊戲，可依欄位過濾。

        Args:
            email: 擁有者 email（必填）
            search_field: title / rating / timespent / dateadded
            search_value: 搜尋值
            page: 頁碼
            limit: 每頁筆數

        Returns:
            GameListResponse
        """
        owner = self._required_email(email)
        game_filter = build_game_filter(owner, search_field, search_value)
        return await self._owner_list(game_filter, SortOrder.RECENT, self._page(page, limit))

    async def get_user_stats(self, email: Optional[str]) -> StatsResponse:
        return await self._stats(owned_by(self._required_email(email)))

    async def _stats(self, game_filter: GameFilter) -> StatsResponse:
        summary = summarize(await self.repo.aggregate_stats(game_filter))
        return StatsResponse(
            total_games=summary.total_games,
            total_time=summary.total_time,
            avg_rating=summary.avg_rating,
            avg_time=summary.avg_time,
        )

    async def create_game(self, request: GameCreateRequest) -> GameResponse:
        """
        新增遊戲紀錄。

        Raises:
            ValidationError: 欄位不合法
        """
        data = validate_new_game(request.model_dump())
        game = await self.repo.create_game(**data)
        logger.info("Game created", extra={"game_id": game.id, "email": game.email})
        return GameResponse.model_validate(game)

    async def get_game_by_id(self, game_id: int, email: Optional[str] = None) -> GameResponse:
        """
        取得單一遊戲；有提供 email 時必須是擁有者。

        Raises:
            ResourceNotFoundError: 紀錄不存在
            UnauthorizedError: email 與擁有者不符
        """
        if email and email.strip():
            game = await self.authorizer.authorize(game_id, email, action="access")
        else:
            game = await self.repo.get_by_id(game_id)
        return GameResponse.model_validate(game)

    async def update_game(self, game_id: int, request: GameUpdateRequest) -> GameResponse:
        """
        更新遊戲紀錄（部分更新，未提供的欄位維持原值）。

        Raises:
            ValidationError: email 未提供或欄位不合法
            ResourceNotFoundError: 紀錄不存在
            UnauthorizedError: 不是擁有者
            UpdateFailedError: 授權後寫入前紀錄已被刪除
        """
        current = await self.authorizer.authorize(game_id, request.email, action="update")
        changes = validate_game_changes(request.model_dump(exclude_unset=True, exclude={"email"}))
        if not changes:
            return GameResponse.model_validate(current)

        try:
            game = await self.repo.update(game_id, changes)
        except ResourceNotFoundError as e:
            raise UpdateFailedError(
                message="Failed to update game",
                resource_type="game",
                resource_id=str(game_id)
            ) from e

        logger.info("Game updated", extra={"game_id": game_id, "fields": ",".join(sorted(changes))})
        return GameResponse.model_validate(game)

    async def delete_game(self, game_id: int, email: Optional[str]) -> None:
        """
        刪除遊戲紀錄，刪除條件再次比對 (id, email)。

        Raises:
            ValidationError: email 未提供
            ResourceNotFoundError: 紀錄不存在
            UnauthorizedError: 不是擁有者
            DeleteFailedError: 沒有資料列被刪除
        """
        await self.authorizer.authorize(game_id, email, action="delete")
        deleted = await self.repo.delete_owned(game_id, email.strip())
        if not deleted:
            raise DeleteFailedError(
                message="Failed to delete game",
                resource_type="game",
                resource_id=str(game_id)
            )
        logger.info("Game deleted", extra={"game_id": game_id})
