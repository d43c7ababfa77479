"""
GameRecord repository for database operations.
Provides paginated search, aggregate statistics and owner-scoped writes for the games table.
"""
import asyncio
from typing import Dict, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from src.domain.models.game import GameFilter, PageRequest, PaginatedResult, SortOrder
from src.infrastructure.database.base_repo import BaseRepository
from src.infrastructure.database.models.game_records import GameRecord
from src.infrastructure.database.utils import with_session

# 排序方式 -> ORDER BY，最後以 id 決定同值順序
SORT_COLUMNS: Dict[SortOrder, Tuple[ColumnElement, ...]] = {
    SortOrder.POPULAR: (GameRecord.rating.desc(), GameRecord.timespent.desc(), GameRecord.id.asc()),
    SortOrder.RECENT: (GameRecord.dateadded.desc(), GameRecord.id.desc()),
    SortOrder.INSERTION: (GameRecord.id.asc(),),
}


class GameRecordRepository(BaseRepository[GameRecord]):
    """
    遊戲紀錄的 Repository，提供對 GameRecord 的查詢、分頁與統計。

    用法示例:
    ```python
    repo = GameRecordRepository()

    # 分頁查詢（資料與總筆數同時查詢）
    page = await repo.paginate(owned_by("a@x.com"), SortOrder.RECENT, PageRequest(1, 10))

    # 統計
    row = await repo.aggregate_stats(GameFilter())
    ```
    """
    model = GameRecord

    async def paginate(
        self,
        game_filter: GameFilter,
        sort: SortOrder,
        page: PageRequest
    ) -> PaginatedResult[GameRecord]:
        """
        分頁查詢。

        資料查詢與筆數查詢使用同一個 WHERE 條件，並同時送出（各自獨立的 session，
        不在同一個交易中）。

        Args:
            game_filter: 過濾條件
            sort: 排序方式
            page: 分頁請求

        Returns:
            PaginatedResult，total 為符合條件的總筆數
        """
        where = self.build_where(game_filter)
        rows, total = await asyncio.gather(
            self.find_page(where, SORT_COLUMNS[sort], page.limit, page.offset),
            self.count(where),
        )
        return PaginatedResult(results=rows, total=total)

    @with_session
    async def aggregate_stats(self, game_filter: GameFilter, db: AsyncSession = None) -> Dict:
        """
        計算 count / sum / avg 彙總值。

        Args:
            game_filter: 統計範圍
            db: 可選的數據庫 Session

        Returns:
            包含 total_games, total_time, avg_rating, avg_time 的字典（原始值，未轉型）
        """
        stmt = select(
            func.count(GameRecord.id).label("total_games"),
            func.coalesce(func.sum(GameRecord.timespent), 0).label("total_time"),
            func.coalesce(func.avg(GameRecord.rating), 0).label("avg_rating"),
            func.coalesce(func.avg(GameRecord.timespent), 0).label("avg_time"),
        ).where(self.build_where(game_filter))
        result = await db.execute(stmt)
        return dict(result.mappings().one())

    async def create_game(
        self,
        title: str,
        rating: float,
        timespent: float,
        email: str,
        image_path: Optional[str] = None,
        db: Optional[AsyncSession] = None
    ) -> GameRecord:
        """
        新增遊戲紀錄，id 與 dateadded 由資料庫指定。

        Returns:
            新創建的 GameRecord 實體
        """
        return await self.create(
            {
                "title": title,
                "rating": rating,
                "timespent": timespent,
                "email": email,
                "image_path": image_path,
            },
            db=db
        )

    async def delete_owned(self, id: int, email: str, db: Optional[AsyncSession] = None) -> bool:
        """
        刪除指定擁有者的紀錄，條件同時比對 id 與 email。

        Returns:
            是否有資料列被刪除
        """
        deleted = await self.delete_where(db=db, id=id, email=email)
        return deleted > 0