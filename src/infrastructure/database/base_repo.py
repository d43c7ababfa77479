"""
Base repository class for database operations.
Provides common asynchronous CRUD operations for all entity repositories.
"""
from datetime import datetime, time, timedelta
from typing import TypeVar, Generic, Type, List, Optional, Any, Dict, Sequence, Union

from sqlalchemy import String, and_, delete, false, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from src.domain.models.game import FilterCondition, FilterOperator, GameFilter
from src.infrastructure.database.utils import with_session
from src.utils.exceptions import ResourceNotFoundError

# Type variable for the entity model
T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    基礎資料庫 Repository 類，提供通用的非同步 CRUD 操作。

    用法示例:
    ```python
    class GameRecordRepository(BaseRepository[GameRecord]):
        model = GameRecord

    repo = GameRecordRepository()
    games = await repo.get_by(email="a@x.com")
    game = await repo.get_by_id(1)
    ```
    """
    # 子類需要覆寫此屬性
    model: Type[Any] = None

    def __init__(self):
        """初始化 repository。"""
        if self.__class__.model is None:
            raise NotImplementedError("Repository class must define 'model' attribute")

    def _not_found(self, id: Any) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            message=f"{self.model.__name__} with id {id} not found",
            resource_type=self.model.__name__.lower(),
            resource_id=str(id)
        )

    def _condition_clause(self, condition: FilterCondition) -> ColumnElement:
        """將單一 FilterCondition 轉成 SQL 條件（參數化，不拼接字串）。"""
        if condition.operator == FilterOperator.NEVER:
            return false()

        column = getattr(self.model, condition.column)
        if condition.operator == FilterOperator.EQUALS:
            return column == condition.value
        if condition.operator == FilterOperator.CONTAINS:
            return func.lower(column, type_=String).contains(str(condition.value).lower(), autoescape=True)
        if condition.operator == FilterOperator.ON_DAY:
            start = datetime.combine(condition.value, time.min)
            return and_(column >= start, column < start + timedelta(days=1))
        raise ValueError(f"Unsupported filter operator: {condition.operator}")

    def build_where(self, game_filter: Optional[GameFilter]) -> ColumnElement:
        """
        將 GameFilter 轉成單一 WHERE 條件。

        資料查詢與筆數查詢都使用這個結果，保證兩者條件一致。
        """
        if game_filter is None or game_filter.is_empty():
            return true()
        return and_(*(self._condition_clause(c) for c in game_filter.conditions))

    @with_session
    async def get_by_id(self, id: int, db: AsyncSession = None) -> T:
        """
        根據 ID 取得實體。

        Args:
            id: 實體 ID
            db: 可選的異步數據庫 Session，如果未提供則自動創建

        Returns:
            實體對象

        Raises:
            ResourceNotFoundError: 如果找不到實體
        """
        entity = await db.get(self.model, id)
        if not entity:
            raise self._not_found(id)
        return entity

    @with_session
    async def get_by(self, db: AsyncSession = None, **kwargs) -> List[T]:
        """
        根據條件查詢實體。

        Args:
            db: 可選的異步數據庫 Session，如果未提供則自動創建
            **kwargs: 查詢條件（欄位 == 值）

        Returns:
            符合條件的實體列表
        """
        stmt = select(self.model)

        for key, value in kwargs.items():
            if hasattr(self.model, key):
                stmt = stmt.where(getattr(self.model, key) == value)

        result = await db.execute(stmt)
        return list(result.scalars().all())

    @with_session
    async def find_page(
        self,
        where: ColumnElement,
        order_by: Sequence[ColumnElement],
        limit: int,
        offset: int,
        db: AsyncSession = None
    ) -> List[T]:
        """
        取得一頁資料。

        Args:
            where: WHERE 條件（由 build_where 產生）
            order_by: 排序欄位
            limit: 筆數上限
            offset: 略過筆數
            db: 可選的異步數據庫 Session

        Returns:
            本頁實體列表
        """
        stmt = (
            select(self.model)
            .where(where)
            .order_by(*order_by)
            .limit(limit)
            .offset(offset)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @with_session
    async def count(self, where: ColumnElement, db: AsyncSession = None) -> int:
        """
        計算符合條件的總筆數（不受分頁影響）。
        """
        stmt = select(func.count()).select_from(self.model).where(where)
        result = await db.execute(stmt)
        return int(result.scalar_one())

    @with_session
    async def create(self, data: Union[Dict[str, Any], T], db: AsyncSession = None) -> T:
        """
        創建新實體。

        Args:
            data: 實體數據或實體對象
            db: 可選的異步數據庫 Session，如果未提供則自動創建

        Returns:
            新創建的實體（含資料庫指定的欄位）
        """
        if isinstance(data, dict):
            entity = self.model(**data)
        else:
            entity = data

        db.add(entity)
        await db.flush()
        await db.refresh(entity)

        return entity

    @with_session
    async def update(self, id: int, data: Dict[str, Any], db: AsyncSession = None) -> T:
        """
        更新實體，只修改 data 中提供的欄位。

        Args:
            id: 實體 ID
            data: 要更新的數據
            db: 可選的異步數據庫 Session，如果未提供則自動創建

        Returns:
            更新後的實體

        Raises:
            ResourceNotFoundError: 如果找不到實體
        """
        entity = await db.get(self.model, id)
        if not entity:
            raise self._not_found(id)

        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        await db.flush()
        await db.refresh(entity)

        return entity

    @with_session
    async def delete_where(self, db: AsyncSession = None, **kwargs) -> int:
        """
        依條件刪除實體。

        Args:
            db: 可選的異步數據庫 Session
            **kwargs: 刪除條件（欄位 == 值），全部需符合

        Returns:
            被刪除的資料列數
        """
        if not kwargs:
            raise ValueError("delete_where requires at least one condition")
        stmt = delete(self.model)
        for key, value in kwargs.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        result = await db.execute(stmt)
        return result.rowcount or 0
