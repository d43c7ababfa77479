"""
Game 領域模型定義。
包含搜尋欄位、過濾條件、分頁請求與統計摘要等資料結構。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class SearchField(str, Enum):
    """
    可搜尋的欄位。
    - **title**: 標題子字串（不分大小寫）
    - **rating** / **timespent**: 數值完全相等
    - **dateadded**: 新增日期（YYYY-MM-DD）相等
    """
    TITLE = "title"
    RATING = "rating"
    TIMESPENT = "timespent"
    DATEADDED = "dateadded"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SearchField"]:
        """
        解析欄位名稱，不分大小寫（前端送 timeSpent / dateAdded）。

        Returns:
            對應的 SearchField，無法辨識時回傳 None
        """
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class FilterOperator(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"  # 不分大小寫子字串
    ON_DAY = "on_day"
    NEVER = "never"  # 不符合任何資料列


@dataclass(frozen=True)
class FilterCondition:
    """
    單一過濾條件。
    - **column**: 欄位名稱（對應 games 表）
    - **operator**: 比對方式
    - **value**: 已轉型的比對值
    """
    column: str
    operator: FilterOperator
    value: Any = None


@dataclass(frozen=True)
class GameFilter:
    """
    過濾條件集合，資料查詢與筆數查詢共用同一份，保證兩者一致。
    """
    conditions: Tuple[FilterCondition, ...] = ()

    def is_empty(self) -> bool:
        return not self.conditions


@dataclass(frozen=True)
class PageRequest:
    """
    分頁請求。
    - **page**: 頁碼（從 1 開始）
    - **limit**: 每頁筆數
    """
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SortOrder(str, Enum):
    POPULAR = "popular"  # rating DESC, timespent DESC
    RECENT = "recent"  # dateadded DESC
    INSERTION = "insertion"  # id ASC


@dataclass
class PaginatedResult(Generic[T]):
    """
    分頁結果：results 為本頁資料，total 為符合條件的總筆數（與頁碼無關）。
    """
    results: List[T] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class StatsSummary:
    """
    統計摘要，每次請求即時計算，不做持久化。
    """
    total_games: int = 0
    total_time: float = 0.0
    avg_rating: float = 0.0
    avg_time: float = 0.0
