"""
搜尋過濾條件建構。
根據擁有者範圍與搜尋欄位產生 GameFilter，為純函式，不觸及資料庫。
"""
import math
from datetime import date
from typing import Callable, Dict, Optional, Tuple

from src.domain.models.game import (
    FilterCondition,
    FilterOperator,
    GameFilter,
    SearchField,
)


def _coerce_text(value: str) -> Optional[str]:
    return value


def _coerce_number(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _coerce_day(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


# 欄位 -> (比對方式, 值轉型函式)
FIELD_RULES: Dict[SearchField, Tuple[FilterOperator, Callable[[str], object]]] = {
    SearchField.TITLE: (FilterOperator.CONTAINS, _coerce_text),
    SearchField.RATING: (FilterOperator.EQUALS, _coerce_number),
    SearchField.TIMESPENT: (FilterOperator.EQUALS, _coerce_number),
    SearchField.DATEADDED: (FilterOperator.ON_DAY, _coerce_day),
}


def field_condition(search_field: SearchField, value: str) -> FilterCondition:
    """
    產生單一欄位的過濾條件。

    無法轉型的值（例如 rating="abc"）不會拋錯，而是產生一個不符合任何資料的條件。

    Args:
        search_field: 搜尋欄位
        value: 原始字串值

    Returns:
        FilterCondition
    """
    operator, coerce = FIELD_RULES[search_field]
    coerced = coerce(value)
    if coerced is None:
        return FilterCondition(column=search_field.value, operator=FilterOperator.NEVER)
    return FilterCondition(column=search_field.value, operator=operator, value=coerced)


def build_game_filter(
    scope_email: Optional[str] = None,
    search_field: Optional[str] = None,
    search_value: Optional[str] = None,
) -> GameFilter:
    """
    建立使用者遊戲列表的過濾條件。

    Args:
        scope_email: 擁有者 email，提供時只查該使用者的資料（完全相等）
        search_field: 搜尋欄位名稱，無法辨識時退回標題子字串搜尋
        search_value: 搜尋值，空白視為未提供

    Returns:
        GameFilter
    """
    conditions = []
    if scope_email:
        conditions.append(FilterCondition("email", FilterOperator.EQUALS, scope_email))

    value = search_value.strip() if search_value else ""
    if search_field and value:
        parsed = SearchField.parse(search_field) or SearchField.TITLE
        conditions.append(field_condition(parsed, value))

    return GameFilter(conditions=tuple(conditions))


def title_contains(term: str) -> GameFilter:
    """公開標題搜尋：標題不分大小寫子字串。"""
    return GameFilter(conditions=(FilterCondition("title", FilterOperator.CONTAINS, term),))


def owner_contains(term: str) -> GameFilter:
    """公開使用者搜尋：email 不分大小寫子字串。"""
    return GameFilter(conditions=(FilterCondition("email", FilterOperator.CONTAINS, term),))


def owned_by(email: Optional[str]) -> GameFilter:
    """統計用範圍：有 email 時限定該使用者，否則為全體。"""
    if not email:
        return GameFilter()
    return GameFilter(conditions=(FilterCondition("email", FilterOperator.EQUALS, email),))
