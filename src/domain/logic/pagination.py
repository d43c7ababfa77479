"""
分頁計算。
不合法的頁碼或筆數一律修正為預設值，不會拋錯。
"""
from typing import Optional, Union

from src.domain.models.game import PageRequest

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# 資料庫 OFFSET 上限（32 位元整數）
MAX_OFFSET = 2**31 - 1


def _to_int(value: Union[str, int, None]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def build_page_request(
    page: Union[str, int, None] = None,
    limit: Union[str, int, None] = None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageRequest:
    """
    將原始的 page / limit 轉成 PageRequest。

    - page 缺少、非數字或小於 1 -> 1
    - limit 缺少、非數字或不在 [1, max_limit] -> default_limit
    - page 過大時截到 offset 不超過 MAX_OFFSET 的頁碼（結果為空頁）

    Args:
        page: 頁碼（可為查詢字串原值）
        limit: 每頁筆數
        default_limit: 預設每頁筆數
        max_limit: 每頁筆數上限

    Returns:
        PageRequest，offset = (page - 1) * limit
    """
    page_number = _to_int(page)
    if page_number is None or page_number < 1:
        page_number = DEFAULT_PAGE

    page_size = _to_int(limit)
    if page_size is None or page_size < 1 or page_size > max_limit:
        page_size = default_limit

    page_number = min(page_number, MAX_OFFSET // page_size + 1)

    return PageRequest(page=page_number, limit=page_size)
