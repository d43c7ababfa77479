"""
統計彙總的數值轉換。
資料庫回傳的彙總值可能是 None、字串或 Decimal，這裡統一轉成數字。
"""
import math
from decimal import Decimal
from typing import Any, Mapping, Union

from src.domain.models.game import StatsSummary


def to_number(value: Any) -> Union[int, float]:
    """
    將彙總值轉成數字；None、空字串或無法轉換的值視為 0。
    """
    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value if math.isfinite(value) else 0
    if isinstance(value, Decimal):
        return float(value)
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def summarize(row: Mapping[str, Any]) -> StatsSummary:
    """
    將彙總查詢的結果列轉成 StatsSummary。

    Args:
        row: 包含 total_games, total_time, avg_rating, avg_time 的結果列

    Returns:
        StatsSummary，沒有資料時全部為 0
    """
    return StatsSummary(
        total_games=int(to_number(row.get("total_games"))),
        total_time=float(to_number(row.get("total_time"))),
        avg_rating=float(to_number(row.get("avg_rating"))),
        avg_time=float(to_number(row.get("avg_time"))),
    )
