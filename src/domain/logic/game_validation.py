"""
遊戲紀錄欄位驗證。
建立與更新共用同一組規則；更新時只檢查有提供的欄位。
"""
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from src.utils.exceptions import ValidationError

TITLE_MAX_LENGTH = 100
RATING_MIN = 0
RATING_MAX = 10
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _decimal_places(value: float) -> int:
    try:
        exponent = Decimal(str(value)).normalize().as_tuple().exponent
    except InvalidOperation:
        return 0
    return max(0, -exponent) if isinstance(exponent, int) else 0


def validate_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required and must be a non-empty string")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be less than {TITLE_MAX_LENGTH} characters")
    return title


def validate_rating(rating: Any) -> float:
    number = _as_number(rating)
    if number is None or number < RATING_MIN or number > RATING_MAX:
        raise ValidationError(f"Rating must be a number between {RATING_MIN} and {RATING_MAX}")
    if _decimal_places(number) > 1:
        raise ValidationError("Rating can have at most 1 decimal place")
    return number


def validate_timespent(timespent: Any) -> float:
    number = _as_number(timespent)
    if number is None or number < 0:
        raise ValidationError("Time spent must be a non-negative number")
    return number


def validate_email(email: Any, check_format: bool = False) -> str:
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")
    email = email.strip()
    if check_format and not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")
    return email


def validate_new_game(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    驗證並整理新增遊戲的資料。

    Args:
        data: 包含 title, rating, timespent, email, image_path 的字典

    Returns:
        已修剪與轉型的資料

    Raises:
        ValidationError: 任一欄位不合法
    """
    return {
        "title": validate_title(data.get("title")),
        "rating": validate_rating(data.get("rating")),
        "timespent": validate_timespent(data.get("timespent")),
        "email": validate_email(data.get("email"), check_format=True),
        "image_path": data.get("image_path") or None,
    }


def validate_game_changes(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    驗證更新欄位，只處理有提供的 title / rating / timespent / image_path。

    id、email、dateadded 不可修改，會被忽略。
    """
    changes: Dict[str, Any] = {}
    if data.get("title") is not None:
        changes["title"] = validate_title(data["title"])
    if data.get("rating") is not None:
        changes["rating"] = validate_rating(data["rating"])
    if data.get("timespent") is not None:
        changes["timespent"] = validate_timespent(data["timespent"])
    if data.get("image_path") is not None:
        changes["image_path"] = data["image_path"] or None
    return changes
