"""
Game 相關的 DTO (Data Transfer Objects)。
用於遊戲紀錄 CRUD、公開查詢與統計的資料結構定義。
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# ========== 請求 DTO ==========

class GameCreateRequest(BaseModel):
    """
    新增遊戲紀錄請求（範圍驗證在服務層進行）
    """
    title: Optional[str] = Field(None, description="遊戲標題（1-100 字元）")
    rating: Optional[float] = Field(None, description="評分（0-10，最多一位小數）")
    timespent: Optional[float] = Field(None, description="遊玩時數（>= 0）")
    email: Optional[str] = Field(None, description="擁有者 email")
    image_path: Optional[str] = Field(None, description="封面圖片檔名")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Celeste",
                "rating": 9,
                "timespent": 12,
                "email": "a@x.com",
                "image_path": "image-1700000000000-123.png"
            }
        }
    )


class GameUpdateRequest(BaseModel):
    """
    更新遊戲紀錄請求，只更新有提供的欄位；email 用於擁有者驗證
    """
    email: Optional[str] = Field(None, description="請求者 email")
    title: Optional[str] = Field(None, description="遊戲標題")
    rating: Optional[float] = Field(None, description="評分")
    timespent: Optional[float] = Field(None, description="遊玩時數")
    image_path: Optional[str] = Field(None, description="封面圖片檔名")


class GameOwnerRequest(BaseModel):
    """
    刪除請求本體，只帶請求者 email
    """
    email: Optional[str] = Field(None, description="請求者 email")

# ========== 回應 DTO ==========

class PublicGameResponse(BaseModel):
    """
    公開列表中的遊戲（不含擁有者 email）
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="遊戲紀錄 ID")
    title: str = Field(..., description="遊戲標題")
    rating: float = Field(..., description="評分")
    timespent: float = Field(..., description="遊玩時數")
    dateadded: datetime = Field(..., description="新增時間")
    image_path: Optional[str] = Field(None, description="封面圖片檔名")


class GameResponse(PublicGameResponse):
    """
    完整遊戲紀錄
    """
    email: str = Field(..., description="擁有者 email")


class PublicGameListResponse(BaseModel):
    results: List[PublicGameResponse] = Field(default_factory=list, description="本頁資料")
    total: int = Field(0, description="符合條件的總筆數")


class GameListResponse(BaseModel):
    results: List[GameResponse] = Field(default_factory=list, description="本頁資料")
    total: int = Field(0, description="符合條件的總筆數")


class StatsResponse(BaseModel):
    """
    統計摘要，JSON 欄位使用 camelCase
    """
    model_config = ConfigDict(populate_by_name=True)

    total_games: int = Field(0, alias="totalGames", description="遊戲數")
    total_time: float = Field(0, alias="totalTime", description="總遊玩時數")
    avg_rating: float = Field(0, alias="avgRating", description="平均評分")
    avg_time: float = Field(0, alias="avgTime", description="平均遊玩時數")


class DeleteGameResponse(BaseModel):
    success: bool = Field(True, description="是否刪除成功")
    message: str = Field("Game deleted successfully", description="結果訊息")
