"""
GameRecord 模型定義。
每一筆代表使用者玩過的一款遊戲。
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, func
from .base import Base


class GameRecord(Base):
    """
    遊戲紀錄表（games）。

    - **id**: 主鍵，自動遞增，建立後不可變
    - **title**: 遊戲標題（最多 100 字元）
    - **rating**: 評分（0-10）
    - **timespent**: 遊玩時數（>= 0）
    - **email**: 擁有者 email，建立後不可變
    - **dateadded**: 建立時間，由資料庫指定
    - **image_path**: 封面圖片檔名（可為空）
    """
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="主鍵，自動遞增")
    title = Column(String(100), nullable=False, comment="遊戲標題")
    rating = Column(Float, nullable=False, comment="評分（0-10）")
    timespent = Column(Float, nullable=False, server_default="0", comment="遊玩時數")
    email = Column(String(255), nullable=False, comment="擁有者 email")
    dateadded = Column(DateTime, nullable=False, server_default=func.now(), comment="新增時間")
    image_path = Column(String(255), nullable=True, comment="封面圖片檔名")

    __table_args__ = (
        Index("ix_games_email", "email"),
        Index("ix_games_dateadded", "dateadded"),
    )

    def __repr__(self):
        return f"<GameRecord id={self.id}, title={self.title}, email={self.email}>"
