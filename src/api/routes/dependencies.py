"""
路由共用的依賴注入函數。
"""
from src.application.services.game_service import GameService
from src.infrastructure.database.game_record_repo import GameRecordRepository


def get_game_service() -> GameService:
    """
    獲取 GameService 實例。
    """
    return GameService(repo=GameRecordRepository())
