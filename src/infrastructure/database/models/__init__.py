from .base import Base
from .game_records import GameRecord

__all__ = ["Base", "GameRecord"]
