"""
Configuration package for the application.
"""
from .settings import settings

# 導出全局設定實例
__all__ = ["settings"]
