# src/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import games, public_games
from src.config import settings
from src.infrastructure.database.session import create_tables, engine
from src.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 啟動事件
    logger.info("API 服務啟動中", extra={
        "environment": settings.app_env,
        "port": settings.app_port
    })
    if settings.auto_create_tables:
        await create_tables()
    yield
    # 關閉事件
    await engine.dispose()
    logger.info("API 服務關閉中")


# 創建 FastAPI 應用
app = FastAPI(
    title="Game Tracker API",
    description="個人遊戲紀錄、公開排行與統計的 API 服務",
    version="0.1.0",
    lifespan=lifespan
)

# 設定 CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 設定全局異常處理
setup_exception_handlers(app)

# 加載 API 路由（公開路由需先註冊）
app.include_router(public_games.router)
app.include_router(games.router)


# 簡單的健康檢查端點
@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "environment": settings.app_env,
        "version": app.version
    }
