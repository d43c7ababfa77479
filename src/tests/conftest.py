import os
import tempfile

# 測試使用暫存 SQLite 檔案，需在匯入 src 之前設定
_DB_DIR = tempfile.mkdtemp(prefix="game_tracker_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["APP_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest

from src.infrastructure.database.game_record_repo import GameRecordRepository
from src.infrastructure.database.session import create_tables, drop_tables


@pytest.fixture
async def db():
    await drop_tables()
    await create_tables()
    yield
    await drop_tables()


@pytest.fixture
def repo():
    return GameRecordRepository()


@pytest.fixture
async def client(db):
    from src.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
