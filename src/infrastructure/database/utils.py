"""
資料庫工具函數。
提供資料庫操作的輔助功能。
"""
import functools
from typing import TypeVar, Callable, Awaitable

from src.infrastructure.database.session import SessionLocal

T = TypeVar('T')


def with_session(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    裝飾器：自動處理 session 的創建和關閉。

    當函數的 db 參數為 None 時，自動創建一個新的 session。
    函數執行完畢後自動提交並關閉 session（如果是由裝飾器創建的）。
    每次呼叫各自擁有 session，因此可以用 asyncio.gather 同時執行多個查詢。

    用法：
    ```python
    @with_session
    async def get_entity(id: int, db: AsyncSession = None) -> Entity:
        entity = await db.get(Entity, id)
        return entity
    ```

    Args:
        func: 要裝飾的異步函數，必須有一個名為 db 的參數，類型為 AsyncSession，且可為 None

    Returns:
        裝飾後的函數
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> T:
        if kwargs.get('db') is not None:
            return await func(*args, **kwargs)

        async with SessionLocal() as db:
            kwargs['db'] = db
            try:
                result = await func(*args, **kwargs)
                await db.commit()
                return result
            except Exception:
                await db.rollback()
                raise

    return wrapper
