"""
擁有者授權檢查。
修改或刪除前先讀取紀錄，確認請求者 email 與紀錄擁有者相同。
"""
from src.infrastructure.database.game_record_repo import GameRecordRepository
from src.infrastructure.database.models.game_records import GameRecord
from src.utils.exceptions import UnauthorizedError, ValidationError
from src.utils.logger import logger


def is_owner(record: GameRecord, requesting_email: str) -> bool:
    """email 修剪後完全相等（區分大小寫）才視為擁有者。"""
    return (record.email or "").strip() == (requesting_email or "").strip()


class OwnershipAuthorizer:
    """
    擁有者授權。

    用法示例:
    ```python
    authorizer = OwnershipAuthorizer(GameRecordRepository())
    record = await authorizer.authorize(12, "a@x.com", action="update")
    ```
    """

    def __init__(self, repo: GameRecordRepository):
        self.repo = repo

    async def authorize(self, record_id: int, requesting_email: str, action: str = "access") -> GameRecord:
        """
        取得紀錄並確認擁有者。

        Args:
            record_id: 紀錄 ID
            requesting_email: 請求者宣稱的 email
            action: 動作名稱，用於錯誤訊息（update / delete / access）

        Returns:
            目前的 GameRecord

        Raises:
            ValidationError: 未提供 email
            ResourceNotFoundError: 紀錄不存在
            UnauthorizedError: 請求者不是擁有者
        """
        if not requesting_email or not requesting_email.strip():
            raise ValidationError("User email is required")

        record = await self.repo.get_by_id(record_id)
        if not is_owner(record, requesting_email):
            logger.warning("Ownership check failed", extra={
                "game_id": record_id,
                "action": action,
            })
            raise UnauthorizedError(f"Unauthorized: You can only {action} your own games")
        return record
