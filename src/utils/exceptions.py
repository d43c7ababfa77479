"""
應用程式自訂例外。
每個例外帶有對應的 HTTP 狀態碼，由 error_handler 統一轉成 JSON 回應。
"""
from typing import Optional


class AppException(Exception):
    """所有業務例外的基底類別。"""
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(AppException):
    """輸入格式或範圍錯誤。"""
    status_code = 400


class UnauthorizedError(AppException):
    """請求者身分與紀錄擁有者不符。"""
    status_code = 403


class ResourceNotFoundError(AppException):
    """
    找不到指定資源。

    Args:
        message: 錯誤訊息
        resource_type: 資源類型，例如 "game"
        resource_id: 資源識別碼
    """
    status_code = 404

    def __init__(self, message: str, resource_type: str = None, resource_id: str = None):
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class UpdateFailedError(ResourceNotFoundError):
    """授權檢查後更新時紀錄已不存在。"""


class DeleteFailedError(ResourceNotFoundError):
    """刪除時沒有任何資料列符合 (id, email)。"""
