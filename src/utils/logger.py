"""
日誌工具。
提供整個應用共用的 logger，支援以 extra 附加結構化欄位。
"""
import logging
import sys

from src.config import settings

# LogRecord 內建屬性，格式化 extra 時需略過
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """
    在訊息後方附加 extra 欄位（key=value），位置在例外堆疊之前。

    用法:
    ```python
    logger.info("Game created", extra={"game_id": 1, "email": "a@x.com"})
    # 2025-01-01 10:00:00 | INFO | game_tracker | Game created | game_id=1 email=a@x.com
    ```
    """

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if extras:
            pairs = " ".join(f"{key}={value}" for key, value in extras.items())
            message = f"{message} | {pairs}"
        return message


def get_logger(name: str) -> logging.Logger:
    """
    取得已設定好 handler 的 logger。

    Args:
        name: logger 名稱

    Returns:
        logging.Logger 實例
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ExtraFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        ))
        log.addHandler(handler)
        log.setLevel(settings.log_level.upper())
        log.propagate = False
    return log


logger = get_logger("game_tracker")
