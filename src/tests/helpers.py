from datetime import datetime
from types import SimpleNamespace


def make_record(**overrides):
    """建立假的 GameRecord（給 mock repository 用）。"""
    data = {
        "id": 1,
        "title": "Celeste",
        "rating": 9.0,
        "timespent": 12.0,
        "email": "a@x.com",
        "dateadded": datetime(2025, 1, 1, 10, 0, 0),
        "image_path": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)
