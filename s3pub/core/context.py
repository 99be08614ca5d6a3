"""1回の実行で共有する状態"""
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from ..models.config import Config, PublishTarget


class RunCounters:
    """アップロード成功数と開始・終了時刻"""

    def __init__(self):
        self._lock = threading.Lock()
        self._uploaded = 0
        self.started_at: Optional[float] = None
        self.stopped_at: Optional[float] = None

    @property
    def uploaded(self) -> int:
        with self._lock:
            return self._uploaded

    def reset(self) -> None:
        with self._lock:
            self._uploaded = 0
            self.started_at = time.monotonic()
            self.stopped_at = None

    def increment(self) -> int:
        """成功数を1つ増やす（バッチ内の複数スレッドから呼ばれる）"""
        with self._lock:
            self._uploaded += 1
            return self._uploaded

    def stop(self) -> None:
        self.stopped_at = time.monotonic()

    @property
    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.stopped_at if self.stopped_at is not None else time.monotonic()
        return end - self.started_at


@dataclass
class RunContext:
    """設定・アップロード先・S3クライアント・カウンターをまとめたもの"""
    config: Config
    target: PublishTarget
    client: Any
    counters: RunCounters = field(default_factory=RunCounters)
