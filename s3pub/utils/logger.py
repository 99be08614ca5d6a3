"""ロギング設定ユーティリティ"""
import logging
import os
from typing import Optional, List
from ..models.config import LoggingConfig


LOGGER_NAME = "s3pub"

# extra=PROGRESS を付けたレコードはlogoff時に出力しない
PROGRESS = {"progress": True}


class ProgressFilter(logging.Filter):
    """進捗行（ファイルごとのpush・スキップなど）の表示切り替え"""

    def __init__(self, enabled: bool = True):
        super().__init__()
        self.enabled = enabled

    def filter(self, record: logging.LogRecord) -> bool:
        return self.enabled or not getattr(record, "progress", False)


class LoggerManager:
    """ロガーの設定と管理"""

    _logger: Optional[logging.Logger] = None
    _progress_filter: Optional[ProgressFilter] = None

    @classmethod
    def setup(cls, config: LoggingConfig, logoff: bool = False) -> logging.Logger:
        """ロガーをセットアップ"""
        if cls._logger is not None:
            cls.set_progress(not logoff)
            return cls._logger

        log_level = getattr(logging, config.level.upper(), logging.INFO)

        handlers: List[logging.Handler] = []
        formatter = logging.Formatter(config.format, datefmt="%Y-%m-%d %H:%M:%S")

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

        if config.file:
            log_dir = os.path.dirname(config.file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir)

            file_handler = logging.FileHandler(config.file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(log_level)
        logger.handlers = handlers

        # ハンドラーではなくロガーに付ける（伝播先でも落とすため）
        cls._progress_filter = ProgressFilter(enabled=not logoff)
        logger.filters = [cls._progress_filter]

        cls._logger = logger
        return logger

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """設定済みのロガーを取得（未設定ならデフォルト設定で初期化）"""
        if cls._logger is None:
            return cls.setup(LoggingConfig())
        return cls._logger

    @classmethod
    def set_progress(cls, enabled: bool) -> None:
        """進捗行の出力を切り替える"""
        cls.get_logger()
        cls._progress_filter.enabled = enabled

    @classmethod
    def reset(cls) -> None:
        """ハンドラーとフィルタを外して未設定の状態に戻す"""
        if cls._logger is not None:
            for handler in cls._logger.handlers:
                handler.close()
            cls._logger.handlers = []
            cls._logger.filters = []
        cls._logger = None
        cls._progress_filter = None
