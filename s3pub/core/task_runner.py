"""2段階のアップロード（通常分 → 優先度順の後回し分）を実行"""
import os
from dataclasses import dataclass
from typing import Sequence

from ..utils.file_utils import PathFilter, PriorityItem, TreeWalker
from ..utils.logger import LoggerManager
from .context import RunContext
from .uploader import BatchUploadExecutor, UploadExecutor, UploadUnit


@dataclass(frozen=True)
class PublishReport:
    """実行結果"""
    uploaded: int
    elapsed_seconds: float


class TaskRunner:
    """ツリーの走査とバッチ実行の順序を管理"""

    def __init__(self, context: RunContext):
        self.context = context
        config = context.config
        self.root = context.target.local_root
        self.logger = LoggerManager.get_logger()
        LoggerManager.set_progress(not config.logoff)

        self.path_filter = PathFilter(self.root, config.excludes, config.files_pri)
        self.walker = TreeWalker(self.path_filter, config.nest)
        self.executor = UploadExecutor(context, self.path_filter)
        self.batch_executor = BatchUploadExecutor(config.batch)

    def run(self) -> PublishReport:
        """全体を実行"""
        if not os.path.exists(self.root):
            raise FileNotFoundError(f"Local path {self.root} not found.")

        counters = self.context.counters
        counters.reset()

        # 1段階目: 優先度なしのものをまとめて
        result = self.walker.walk(self.root, honor_priority=True)
        self._run_units(result.files)

        # 2段階目: 優先度の高い順に1つずつ
        for item in self.sort_deferred(result.deferred):
            self.logger.debug(f"pushing deferred path {item.path} (priority {item.priority})")
            sub_result = self.walker.walk(item.path, honor_priority=False)
            self._run_units(sub_result.files)

        counters.stop()
        report = PublishReport(uploaded=counters.uploaded, elapsed_seconds=counters.elapsed)
        # ログレベルに関係なく表示する
        summary = (
            f"push s3 finish. files count:{report.uploaded}, "
            f"use_time:{report.elapsed_seconds:.3f} secs"
        )
        print(summary)
        self.logger.debug(summary)
        return report

    @staticmethod
    def sort_deferred(items: Sequence[PriorityItem]) -> Sequence[PriorityItem]:
        """優先度の降順（同じ優先度は走査順のまま）"""
        return sorted(items, key=lambda item: item.priority, reverse=True)

    def _run_units(self, files: Sequence[str]) -> int:
        units = [UploadUnit(path, self.executor) for path in files]
        return self.batch_executor.run(units)
