"""ファイルツリー走査とフィルタ"""
import os
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional, Tuple

from .logger import PROGRESS, LoggerManager


@dataclass(frozen=True)
class PriorityItem:
    """優先度付きで後回しにするパス（ディレクトリならサブツリーごと）"""
    path: str
    priority: float


@dataclass(frozen=True)
class WalkResult:
    """走査結果"""
    files: Tuple[str, ...] = ()
    deferred: Tuple[PriorityItem, ...] = ()


class PathFilter:
    """ブラックリストと優先度の判定"""

    def __init__(
        self,
        root: str,
        excludes: AbstractSet[str] = frozenset(),
        files_pri: Optional[Dict[str, float]] = None,
    ):
        self.root = os.path.normpath(root)
        self.excludes = excludes
        self.files_pri = files_pri or {}

    def relative_path(self, path: str) -> str:
        """ルートからの相対パス（区切りは "/"、ルート自身は空文字）"""
        relative = os.path.relpath(os.path.normpath(path), self.root)
        if relative == os.curdir:
            return ""
        return relative.replace(os.sep, "/")

    def is_blacklisted(self, path: str) -> bool:
        """ファイル名がexcludesに含まれるかチェック"""
        return os.path.basename(os.path.normpath(path)) in self.excludes

    def lookup_priority(self, path: str) -> Optional[float]:
        """files_priに登録された優先度を返す（なければNone）"""
        if not self.files_pri:
            return None
        return self.files_pri.get(self.relative_path(path))


class TreeWalker:
    """ディレクトリを再帰的に走査して、即時アップロード分と後回し分に分ける"""

    def __init__(self, path_filter: PathFilter, nest: int):
        self.path_filter = path_filter
        self.nest = nest
        self.logger = LoggerManager.get_logger()

    def walk(self, path: str, honor_priority: bool = True) -> WalkResult:
        """pathを走査する

        honor_priorityがFalseの場合は優先度を無視する（後回し分の再走査用）。
        """
        return self._walk(path, honor_priority, 1)

    def _walk(self, path: str, honor_priority: bool, depth: int) -> WalkResult:
        if self.path_filter.is_blacklisted(path):
            self.logger.info(f"skip file due to the blacklist:{path}", extra=PROGRESS)
            return WalkResult()

        if honor_priority:
            priority = self.path_filter.lookup_priority(path)
            if priority is not None:
                return WalkResult(deferred=(PriorityItem(path, priority),))

        if os.path.isfile(path):
            return WalkResult(files=(path,))

        if not os.path.isdir(path):
            self.logger.debug(f"Skipping entry that is neither file nor directory: {path}")
            return WalkResult()

        # 上限を超える深さのディレクトリは黙って捨てる
        if depth > self.nest:
            return WalkResult()

        files: List[str] = []
        deferred: List[PriorityItem] = []
        for name in sorted(os.listdir(path)):
            result = self._walk(os.path.join(path, name), honor_priority, depth + 1)
            files.extend(result.files)
            deferred.extend(result.deferred)
        return WalkResult(files=tuple(files), deferred=tuple(deferred))
