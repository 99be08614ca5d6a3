"""S3アップロード実行クラス"""
import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from ..utils.file_utils import PathFilter
from ..utils.logger import PROGRESS, LoggerManager
from .context import RunContext


MAX_ATTEMPTS = 3
CACHE_CONTROL_KEYS = ("cachecontrol", "cache-control")


class UploadFailedError(RuntimeError):
    """リトライを使い切ったアップロード"""

    def __init__(self, path: str):
        super().__init__(f"push file:[{path}] fail")
        self.path = path


class UploadExecutor:
    """1ファイルのアップロード（キー生成・メタデータ・リトライ）"""

    def __init__(self, context: RunContext, path_filter: PathFilter):
        self.context = context
        self.config = context.config
        self.path_filter = path_filter
        self.logger = LoggerManager.get_logger()

    def build_key(self, path: str) -> str:
        """S3のキーを生成"""
        prefix = self.context.target.remote_prefix
        if self.config.remove_prefix:
            key = prefix + self.path_filter.relative_path(path)
        else:
            key = prefix + os.path.abspath(path)

        return key.replace("\\", "/")

    def resolve_metadata(self, path: str) -> Dict[str, str]:
        """headersの設定からメタデータを作る（なければ"default"）"""
        if not self.config.headers:
            return {}

        relative = self.path_filter.relative_path(path)
        # 空の{}を指定したパスはdefaultを使わない
        table = self.config.headers
        headers = table[relative] if relative in table else table.get("default")
        if not headers:
            return {}
        return {str(name): str(value) for name, value in headers.items()}

    @staticmethod
    def resolve_cache_control(metadata: Dict[str, str]) -> Optional[str]:
        for name, value in metadata.items():
            if name.lower() in CACHE_CONTROL_KEYS:
                return value
        return None

    def resolve_content_type(self, path: str) -> Optional[str]:
        """拡張子からContent-Typeを決める"""
        ext = os.path.splitext(path)[1]
        content_type = self.config.mime_types.get(ext) if ext else None
        if content_type:
            self.logger.info(f"ext:{ext}, file_path:{path}", extra=PROGRESS)
        return content_type

    def upload_file(self, path: str) -> str:
        """単一ファイルをアップロードしてキーを返す"""
        key = self.build_key(path)
        params = {
            "Bucket": self.context.target.bucket,
            "Key": key,
            "Metadata": self.resolve_metadata(path),
        }

        content_type = self.resolve_content_type(path)
        if content_type:
            params["ContentType"] = content_type

        cache_control = self.resolve_cache_control(params["Metadata"])
        if cache_control:
            params["CacheControl"] = cache_control

        # リトライ処理（待ち時間なし）
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                with open(path, "rb") as body:
                    self.context.client.put_object(Body=body, **params)
                break
            except Exception as e:
                self.logger.error(
                    f"pushing file[{path}] failed (attempt {attempt}/{MAX_ATTEMPTS}): {e}"
                )
                if attempt < MAX_ATTEMPTS:
                    self.logger.error(f"file[{path}] will retry")
        else:
            raise UploadFailedError(path)

        self.context.counters.increment()
        self.logger.info(f"pushed file:[{path}] to s3:[{key}]", extra=PROGRESS)
        return key


@dataclass(frozen=True)
class UploadUnit:
    """1ファイル分のアップロード処理（何度実行しても上書きになるだけ）"""
    path: str
    executor: UploadExecutor

    def __call__(self) -> str:
        return self.executor.upload_file(self.path)


class BatchUploadExecutor:
    """バッチ単位の並列アップロード実行"""

    def __init__(self, batch_size: int):
        self.batch_size = batch_size
        self.logger = LoggerManager.get_logger()

    def run(self, units: Sequence[UploadUnit]) -> int:
        """batch_size個ずつ並列に実行し、バッチが全て終わってから次へ進む

        失敗したユニットがあれば、同じバッチの未開始分をキャンセルして例外を送出する。
        """
        if not units:
            return 0

        pool = ThreadPoolExecutor(max_workers=self.batch_size)
        try:
            for start in range(0, len(units), self.batch_size):
                batch = units[start:start + self.batch_size]
                futures = [pool.submit(unit) for unit in batch]
                done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

                for future in done:
                    error = future.exception()
                    if error is not None:
                        for pending in not_done:
                            pending.cancel()
                        raise error
        except BaseException:
            # 実行中のものは待たずに結果を捨てる
            pool.shutdown(wait=False, cancel_futures=True)
            raise

        pool.shutdown(wait=True)
        return len(units)
