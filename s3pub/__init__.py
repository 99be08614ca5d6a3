"""s3pub パッケージ"""
from .models.config import Config, PublishTarget
from .utils.logger import LoggerManager
from .core.context import RunContext
from .core.s3_client import S3ClientManager
from .core.task_runner import PublishReport, TaskRunner


class S3Publisher:
    """ローカルのディレクトリをS3バケットへ公開するメインクラス"""

    def __init__(self, config: Config, target: PublishTarget, client=None):
        self.config = config
        self.target = target

        self.logger = LoggerManager.setup(config.logging, logoff=config.logoff)

        if client is None:
            client_manager = S3ClientManager(target, config.credentials, config.timeout_seconds)
            client = client_manager.get_client()

        self.context = RunContext(config=config, target=target, client=client)
        self.task_runner = TaskRunner(self.context)

    @classmethod
    def from_file(cls, config_path: str, target: PublishTarget) -> 'S3Publisher':
        return cls(Config.from_file(config_path), target)

    def run(self) -> PublishReport:
        """アップロードを実行"""
        # バナーとサマリーはログレベルに関係なく標準出力へ
        banner = f"pushing s3, region:{self.target.region}, bucket:{self.target.bucket}"
        print(banner)
        print("=" * 53)
        self.logger.debug(banner)
        report = self.task_runner.run()
        print("=" * 53)
        return report


__all__ = ['S3Publisher', 'Config', 'PublishTarget', 'PublishReport']
