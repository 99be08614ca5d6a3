"""S3クライアント管理"""
import boto3
from typing import Optional
from botocore.config import Config as BotoConfig
from botocore.exceptions import NoCredentialsError
from ..models.config import Credentials, PublishTarget
from ..utils.logger import LoggerManager


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, target: PublishTarget, credentials: Credentials, timeout_seconds: int = 300):
        self.target = target
        self.credentials = credentials
        self.timeout_seconds = timeout_seconds
        self.logger = LoggerManager.get_logger()
        self._client: Optional[boto3.client] = None

    def get_client(self) -> boto3.client:
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> boto3.client:
        """S3クライアントを作成"""
        try:
            # 1回の試行ごとのタイムアウト。リトライはアップロード側で行う
            boto_config = BotoConfig(
                connect_timeout=self.timeout_seconds,
                read_timeout=self.timeout_seconds,
            )
            s3_client = boto3.client(
                's3',
                region_name=self.target.region,
                endpoint_url=self.target.endpoint,
                aws_access_key_id=self.credentials.access_key_id,
                aws_secret_access_key=self.credentials.secret_access_key,
                config=boto_config,
            )
            self.logger.debug(f"S3 client created for endpoint {self.target.endpoint}")
            return s3_client

        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise
