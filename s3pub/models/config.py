"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional
import json
import os


DEFAULT_CONFIG_FILE = ".s3pub.json"
DEFAULT_NEST = 20
DEFAULT_BATCH = 20


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass(frozen=True)
class Credentials:
    """アクセスキー"""
    access_key_id: str
    secret_access_key: str

    def __post_init__(self):
        if not self.access_key_id:
            raise ValueError("accessKeyId must be given in configuration.")
        if not self.secret_access_key:
            raise ValueError("secretAccessKey must be given in configuration.")


@dataclass(frozen=True)
class PublishTarget:
    """アップロード先とアップロード元（コマンドライン引数）"""
    region: str
    bucket: str
    remote_base: str
    local_base: str

    def __post_init__(self):
        for name in ("region", "bucket", "remote_base", "local_base"):
            if not getattr(self, name):
                raise ValueError(
                    f"{name} is required. usage: s3pub REGION BUCKET_NAME OSS_PATH LOCAL_PATH"
                )

    @property
    def endpoint(self) -> str:
        return f"https://s3.{self.region}.amazonaws.com"

    @property
    def remote_prefix(self) -> str:
        """"/" はバケットのルート（空のプレフィックス）として扱う"""
        return "" if self.remote_base == "/" else self.remote_base

    @property
    def local_root(self) -> str:
        return os.path.normpath(self.local_base)


@dataclass(frozen=True)
class Config:
    """メイン設定クラス"""
    credentials: Credentials
    excludes: FrozenSet[str] = frozenset()
    files_pri: Dict[str, float] = field(default_factory=dict)
    nest: int = DEFAULT_NEST
    batch: int = DEFAULT_BATCH
    remove_prefix: bool = False
    headers: Dict[str, Dict[str, str]] = field(default_factory=dict)
    mime_types: Dict[str, str] = field(default_factory=dict)
    logoff: bool = False
    timeout_seconds: int = 300
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        if not isinstance(self.nest, int) or self.nest < 1:
            raise ValueError(f"nest must be a positive integer, got {self.nest!r}")
        if not isinstance(self.batch, int) or self.batch < 1:
            raise ValueError(f"batch must be a positive integer, got {self.batch!r}")
        for relative, priority in self.files_pri.items():
            if isinstance(priority, bool) or not isinstance(priority, (int, float)):
                raise ValueError(f"priority of {relative} must be a number, got {priority!r}")

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """JSONのキー名から設定を組み立てる"""
        credentials = Credentials(
            access_key_id=data.get("accessKeyId") or "",
            secret_access_key=data.get("secretAccessKey") or "",
        )
        mime = data.get("mime") or {}

        return cls(
            credentials=credentials,
            excludes=frozenset(data.get("excludes") or ()),
            files_pri=dict(data.get("files_pri") or {}),
            # 0やnullは未指定と同じ扱い
            nest=data.get("nest") or DEFAULT_NEST,
            batch=data.get("batch") or DEFAULT_BATCH,
            remove_prefix=bool(data.get("remove_prefix", False)),
            headers=dict(data.get("headers") or {}),
            mime_types=dict(mime.get("types") or {}),
            logoff=bool(data.get("logoff", False)),
            timeout_seconds=data.get("timeout_seconds", 300),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    @classmethod
    def from_file(cls, config_path: str = DEFAULT_CONFIG_FILE) -> 'Config':
        """設定ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(
                f"Configuration file {config_path} not found. "
                f"{DEFAULT_CONFIG_FILE} must be given in the working directory."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)

            if not isinstance(data, dict):
                raise ValueError("top level of the configuration must be an object")

            return cls.from_dict(data)

        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}")
        except Exception as e:
            raise RuntimeError(f"Error loading configuration: {e}")
