"""テスト用の共通フィクスチャ"""
import threading
from unittest.mock import MagicMock

import pytest

from s3pub.core.context import RunContext
from s3pub.models.config import Config, Credentials, PublishTarget
from s3pub.utils.logger import LoggerManager


@pytest.fixture(autouse=True)
def reset_logger():
    LoggerManager.reset()
    yield
    LoggerManager.reset()


@pytest.fixture
def make_config():
    def _make(**overrides):
        overrides.setdefault("credentials", Credentials("AKIATEST", "secret"))
        return Config(**overrides)
    return _make


@pytest.fixture
def make_tree(tmp_path):
    """{相対パス: 内容} からファイルツリーを作る"""
    def _make(files):
        root = tmp_path / "site"
        root.mkdir()
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return str(root)
    return _make


@pytest.fixture
def recording_client():
    """put_objectのKeyを呼ばれた順に記録するクライアント"""
    client = MagicMock()
    client.keys = []
    lock = threading.Lock()

    def put_object(**kwargs):
        with lock:
            client.keys.append(kwargs["Key"])
        return {"ETag": '"etag"'}

    client.put_object.side_effect = put_object
    return client


@pytest.fixture
def make_context(make_config, recording_client):
    def _make(root, remote_base="assets/", client=None, **overrides):
        target = PublishTarget("ap-northeast-1", "test-bucket", remote_base, root)
        return RunContext(
            config=make_config(**overrides),
            target=target,
            client=client if client is not None else recording_client,
        )
    return _make


