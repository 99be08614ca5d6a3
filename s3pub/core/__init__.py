"""s3pub コアモジュール"""
from .context import RunContext, RunCounters
from .s3_client import S3ClientManager
from .uploader import BatchUploadExecutor, UploadExecutor, UploadFailedError, UploadUnit
from .task_runner import PublishReport, TaskRunner

__all__ = [
    'RunContext',
    'RunCounters',
    'S3ClientManager',
    'UploadExecutor',
    'UploadUnit',
    'UploadFailedError',
    'BatchUploadExecutor',
    'PublishReport',
    'TaskRunner'
]
