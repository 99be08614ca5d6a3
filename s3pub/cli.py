"""コマンドラインインターフェース"""
import argparse
import sys
from typing import List, Optional

from . import S3Publisher
from .models.config import DEFAULT_CONFIG_FILE, PublishTarget


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3pub",
        description="Publish a local directory tree to an S3 bucket.",
    )
    parser.add_argument("region", help="AWS region, e.g. ap-northeast-1")
    parser.add_argument("bucket", help="bucket name")
    parser.add_argument("remote_path", help='base key prefix in the bucket ("/" for the root)')
    parser.add_argument("local_path", help="local file or directory to publish")
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"settings file (default: {DEFAULT_CONFIG_FILE})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """メイン関数"""
    args = build_parser().parse_args(argv)

    try:
        target = PublishTarget(
            region=args.region,
            bucket=args.bucket,
            remote_base=args.remote_path,
            local_base=args.local_path,
        )
        publisher = S3Publisher.from_file(args.config, target)
        publisher.run()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
