#!/usr/bin/env python3
"""s3pub エントリーポイント"""
import sys

from s3pub.cli import main


if __name__ == "__main__":
    sys.exit(main())
