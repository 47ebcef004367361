#!/usr/bin/env python3
"""
Check that the configured S3 bucket accepts uploads.

Writes a small temporary file, uploads it under test-uploads/, then removes
the local file and (unless --keep is given) the uploaded object.

Example usage:
    python scripts/s3_upload_check.py
    python scripts/s3_upload_check.py --bucket maxjoboffers-uploads --keep
"""
import argparse
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict

# Ensure we can import from the project root
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from core.config_loader import load_config
from storage import S3Uploader
from storage.s3_uploader import S3Error

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def check_upload(uploader: S3Uploader, keep: bool = False) -> Dict[str, str]:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    fd, path = tempfile.mkstemp(prefix="maxjoboffers-upload-check-", suffix=".txt")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(f"MaxJobOffers upload check {stamp}\n")

        key = f"test-uploads/{stamp}-{Path(path).name}"
        result = uploader.upload_file(path, key, content_type="text/plain")
        if not keep:
            uploader.delete_object(key)
            logger.info(f"Removed s3://{uploader.bucket}/{key}")
        return result
    finally:
        os.remove(path)


def main():
    parser = argparse.ArgumentParser(
        description="Upload a temporary file to S3 to verify credentials and bucket access",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--bucket', default=None, help='Bucket to test (default: storage.bucket)')
    parser.add_argument('--keep', action='store_true', help='Leave the uploaded object in the bucket')
    args = parser.parse_args()

    storage = load_config().storage
    uploader = S3Uploader.from_config(storage)
    if args.bucket:
        uploader.bucket = args.bucket

    try:
        result = check_upload(uploader, keep=args.keep)
    except S3Error as e:
        print(f"❌ Upload to s3://{uploader.bucket} failed: {e}")
        sys.exit(1)

    print(f"✅ Upload succeeded: {result['url']}")


if __name__ == "__main__":
    main()
