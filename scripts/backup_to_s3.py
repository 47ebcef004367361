#!/usr/bin/env python3
"""
Back up project directories and files to S3.

Each configured directory is zipped and uploaded, together with the single
configured files, under backups/{timestamp}/ in the backup bucket. Paths
that don't exist are skipped.

Example usage:
    python scripts/backup_to_s3.py
    python scripts/backup_to_s3.py --bucket my-backups --region us-west-2
    python scripts/backup_to_s3.py --dry-run
"""
import argparse
import logging
import shutil
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

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


def backup_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def run_backup(uploader: S3Uploader, root: Path, directories: Iterable[str],
               files: Iterable[str], timestamp: str, dry_run: bool = False) -> List[Dict[str, str]]:
    """Upload zipped directories and plain files; returns one entry per uploaded object."""
    prefix = f"backups/{timestamp}"
    uploaded: List[Dict[str, str]] = []

    with tempfile.TemporaryDirectory() as work_dir:
        for directory in directories:
            source = root / directory
            if not source.is_dir():
                logger.warning(f"Skipping missing directory: {source}")
                continue

            archive = shutil.make_archive(str(Path(work_dir) / directory), "zip", root_dir=str(source))
            key = f"{prefix}/{directory}.zip"
            if dry_run:
                logger.info(f"[dry-run] would upload {archive} to {key}")
                continue
            uploaded.append(uploader.upload_file(archive, key, content_type="application/zip"))

        for file_name in files:
            source = root / file_name
            if not source.is_file():
                logger.warning(f"Skipping missing file: {source}")
                continue

            key = f"{prefix}/{file_name}"
            if dry_run:
                logger.info(f"[dry-run] would upload {source} to {key}")
                continue
            uploaded.append(uploader.upload_file(str(source), key))

    return uploaded


def main():
    parser = argparse.ArgumentParser(
        description="Back up important directories and files to S3",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--bucket', default=None, help='Backup bucket (default: storage.backup_bucket)')
    parser.add_argument('--region', default=None, help='Backup bucket region (default: storage.backup_region)')
    parser.add_argument('--root', type=Path, default=project_root, help='Directory the backup paths are relative to')
    parser.add_argument('--dry-run', action='store_true', help='Only log what would be uploaded')
    args = parser.parse_args()

    storage = load_config().storage
    bucket = args.bucket or storage.backup_bucket
    if not bucket:
        logger.error("No backup bucket configured (set storage.backup_bucket or AWS_BACKUP_BUCKET)")
        sys.exit(1)

    uploader = S3Uploader(
        region=args.region or storage.backup_region,
        access_key_id=storage.access_key_id,
        secret_access_key=storage.secret_access_key,
        bucket=bucket,
    )

    timestamp = backup_timestamp()
    logger.info(f"Starting backup {timestamp} to s3://{bucket}/backups/{timestamp}/")
    try:
        uploaded = run_backup(uploader, args.root, storage.backup_directories,
                              storage.backup_files, timestamp, dry_run=args.dry_run)
    except S3Error as e:
        logger.error(f"Backup failed: {e}")
        sys.exit(1)

    logger.info(f"Backup complete: {len(uploaded)} object(s) uploaded")


if __name__ == "__main__":
    main()
