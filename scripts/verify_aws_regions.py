#!/usr/bin/env python3
"""
Verify that AWS resources live in the expected region.

Checks the upload and backup buckets with GetBucketLocation, then lists EC2
instances and RDS instances in the expected region when the credentials are
allowed to. Exits non-zero when a bucket is in the wrong region.

Example usage:
    python scripts/verify_aws_regions.py
    python scripts/verify_aws_regions.py --region us-west-2 --bucket my-backups
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

# Ensure we can import from the project root
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from core.config_loader import load_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ACCESS_DENIED_CODES = {"AccessDenied", "AccessDeniedException", "UnauthorizedOperation"}


def bucket_region(s3_client, bucket: str) -> str:
    """Returns the bucket's region or 'unknown' when it can't be read."""
    try:
        response = s3_client.get_bucket_location(Bucket=bucket)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error getting region for bucket {bucket}: {e}")
        return "unknown"
    # us-east-1 buckets report no location constraint
    return response.get("LocationConstraint") or "us-east-1"


def verify_buckets(s3_client, buckets: List[str], expected_region: str) -> Dict[str, bool]:
    results: Dict[str, bool] = {}
    for bucket in buckets:
        region = bucket_region(s3_client, bucket)
        ok = region == expected_region
        results[bucket] = ok
        print(f"Bucket: {bucket}")
        print(f"  Region: {region}")
        print(f"  Correct Region: {'✅ Yes' if ok else '❌ No'}")
        if not ok and region != "unknown":
            print(f"  WARNING: {bucket} is in {region} instead of {expected_region}; "
                  f"create a bucket in {expected_region} and migrate the data")
    return results


def _permitted(error: ClientError, what: str) -> bool:
    code = error.response.get("Error", {}).get("Code", "")
    if code in ACCESS_DENIED_CODES:
        print(f"  Skipping {what}: not permitted for these credentials")
        return False
    raise error


def list_ec2_instances(ec2_client) -> Optional[List[Dict[str, Any]]]:
    try:
        reservations = ec2_client.describe_instances().get("Reservations", [])
    except ClientError as e:
        _permitted(e, "EC2 instances")
        return None
    return [
        {
            "id": instance["InstanceId"],
            "state": instance.get("State", {}).get("Name"),
            "zone": instance.get("Placement", {}).get("AvailabilityZone"),
        }
        for reservation in reservations
        for instance in reservation.get("Instances", [])
    ]


def list_rds_instances(rds_client) -> Optional[List[Dict[str, Any]]]:
    try:
        instances = rds_client.describe_db_instances().get("DBInstances", [])
    except ClientError as e:
        _permitted(e, "RDS instances")
        return None
    return [
        {
            "id": instance["DBInstanceIdentifier"],
            "engine": instance.get("Engine"),
            "zone": instance.get("AvailabilityZone"),
        }
        for instance in instances
    ]


def main():
    parser = argparse.ArgumentParser(
        description="Verify AWS resources are in the expected region",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--region', default=None, help='Expected region (default: storage.backup_region)')
    parser.add_argument('--bucket', action='append', default=None,
                        help='Bucket to check; repeatable (default: configured upload and backup buckets)')
    parser.add_argument('--skip-ec2', action='store_true', help='Do not list EC2 instances')
    parser.add_argument('--skip-rds', action='store_true', help='Do not list RDS instances')
    args = parser.parse_args()

    storage = load_config().storage
    expected_region = args.region or storage.backup_region
    buckets = args.bucket or [b for b in (storage.bucket, storage.backup_bucket) if b]

    session_kwargs: Dict[str, Any] = {"region_name": expected_region}
    if storage.access_key_id and storage.secret_access_key:
        session_kwargs["aws_access_key_id"] = storage.access_key_id
        session_kwargs["aws_secret_access_key"] = storage.secret_access_key
    session = boto3.session.Session(**session_kwargs)

    print(f"Expected region: {expected_region}")

    print("\n=== Verifying S3 Buckets ===")
    bucket_results = verify_buckets(session.client("s3"), buckets, expected_region)

    if not args.skip_ec2:
        print(f"\n=== EC2 Instances in {expected_region} ===")
        instances = list_ec2_instances(session.client("ec2"))
        if instances is not None:
            if not instances:
                print("  No EC2 instances found")
            for instance in instances:
                print(f"  {instance['id']} ({instance['state']}) in {instance['zone']}")

    if not args.skip_rds:
        print(f"\n=== RDS Instances in {expected_region} ===")
        databases = list_rds_instances(session.client("rds"))
        if databases is not None:
            if not databases:
                print("  No RDS instances found")
            for database in databases:
                print(f"  {database['id']} ({database['engine']}) in {database['zone']}")

    if not all(bucket_results.values()):
        sys.exit(1)
    print("\n✅ All checked buckets are in the expected region")


if __name__ == "__main__":
    main()
