"""Tests for the AWS region verification script."""
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from scripts.verify_aws_regions import bucket_region, list_ec2_instances, list_rds_instances, verify_buckets


def _error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "Operation")


class TestBuckets:

    def test_bucket_region(self):
        s3 = MagicMock()
        s3.get_bucket_location.return_value = {"LocationConstraint": "us-west-2"}
        assert bucket_region(s3, "backups") == "us-west-2"

    def test_us_east_1_has_no_constraint(self):
        s3 = MagicMock()
        s3.get_bucket_location.return_value = {"LocationConstraint": None}
        assert bucket_region(s3, "uploads") == "us-east-1"

    def test_unreadable_bucket_is_unknown(self):
        s3 = MagicMock()
        s3.get_bucket_location.side_effect = _error("NoSuchBucket")
        assert bucket_region(s3, "gone") == "unknown"

    def test_verify_buckets(self, capsys):
        s3 = MagicMock()
        regions = {"uploads": {"LocationConstraint": None}, "backups": {"LocationConstraint": "us-west-2"}}
        s3.get_bucket_location.side_effect = lambda Bucket: regions[Bucket]

        results = verify_buckets(s3, ["uploads", "backups"], "us-west-2")

        assert results == {"uploads": False, "backups": True}
        assert "uploads is in us-east-1 instead of us-west-2" in capsys.readouterr().out


class TestInstances:

    def test_ec2_instances(self):
        ec2 = MagicMock()
        ec2.describe_instances.return_value = {"Reservations": [{"Instances": [
            {"InstanceId": "i-123", "State": {"Name": "running"},
             "Placement": {"AvailabilityZone": "us-west-2a"}},
        ]}]}

        assert list_ec2_instances(ec2) == [{"id": "i-123", "state": "running", "zone": "us-west-2a"}]

    def test_rds_instances(self):
        rds = MagicMock()
        rds.describe_db_instances.return_value = {"DBInstances": [
            {"DBInstanceIdentifier": "maxjoboffers", "Engine": "postgres", "AvailabilityZone": "us-west-2b"},
        ]}

        assert list_rds_instances(rds) == [{"id": "maxjoboffers", "engine": "postgres", "zone": "us-west-2b"}]

    def test_access_denied_is_skipped(self):
        ec2 = MagicMock()
        ec2.describe_instances.side_effect = _error("UnauthorizedOperation")
        rds = MagicMock()
        rds.describe_db_instances.side_effect = _error("AccessDenied")

        assert list_ec2_instances(ec2) is None
        assert list_rds_instances(rds) is None

    def test_other_errors_propagate(self):
        ec2 = MagicMock()
        ec2.describe_instances.side_effect = _error("RequestLimitExceeded")

        with pytest.raises(ClientError):
            list_ec2_instances(ec2)
