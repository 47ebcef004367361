"""Storage Module - S3 uploads."""
from storage.s3_uploader import S3Uploader, StorageConfigError, get_content_type, validate_upload

__all__ = ['S3Uploader', 'StorageConfigError', 'get_content_type', 'validate_upload']
