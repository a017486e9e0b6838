# This project was developed with assistance from AI tools.
"""Tests for derived settings."""

from producer_api.core.config import Settings


def test_upload_limit_is_five_mib_by_default():
    assert Settings().upload_max_bytes == 5 * 1024 * 1024


def test_public_base_url_defaults_to_endpoint_and_bucket():
    cfg = Settings(S3_ENDPOINT="http://minio:9000/", S3_BUCKET="docs", S3_PUBLIC_BASE_URL=None)
    assert cfg.s3_public_base_url == "http://minio:9000/docs"


def test_public_base_url_override():
    cfg = Settings(S3_PUBLIC_BASE_URL="https://cdn.example.com/docs/")
    assert cfg.s3_public_base_url == "https://cdn.example.com/docs"
