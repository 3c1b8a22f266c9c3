"""Tests for storage and AWS settings."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from ruleseditor_common.config import (
    AWSSettings,
    StorageSettings,
    get_app_settings,
    get_aws_settings,
    get_s3_client,
    get_settings,
    get_storage_settings,
)


class TestStorageSettings:
    """Test StorageSettings defaults and derived properties."""

    def test_defaults(self, monkeypatch):
        """Test default values when no environment is set."""
        for var in ("STORAGE_TYPE", "STORAGE_S3_BUCKET_NAME", "STORAGE_AZURE_CONNECTION_STRING"):
            monkeypatch.delenv(var, raising=False)

        settings = StorageSettings(_env_file=None)

        assert settings.STORAGE_TYPE == "jsonfile"
        assert settings.STORAGE_LIST_CONCURRENCY == 8
        assert settings.STORAGE_S3_PREFIX == "workflows/"
        assert settings.STORAGE_AZURE_CONTAINER_NAME == "workflows"
        assert settings.s3_configured is False
        assert settings.azure_configured is False

    def test_reads_environment(self, monkeypatch):
        """Test settings are populated from the environment."""
        monkeypatch.setenv("STORAGE_TYPE", "s3")
        monkeypatch.setenv("STORAGE_S3_BUCKET_NAME", "rules-bucket")

        settings = StorageSettings(_env_file=None)

        assert settings.STORAGE_TYPE == "s3"
        assert settings.s3_configured is True

    def test_json_file_directory(self):
        """Test documents live in a Rules directory under the configured path."""
        settings = StorageSettings(STORAGE_JSON_FILE_PATH="/srv/rules", _env_file=None)

        assert settings.json_file_directory == Path("/srv/rules") / "Rules"

    def test_azure_configured(self):
        settings = StorageSettings(
            STORAGE_AZURE_CONNECTION_STRING="UseDevelopmentStorage=true", _env_file=None
        )

        assert settings.azure_configured is True

    def test_list_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            StorageSettings(STORAGE_LIST_CONCURRENCY=0, _env_file=None)

    def test_settings_are_frozen(self):
        settings = StorageSettings(_env_file=None)

        with pytest.raises(ValidationError):
            settings.STORAGE_TYPE = "s3"


class TestS3Client:
    """Test the boto3 client factory."""

    @patch("boto3.client")
    def test_get_s3_client_uses_settings(self, mock_client):
        """Test S3 client is built from AWS settings."""
        aws_settings = AWSSettings(
            AWS_ACCESS_KEY_ID="key",
            AWS_SECRET_ACCESS_KEY="secret",
            AWS_REGION="eu-west-1",
            AWS_ENDPOINT_URL="http://localhost:9000",
            _env_file=None,
        )

        client = get_s3_client(aws_settings)

        assert client is mock_client.return_value
        mock_client.assert_called_once_with(
            "s3",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            region_name="eu-west-1",
            endpoint_url="http://localhost:9000",
        )


class TestSettingsContainer:
    """Test the aggregate settings share the cached section instances."""

    @pytest.fixture(autouse=True)
    def clear_caches(self):
        for getter in (get_settings, get_app_settings, get_aws_settings, get_storage_settings):
            getter.cache_clear()
        yield
        for getter in (get_settings, get_app_settings, get_aws_settings, get_storage_settings):
            getter.cache_clear()

    def test_sections_come_from_cached_getters(self, monkeypatch):
        monkeypatch.setenv("STORAGE_TYPE", "s3")

        settings = get_settings()

        assert settings.storage is get_storage_settings()
        assert settings.app is get_app_settings()
        assert settings.aws is get_aws_settings()
        assert settings.storage.STORAGE_TYPE == "s3"
