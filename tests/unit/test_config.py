from pathlib import Path

import pytest

from bucket_acl.config import BucketAclSettings


@pytest.mark.unit
class TestBucketAclSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BUCKET_ACL_API_TIMEOUT", raising=False)
        monkeypatch.delenv("BUCKET_ACL_TOKEN_PATH", raising=False)
        monkeypatch.delenv("BUCKET_ACL_STORAGE_API_VERSION", raising=False)

        settings = BucketAclSettings()

        assert settings.api_timeout == 120
        assert settings.token_path is None
        assert settings.storage_api_version == "v1"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("BUCKET_ACL_API_TIMEOUT", "30")
        monkeypatch.setenv("BUCKET_ACL_TOKEN_PATH", "/tmp/token.json")

        settings = BucketAclSettings()

        assert settings.api_timeout == 30
        assert settings.token_path == Path("/tmp/token.json")

    def test_unprefixed_variables_are_ignored(self, monkeypatch):
        monkeypatch.delenv("BUCKET_ACL_API_TIMEOUT", raising=False)
        monkeypatch.setenv("API_TIMEOUT", "5")

        assert BucketAclSettings().api_timeout == 120
