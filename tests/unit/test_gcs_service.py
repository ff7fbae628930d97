from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from bucket_acl.config import settings
from bucket_acl.exceptions import AclFormatError
from bucket_acl.remote.authority import Grant, RemoteAuthority
from bucket_acl.remote.gcs_service import (
    StorageServiceAuthority,
    build_storage_service,
)


def create_mock_authority():
    return StorageServiceAuthority.from_service(Mock())


@pytest.mark.unit
class TestBucketAccessControls:
    def test_list_grants(self):
        authority = create_mock_authority()
        service = authority.storage_service
        service.bucketAccessControls().list().execute.return_value = {
            "items": [
                {
                    "entity": "user-a@example.com",
                    "role": "OWNER",
                    "email": "a@example.com",
                },
                {
                    "entity": "project-viewers-1",
                    "role": "READER",
                    "projectTeam": {"projectNumber": "1", "team": "viewers"},
                },
            ]
        }

        grants = authority.list_grants("my-bucket")

        assert [(g.entity, g.role) for g in grants] == [
            ("user-a@example.com", "OWNER"),
            ("project-viewers-1", "READER"),
        ]
        assert grants[0].email == "a@example.com"
        assert grants[1].project_team == {"projectNumber": "1", "team": "viewers"}
        service.bucketAccessControls().list.assert_called_with(bucket="my-bucket")

    def test_list_grants_without_items(self):
        authority = create_mock_authority()
        authority.storage_service.bucketAccessControls().list().execute.return_value = {
            "kind": "storage#bucketAccessControls"
        }

        assert authority.list_grants("my-bucket") == []

    def test_insert_grant(self):
        authority = create_mock_authority()
        service = authority.storage_service
        service.bucketAccessControls().insert().execute.return_value = {
            "entity": "user-heidi@example.net",
            "role": "READER",
            "entityId": "00b4903a97",
        }

        grant = authority.insert_grant("my-bucket", "user-Heidi@example.net", "READER")

        assert grant.entity == "user-heidi@example.net"
        assert grant.entity_id == "00b4903a97"
        call_kwargs = service.bucketAccessControls().insert.call_args[1]
        assert call_kwargs == {
            "bucket": "my-bucket",
            "body": {"entity": "user-Heidi@example.net", "role": "READER"},
        }

    def test_delete_grant(self):
        authority = create_mock_authority()
        service = authority.storage_service

        authority.delete_grant("my-bucket", "allUsers")

        service.bucketAccessControls().delete.assert_called_with(
            bucket="my-bucket", entity="allUsers"
        )
        service.defaultObjectAccessControls().delete.assert_not_called()


@pytest.mark.unit
class TestDefaultObjectAccessControls:
    def test_list_default_grants(self):
        authority = create_mock_authority()
        service = authority.storage_service
        service.defaultObjectAccessControls().list().execute.return_value = {
            "items": [{"entity": "allUsers", "role": "READER"}]
        }

        grants = authority.list_default_grants("my-bucket")

        assert grants == [Grant(entity="allUsers", role="READER")]
        service.defaultObjectAccessControls().list.assert_called_with(
            bucket="my-bucket"
        )

    def test_insert_default_grant(self):
        authority = create_mock_authority()
        service = authority.storage_service
        service.defaultObjectAccessControls().insert().execute.return_value = {
            "entity": "domain-example.com",
            "role": "OWNER",
        }

        grant = authority.insert_default_grant(
            "my-bucket", "domain-example.com", "OWNER"
        )

        assert grant.entity == "domain-example.com"
        call_kwargs = service.defaultObjectAccessControls().insert.call_args[1]
        assert call_kwargs["body"] == {"entity": "domain-example.com", "role": "OWNER"}

    def test_delete_default_grant(self):
        authority = create_mock_authority()
        service = authority.storage_service

        authority.delete_default_grant("my-bucket", "allUsers")

        service.defaultObjectAccessControls().delete.assert_called_with(
            bucket="my-bucket", entity="allUsers"
        )


@pytest.mark.unit
class TestPatchBucket:
    def test_predefined_acl(self):
        authority = create_mock_authority()
        service = authority.storage_service

        authority.patch_bucket("my-bucket", predefined_acl="publicRead")

        assert service.buckets().patch.call_args[1] == {
            "bucket": "my-bucket",
            "body": {},
            "predefinedAcl": "publicRead",
        }

    def test_predefined_default_acl(self):
        authority = create_mock_authority()
        service = authority.storage_service

        authority.patch_bucket("my-bucket", predefined_default_acl="bucketOwnerRead")

        assert service.buckets().patch.call_args[1] == {
            "bucket": "my-bucket",
            "body": {},
            "predefinedDefaultObjectAcl": "bucketOwnerRead",
        }

    def test_errors_propagate(self):
        authority = create_mock_authority()
        error = RuntimeError("transport failure")
        authority.storage_service.buckets().patch().execute.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            authority.patch_bucket("my-bucket", predefined_acl="private")

        assert exc_info.value is error


@pytest.mark.unit
class TestGrantParsing:
    def test_from_dict_ignores_unknown_fields(self):
        grant = Grant.from_api(
            {
                "entity": "allUsers",
                "role": "READER",
                "kind": "storage#bucketAccessControl",
            }
        )

        assert grant == Grant(entity="allUsers", role="READER")

    def test_from_grant_is_identity(self):
        grant = Grant(entity="allUsers", role="READER")

        assert Grant.from_api(grant) is grant

    def test_unknown_format(self):
        with pytest.raises(AclFormatError) as exc_info:
            Grant.from_api(["allUsers", "READER"])

        assert "list" in str(exc_info.value)


@pytest.mark.unit
class TestSetup:
    def test_implements_remote_authority(self):
        assert isinstance(create_mock_authority(), RemoteAuthority)

    @patch("bucket_acl.remote.gcs_service.AuthorizedHttp")
    @patch("bucket_acl.remote.gcs_service.build")
    def test_build_storage_service(self, mock_build, mock_authorized_http):
        credentials = Mock()

        build_storage_service(credentials)

        assert mock_build.call_args[0] == ("storage", "v1")
        assert mock_build.call_args[1]["http"] is mock_authorized_http.return_value
        assert mock_authorized_http.call_args[0] == (credentials,)
        assert mock_authorized_http.call_args[1]["http"].timeout == settings.api_timeout

    @patch("bucket_acl.remote.gcs_service.AuthorizedHttp")
    @patch("bucket_acl.remote.gcs_service.build")
    def test_build_storage_service_timeout(self, mock_build, mock_authorized_http):
        build_storage_service(Mock(), timeout=5)

        assert mock_authorized_http.call_args[1]["http"].timeout == 5

    @patch("bucket_acl.remote.gcs_service.build_storage_service")
    @patch("bucket_acl.remote.gcs_service.GoogleCredentials")
    def test_from_token_path(self, mock_credentials, mock_build_service):
        authority = StorageServiceAuthority.from_token_path(Path("/tmp/token.json"))

        mock_credentials.from_authorized_user_file.assert_called_once()
        assert mock_credentials.from_authorized_user_file.call_args[0][0] == (
            "/tmp/token.json"
        )
        assert authority.storage_service is mock_build_service.return_value
        assert authority.token_path == Path("/tmp/token.json")

    def test_from_token_path_requires_a_path(self, monkeypatch):
        monkeypatch.setattr(settings, "token_path", None)

        with pytest.raises(ValueError):
            StorageServiceAuthority.from_token_path()
