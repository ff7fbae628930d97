"""Google Cloud Storage JSON API binding of the remote authority"""

import logging
from pathlib import Path
from typing import Any, Dict, List

import httplib2
from google.oauth2.credentials import Credentials as GoogleCredentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from pydantic import BaseModel

from bucket_acl.config import settings
from bucket_acl.remote.authority import Grant

SCOPES = ["https://www.googleapis.com/auth/devstorage.full_control"]

logger = logging.getLogger(__name__)

logging.getLogger("google_auth_httplib2").setLevel(logging.ERROR)


def build_storage_service(
    credentials: GoogleCredentials | None,
    timeout: int | None = None,
    version: str | None = None,
):
    """Build a storage service with timeout-enabled authorized HTTP."""
    http = httplib2.Http(timeout=timeout or settings.api_timeout)
    authorized_http = AuthorizedHttp(credentials, http=http)
    return build(
        "storage", version or settings.storage_api_version, http=authorized_http
    )


def _items(response: Dict[str, Any] | None) -> List[Grant]:
    if not response:
        return []
    return [Grant.from_api(item) for item in response.get("items") or []]


class StorageServiceAuthority(BaseModel):
    """Calls bucketAccessControls, defaultObjectAccessControls and buckets.patch"""

    class Config:
        arbitrary_types_allowed = True

    storage_service: Any = None
    credentials: GoogleCredentials | None = None
    token_path: Path | None = None

    @classmethod
    def from_token_path(
        cls, token_path: Path | None = None
    ) -> "StorageServiceAuthority":
        token_path = token_path or settings.token_path
        if token_path is None:
            raise ValueError(
                "token_path is required, pass it or set BUCKET_ACL_TOKEN_PATH"
            )
        res = cls(token_path=token_path)
        credentials = GoogleCredentials.from_authorized_user_file(
            str(token_path), SCOPES
        )
        res.setup(credentials=credentials)
        return res

    @classmethod
    def from_service(cls, storage_service: Any) -> "StorageServiceAuthority":
        """Wrap an existing storage service, e.g. a MockStorageService in tests."""
        res = cls()
        res.setup(storage_service=storage_service)
        return res

    def setup(
        self,
        credentials: GoogleCredentials | None = None,
        storage_service: Any | None = None,
    ):
        self.credentials = credentials
        if storage_service is not None:
            self.storage_service = storage_service
        else:
            self.storage_service = build_storage_service(self.credentials)

    # bucket ACL

    def list_grants(self, bucket: str) -> List[Grant]:
        response = (
            self.storage_service.bucketAccessControls().list(bucket=bucket).execute()
        )
        return _items(response)

    def insert_grant(self, bucket: str, entity: str, role: str) -> Grant:
        response = (
            self.storage_service.bucketAccessControls()
            .insert(bucket=bucket, body={"entity": entity, "role": role})
            .execute()
        )
        return Grant.from_api(response)

    def delete_grant(self, bucket: str, entity: str) -> None:
        self.storage_service.bucketAccessControls().delete(
            bucket=bucket, entity=entity
        ).execute()

    # default object ACL

    def list_default_grants(self, bucket: str) -> List[Grant]:
        response = (
            self.storage_service.defaultObjectAccessControls()
            .list(bucket=bucket)
            .execute()
        )
        return _items(response)

    def insert_default_grant(self, bucket: str, entity: str, role: str) -> Grant:
        response = (
            self.storage_service.defaultObjectAccessControls()
            .insert(bucket=bucket, body={"entity": entity, "role": role})
            .execute()
        )
        return Grant.from_api(response)

    def delete_default_grant(self, bucket: str, entity: str) -> None:
        self.storage_service.defaultObjectAccessControls().delete(
            bucket=bucket, entity=entity
        ).execute()

    def patch_bucket(
        self,
        bucket: str,
        predefined_acl: str | None = None,
        predefined_default_acl: str | None = None,
    ) -> Dict[str, Any]:
        params: Dict[str, str] = {}
        if predefined_acl is not None:
            params["predefinedAcl"] = predefined_acl
        if predefined_default_acl is not None:
            params["predefinedDefaultObjectAcl"] = predefined_default_acl
        logger.debug(f"Patching bucket {bucket} with {params}")
        return (
            self.storage_service.buckets()
            .patch(bucket=bucket, body={}, **params)
            .execute()
        )
