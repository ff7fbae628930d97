"""Mock Google Cloud Storage service for testing access lists without real API calls.

This module provides an in-memory implementation of the parts of the
storage/v1 API used by StorageServiceAuthority, so tests exercise the actual
request code paths without network access.

Usage:
    from bucket_acl.remote.mock_storage_service import (
        MockStorageService,
        MockStorageBackingStore,
    )

    backing_store = MockStorageBackingStore()
    backing_store.create_bucket("my-bucket")
    service = MockStorageService(backing_store)

    bucket = Bucket.from_service("my-bucket", service)
"""

import json
import re
import uuid
from typing import Any, Dict, List, Optional, Tuple

import httplib2
from googleapiclient.errors import HttpError
from pydantic import BaseModel, Field

from bucket_acl.acl import rules

BUCKET_ACL = "bucketAccessControls"
DEFAULT_OBJECT_ACL = "defaultObjectAccessControls"

BUCKET_ROLES = {"OWNER", "WRITER", "READER"}
DEFAULT_OBJECT_ROLES = {"OWNER", "READER"}

ENTITY_PATTERN = re.compile(
    r"^(user-.+|group-.+|domain-.+|project-(owners|editors|viewers)-.+"
    r"|allUsers|allAuthenticatedUsers)$"
)


def make_http_error(status: int, reason: str, message: str) -> HttpError:
    """Build an HttpError shaped like the ones googleapiclient raises."""
    content = json.dumps(
        {
            "error": {
                "code": status,
                "message": message,
                "errors": [{"reason": reason, "message": message}],
            }
        }
    ).encode("utf-8")
    return HttpError(httplib2.Response({"status": status, "reason": reason}), content)


def canonical_entity(entity: str) -> str:
    """Lower-case the email part of user- and group- entities."""
    for prefix in ("user-", "group-"):
        if entity.startswith(prefix) and "@" in entity:
            return prefix + entity[len(prefix) :].lower()
    return entity


class MockAccessControl(BaseModel):
    """Represents one bucket or default object access control entry."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    entity: str
    role: str

    def to_resource(self, bucket: str, kind: str) -> Dict[str, Any]:
        resource_kind = (
            "storage#bucketAccessControl"
            if kind == BUCKET_ACL
            else "storage#objectAccessControl"
        )
        resource = {
            "kind": resource_kind,
            "id": self.id,
            "bucket": bucket,
            "entity": self.entity,
            "role": self.role,
            "etag": "CAE=",
        }
        if self.entity.startswith(("user-", "group-")) and "@" in self.entity:
            resource["email"] = self.entity.split("-", 1)[1]
        if self.entity.startswith("domain-"):
            resource["domain"] = self.entity.split("-", 1)[1]
        return resource


class MockBucket(BaseModel):
    name: str
    project_number: str = "123456789"
    acl: List[MockAccessControl] = Field(default_factory=list)
    default_object_acl: List[MockAccessControl] = Field(default_factory=list)

    def controls(self, kind: str) -> List[MockAccessControl]:
        if kind == BUCKET_ACL:
            return self.acl
        return self.default_object_acl

    def to_resource(self) -> Dict[str, Any]:
        return {
            "kind": "storage#bucket",
            "id": self.name,
            "name": self.name,
            "projectNumber": self.project_number,
        }


def predefined_grants(
    rule: str, kind: str, project_number: str
) -> List[Tuple[str, str]]:
    """Expand a predefined rule into the (entity, role) pairs it stands for."""
    owners = f"project-owners-{project_number}"
    editors = f"project-editors-{project_number}"
    viewers = f"project-viewers-{project_number}"

    if kind == BUCKET_ACL:
        table = {
            rules.PRIVATE: [(owners, "OWNER")],
            rules.PROJECT_PRIVATE: [
                (owners, "OWNER"),
                (editors, "OWNER"),
                (viewers, "READER"),
            ],
            rules.PUBLIC_READ: [(owners, "OWNER"), ("allUsers", "READER")],
            rules.PUBLIC_READ_WRITE: [(owners, "OWNER"), ("allUsers", "WRITER")],
            rules.AUTHENTICATED_READ: [
                (owners, "OWNER"),
                ("allAuthenticatedUsers", "READER"),
            ],
        }
    else:
        table = {
            rules.PRIVATE: [],
            rules.PROJECT_PRIVATE: [
                (owners, "OWNER"),
                (editors, "OWNER"),
                (viewers, "READER"),
            ],
            rules.PUBLIC_READ: [("allUsers", "READER")],
            rules.AUTHENTICATED_READ: [("allAuthenticatedUsers", "READER")],
            rules.BUCKET_OWNER_FULL_CONTROL: [(owners, "OWNER")],
            rules.BUCKET_OWNER_READ: [(owners, "READER")],
        }

    if rule not in table:
        raise make_http_error(
            400, "invalid", f"Invalid argument: predefined ACL {rule!r}"
        )
    return table[rule]


class MockStorageBackingStore(BaseModel):
    """Shared state between mock storage services.

    Every executed request is appended to ``calls`` as
    ``(resource.method, kwargs)`` so tests can count round trips.
    """

    buckets: Dict[str, MockBucket] = Field(default_factory=dict)
    calls: List[Tuple[str, Dict[str, Any]]] = Field(default_factory=list)

    def create_bucket(self, name: str, **kwargs) -> MockBucket:
        bucket = MockBucket(name=name, **kwargs)
        self.buckets[name] = bucket
        return bucket

    def get_bucket(self, name: str) -> MockBucket:
        bucket = self.buckets.get(name)
        if bucket is None:
            raise make_http_error(404, "notFound", f"Bucket {name} not found")
        return bucket

    def add_control(
        self, bucket_name: str, entity: str, role: str, kind: str = BUCKET_ACL
    ) -> MockAccessControl:
        """Add an access control directly, bypassing API validation."""
        control = MockAccessControl(entity=entity, role=role)
        self.get_bucket(bucket_name).controls(kind).append(control)
        return control

    def record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))

    def call_count(self, name: str) -> int:
        return sum(1 for call_name, _ in self.calls if call_name == name)


class MockAccessControlsListRequest:
    """Mock request for {bucketAccessControls,defaultObjectAccessControls}().list()."""

    def __init__(
        self, backing_store: MockStorageBackingStore, kind: str, bucket: str
    ):
        self._backing_store = backing_store
        self._kind = kind
        self._bucket = bucket

    def execute(self) -> Dict[str, Any]:
        self._backing_store.record(f"{self._kind}.list", bucket=self._bucket)
        bucket = self._backing_store.get_bucket(self._bucket)
        items = [
            c.to_resource(bucket.name, self._kind) for c in bucket.controls(self._kind)
        ]
        result: Dict[str, Any] = {"kind": f"storage#{self._kind}"}
        # the API omits "items" for an empty ACL
        if items:
            result["items"] = items
        return result


class MockAccessControlsInsertRequest:
    """Mock request for {bucketAccessControls,defaultObjectAccessControls}().insert()."""

    def __init__(
        self,
        backing_store: MockStorageBackingStore,
        kind: str,
        bucket: str,
        body: Dict[str, Any],
    ):
        self._backing_store = backing_store
        self._kind = kind
        self._bucket = bucket
        self._body = body

    def execute(self) -> Dict[str, Any]:
        self._backing_store.record(
            f"{self._kind}.insert", bucket=self._bucket, body=self._body
        )
        bucket = self._backing_store.get_bucket(self._bucket)

        entity = self._body.get("entity")
        role = self._body.get("role")
        if not entity or not ENTITY_PATTERN.match(entity):
            raise make_http_error(
                400, "invalid", f"Invalid argument: entity {entity!r}"
            )
        allowed_roles = (
            BUCKET_ROLES if self._kind == BUCKET_ACL else DEFAULT_OBJECT_ROLES
        )
        if role not in allowed_roles:
            raise make_http_error(400, "invalid", f"Invalid argument: role {role!r}")

        entity = canonical_entity(entity)
        controls = bucket.controls(self._kind)
        for control in controls:
            if control.entity == entity and control.role == role:
                return control.to_resource(bucket.name, self._kind)

        control = MockAccessControl(entity=entity, role=role)
        controls.append(control)
        return control.to_resource(bucket.name, self._kind)


class MockAccessControlsDeleteRequest:
    """Mock request for {bucketAccessControls,defaultObjectAccessControls}().delete()."""

    def __init__(
        self,
        backing_store: MockStorageBackingStore,
        kind: str,
        bucket: str,
        entity: str,
    ):
        self._backing_store = backing_store
        self._kind = kind
        self._bucket = bucket
        self._entity = entity

    def execute(self) -> str:
        self._backing_store.record(
            f"{self._kind}.delete", bucket=self._bucket, entity=self._entity
        )
        bucket = self._backing_store.get_bucket(self._bucket)
        controls = bucket.controls(self._kind)
        remaining = [c for c in controls if c.entity != self._entity]
        if len(remaining) == len(controls):
            raise make_http_error(
                404, "notFound", f"Entity {self._entity} not found on {self._bucket}"
            )
        controls[:] = remaining
        # the API answers a delete with an empty body
        return ""


class MockBucketPatchRequest:
    """Mock request for buckets().patch()."""

    def __init__(
        self,
        backing_store: MockStorageBackingStore,
        bucket: str,
        body: Dict[str, Any] | None = None,
        predefinedAcl: str | None = None,
        predefinedDefaultObjectAcl: str | None = None,
    ):
        self._backing_store = backing_store
        self._bucket = bucket
        self._body = body or {}
        self._predefined_acl = predefinedAcl
        self._predefined_default_object_acl = predefinedDefaultObjectAcl

    def execute(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"bucket": self._bucket, "body": self._body}
        if self._predefined_acl is not None:
            kwargs["predefinedAcl"] = self._predefined_acl
        if self._predefined_default_object_acl is not None:
            kwargs["predefinedDefaultObjectAcl"] = self._predefined_default_object_acl
        self._backing_store.record("buckets.patch", **kwargs)

        bucket = self._backing_store.get_bucket(self._bucket)
        if self._predefined_acl is not None:
            pairs = predefined_grants(
                self._predefined_acl, BUCKET_ACL, bucket.project_number
            )
            bucket.acl = [MockAccessControl(entity=e, role=r) for e, r in pairs]
        if self._predefined_default_object_acl is not None:
            pairs = predefined_grants(
                self._predefined_default_object_acl,
                DEFAULT_OBJECT_ACL,
                bucket.project_number,
            )
            bucket.default_object_acl = [
                MockAccessControl(entity=e, role=r) for e, r in pairs
            ]
        return bucket.to_resource()


class MockAccessControlsResource:
    """Mock bucketAccessControls() / defaultObjectAccessControls() resource."""

    def __init__(self, backing_store: MockStorageBackingStore, kind: str):
        self._backing_store = backing_store
        self._kind = kind

    def list(self, bucket: str) -> MockAccessControlsListRequest:
        return MockAccessControlsListRequest(self._backing_store, self._kind, bucket)

    def insert(
        self, bucket: str, body: Dict[str, Any]
    ) -> MockAccessControlsInsertRequest:
        return MockAccessControlsInsertRequest(
            self._backing_store, self._kind, bucket, body
        )

    def delete(self, bucket: str, entity: str) -> MockAccessControlsDeleteRequest:
        return MockAccessControlsDeleteRequest(
            self._backing_store, self._kind, bucket, entity
        )


class MockBucketsResource:
    """Mock buckets() resource."""

    def __init__(self, backing_store: MockStorageBackingStore):
        self._backing_store = backing_store

    def patch(
        self,
        bucket: str,
        body: Dict[str, Any] | None = None,
        predefinedAcl: Optional[str] = None,
        predefinedDefaultObjectAcl: Optional[str] = None,
    ) -> MockBucketPatchRequest:
        return MockBucketPatchRequest(
            self._backing_store,
            bucket,
            body=body,
            predefinedAcl=predefinedAcl,
            predefinedDefaultObjectAcl=predefinedDefaultObjectAcl,
        )


class MockStorageService:
    """Mock Google Cloud Storage service.

    Mimics the interface of the service object returned by
    googleapiclient.discovery.build("storage", "v1").
    """

    def __init__(self, backing_store: MockStorageBackingStore | None = None):
        self._backing_store = backing_store or MockStorageBackingStore()
        self._bucket_acl_resource = MockAccessControlsResource(
            self._backing_store, BUCKET_ACL
        )
        self._default_acl_resource = MockAccessControlsResource(
            self._backing_store, DEFAULT_OBJECT_ACL
        )
        self._buckets_resource = MockBucketsResource(self._backing_store)

    @property
    def backing_store(self) -> MockStorageBackingStore:
        return self._backing_store

    def bucketAccessControls(self) -> MockAccessControlsResource:
        return self._bucket_acl_resource

    def defaultObjectAccessControls(self) -> MockAccessControlsResource:
        return self._default_acl_resource

    def buckets(self) -> MockBucketsResource:
        return self._buckets_resource
