"""Remote authority interface.

The access lists never talk to the storage API directly; they call into an
object implementing RemoteAuthority. StorageServiceAuthority is the
googleapiclient binding.
"""

from typing import Any, Dict, List, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from bucket_acl.exceptions import AclFormatError


class Grant(BaseModel):
    """One (entity, role) pair as returned by the storage API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    entity: str
    role: str
    id: str | None = None
    email: str | None = None
    domain: str | None = None
    entity_id: str | None = Field(default=None, alias="entityId")
    project_team: Dict[str, str] | None = Field(default=None, alias="projectTeam")
    etag: str | None = None

    @classmethod
    def from_api(cls, item: Any) -> "Grant":
        if isinstance(item, Grant):
            return item
        if isinstance(item, Mapping):
            return cls.model_validate(dict(item))
        raise AclFormatError(item)


@runtime_checkable
class RemoteAuthority(Protocol):
    """Operations the access lists need from the storage service."""

    def list_grants(self, bucket: str) -> List[Grant]:
        """List the bucket ACL."""
        ...

    def list_default_grants(self, bucket: str) -> List[Grant]:
        """List the default object ACL."""
        ...

    def insert_grant(self, bucket: str, entity: str, role: str) -> Grant:
        """Grant role to entity on the bucket.

        Returns:
            The stored grant; its entity is the canonical spelling.
        """
        ...

    def insert_default_grant(self, bucket: str, entity: str, role: str) -> Grant:
        """Grant role to entity on objects created in the bucket."""
        ...

    def delete_grant(self, bucket: str, entity: str) -> None:
        """Remove every bucket ACL grant held by entity."""
        ...

    def delete_default_grant(self, bucket: str, entity: str) -> None:
        """Remove every default object ACL grant held by entity."""
        ...

    def patch_bucket(
        self,
        bucket: str,
        predefined_acl: str | None = None,
        predefined_default_acl: str | None = None,
    ) -> Dict[str, Any]:
        """Apply predefined rules to the bucket ACL and/or default object ACL."""
        ...
