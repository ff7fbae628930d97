from pathlib import Path
from typing import Any

from bucket_acl.acl.access_list import BucketAccessList, DefaultAccessList
from bucket_acl.remote.authority import RemoteAuthority


class Bucket:
    """A storage bucket handle owning its bucket ACL and default object ACL.

    Neither access list is loaded until it is first read.
    """

    def __init__(self, name: str, authority: RemoteAuthority):
        self.name = name
        self.authority = authority
        self.acl = BucketAccessList(name, authority)
        self.default_acl = DefaultAccessList(name, authority)

    @classmethod
    def from_service(cls, name: str, storage_service: Any) -> "Bucket":
        """Create a Bucket on top of a storage/v1 service (real or mock)."""
        from bucket_acl.remote.gcs_service import StorageServiceAuthority

        return cls(name, StorageServiceAuthority.from_service(storage_service))

    @classmethod
    def from_token_path(
        cls, name: str, token_path: Path | str | None = None
    ) -> "Bucket":
        from bucket_acl.remote.gcs_service import StorageServiceAuthority

        token_path = Path(token_path) if token_path is not None else None
        return cls(name, StorageServiceAuthority.from_token_path(token_path))

    def __repr__(self) -> str:
        return f"Bucket({self.name!r})"
