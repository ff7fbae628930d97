"""
Exceptions raised by bucket-acl.

Errors coming back from the storage API are not wrapped; they reach the
caller as the client library raised them.
"""

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from bucket_acl.acl.roles import AclRole


class BucketAclError(Exception):
    """Base exception for bucket-acl errors."""

    pass


class UnsupportedRoleError(BucketAclError):
    """Raised when a role is requested from an access list that does not hold it."""

    def __init__(
        self,
        role: Any,
        supported_roles: Iterable["AclRole"],
        access_list: str | None = None,
    ):
        self.role = role
        self.supported_roles = tuple(supported_roles)
        self.access_list = access_list

        supported = ", ".join(r.value for r in self.supported_roles)
        target = f"{access_list} " if access_list else ""
        message = (
            f"Role {role!r} is not supported by the {target}access list. "
            f"Supported roles: {supported}"
        )
        super().__init__(message)


class AclFormatError(BucketAclError):
    """Raised when an access control item has an unknown shape."""

    def __init__(self, item: Any):
        self.item = item
        super().__init__(f"Unknown ACL format: {type(item).__name__}")
