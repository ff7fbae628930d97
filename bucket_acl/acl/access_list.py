"""
Bucket and default object access lists.

Example:
    bucket = Bucket.from_token_path("my-bucket", "token.json")

    for reader in bucket.acl.readers:
        print(reader)

    bucket.acl.add_reader("user-heidi@example.net")
    bucket.default_acl.public()
"""

from typing import List, TYPE_CHECKING

from bucket_acl.acl.entity_cache import AccessList, AccessListConfig
from bucket_acl.acl.roles import AclRole
from bucket_acl.acl.rules import (
    AUTHENTICATED_READ,
    BUCKET_ACL_RULES,
    BUCKET_OWNER_FULL_CONTROL,
    BUCKET_OWNER_READ,
    DEFAULT_ACL_RULES,
    PRIVATE,
    PROJECT_PRIVATE,
    PUBLIC_READ,
    PUBLIC_READ_WRITE,
)

if TYPE_CHECKING:
    from bucket_acl.remote.authority import RemoteAuthority

BUCKET_ACL_CONFIG = AccessListConfig(
    name="bucket ACL",
    supported_roles=(AclRole.OWNER, AclRole.WRITER, AclRole.READER),
    rules=BUCKET_ACL_RULES,
    list_operation="list_grants",
    insert_operation="insert_grant",
    delete_operation="delete_grant",
    patch_field="predefined_acl",
)

DEFAULT_ACL_CONFIG = AccessListConfig(
    name="default object ACL",
    supported_roles=(AclRole.OWNER, AclRole.READER),
    rules=DEFAULT_ACL_RULES,
    list_operation="list_default_grants",
    insert_operation="insert_default_grant",
    delete_operation="delete_default_grant",
    patch_field="predefined_default_acl",
)


class BucketAccessList(AccessList):
    """Owners, writers and readers of the bucket itself.

    Entities take one of the forms ``user-<id|email>``, ``group-<id|email>``,
    ``domain-<domain>``, ``project-<team>-<projectId>``, ``allUsers`` or
    ``allAuthenticatedUsers``.

    Predefined rule helpers use snake_case names only; the API spellings
    (``publicRead``, ``projectPrivate`` ...) go through apply_predefined_rule.
    """

    def __init__(self, bucket_name: str, authority: "RemoteAuthority"):
        super().__init__(bucket_name, authority, BUCKET_ACL_CONFIG)

    @property
    def owners(self) -> List[str]:
        return self.list(AclRole.OWNER)

    @property
    def writers(self) -> List[str]:
        return self.list(AclRole.WRITER)

    @property
    def readers(self) -> List[str]:
        return self.list(AclRole.READER)

    def add_owner(self, entity: str) -> str:
        return self.grant(AclRole.OWNER, entity)

    def add_writer(self, entity: str) -> str:
        return self.grant(AclRole.WRITER, entity)

    def add_reader(self, entity: str) -> str:
        return self.grant(AclRole.READER, entity)

    # Predefined ACL helpers

    def auth(self) -> "BucketAccessList":
        """Apply ``authenticatedRead``: allAuthenticatedUsers can read."""
        return self.apply_predefined_rule(AUTHENTICATED_READ)

    auth_read = auth
    authenticated = auth
    authenticated_read = auth

    def private(self) -> "BucketAccessList":
        return self.apply_predefined_rule(PRIVATE)

    def project_private(self) -> "BucketAccessList":
        """Apply ``projectPrivate``: project team members get access by role."""
        return self.apply_predefined_rule(PROJECT_PRIVATE)

    proj_private = project_private

    def public(self) -> "BucketAccessList":
        """Apply ``publicRead``: allUsers can read."""
        return self.apply_predefined_rule(PUBLIC_READ)

    public_read = public

    def public_write(self) -> "BucketAccessList":
        """Apply ``publicReadWrite``: allUsers can read and write."""
        return self.apply_predefined_rule(PUBLIC_READ_WRITE)


class DefaultAccessList(AccessList):
    """Owners and readers given to objects created in the bucket.

    Predefined rule helpers use snake_case names only; the API spellings
    (``bucketOwnerFullControl``, ``bucketOwnerRead`` ...) go through
    apply_predefined_rule.
    """

    def __init__(self, bucket_name: str, authority: "RemoteAuthority"):
        super().__init__(bucket_name, authority, DEFAULT_ACL_CONFIG)

    @property
    def owners(self) -> List[str]:
        return self.list(AclRole.OWNER)

    @property
    def readers(self) -> List[str]:
        return self.list(AclRole.READER)

    def add_owner(self, entity: str) -> str:
        return self.grant(AclRole.OWNER, entity)

    def add_reader(self, entity: str) -> str:
        return self.grant(AclRole.READER, entity)

    # Predefined ACL helpers

    def auth(self) -> "DefaultAccessList":
        return self.apply_predefined_rule(AUTHENTICATED_READ)

    auth_read = auth
    authenticated = auth
    authenticated_read = auth

    def owner_full(self) -> "DefaultAccessList":
        """Apply ``bucketOwnerFullControl``: bucket owners own new objects."""
        return self.apply_predefined_rule(BUCKET_OWNER_FULL_CONTROL)

    def owner_read(self) -> "DefaultAccessList":
        """Apply ``bucketOwnerRead``: bucket owners can read new objects."""
        return self.apply_predefined_rule(BUCKET_OWNER_READ)

    def private(self) -> "DefaultAccessList":
        return self.apply_predefined_rule(PRIVATE)

    def project_private(self) -> "DefaultAccessList":
        return self.apply_predefined_rule(PROJECT_PRIVATE)

    def public(self) -> "DefaultAccessList":
        return self.apply_predefined_rule(PUBLIC_READ)

    public_read = public
