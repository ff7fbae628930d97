"""
bucket_acl - access control lists for Google Cloud Storage buckets
"""

__version__ = "0.1.0"

from bucket_acl.acl import (
    AccessList,
    AclRole,
    BucketAccessList,
    DefaultAccessList,
    PartitionState,
)
from bucket_acl.bucket import Bucket
from bucket_acl.exceptions import AclFormatError, BucketAclError, UnsupportedRoleError
from bucket_acl.remote import Grant, RemoteAuthority
