from enum import Enum


class AclRole(str, Enum):
    OWNER = "OWNER"
    WRITER = "WRITER"  # bucket ACL only
    READER = "READER"
