from bucket_acl.acl.access_list import (
    BUCKET_ACL_CONFIG,
    DEFAULT_ACL_CONFIG,
    BucketAccessList,
    DefaultAccessList,
)
from bucket_acl.acl.entity_cache import AccessList, AccessListConfig, PartitionState
from bucket_acl.acl.roles import AclRole
from bucket_acl.acl.rules import (
    BUCKET_ACL_RULES,
    DEFAULT_ACL_RULES,
    RuleAliasTable,
    predefined_default_rule_for,
    predefined_rule_for,
)

__all__ = [
    "AccessList",
    "AccessListConfig",
    "AclRole",
    "BUCKET_ACL_CONFIG",
    "BUCKET_ACL_RULES",
    "BucketAccessList",
    "DEFAULT_ACL_CONFIG",
    "DEFAULT_ACL_RULES",
    "DefaultAccessList",
    "PartitionState",
    "RuleAliasTable",
    "predefined_default_rule_for",
    "predefined_rule_for",
]
