"""Role-partitioned entity cache.

An AccessList keeps, for every role its variant supports, the entities the
storage API last reported for that role. Lists are loaded lazily on first
read and then kept in sync with single grant/revoke calls without reloading.
Applying a predefined rule invalidates every role, since the API may rewrite
all of them.

Both the bucket ACL and the default object ACL are AccessList instances; they
differ only in their AccessListConfig.

AccessList does no locking. Concurrent grant/revoke/reload calls on one
instance race on the cached lists and the last writer wins; callers sharing
an instance across threads must serialize access themselves.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from bucket_acl.acl.roles import AclRole
from bucket_acl.acl.rules import RuleAliasTable
from bucket_acl.exceptions import UnsupportedRoleError
from bucket_acl.remote.authority import Grant, RemoteAuthority

logger = logging.getLogger(__name__)


class PartitionState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class AccessListConfig(BaseModel):
    """Everything that distinguishes one access list variant from another."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    supported_roles: Tuple[AclRole, ...]
    rules: RuleAliasTable
    # RemoteAuthority method names
    list_operation: str
    insert_operation: str
    delete_operation: str
    # RemoteAuthority.patch_bucket keyword
    patch_field: str


class RolePartition:
    """Entities holding one role, plus whether they have been loaded."""

    def __init__(self, role: AclRole):
        self.role = role
        self.state = PartitionState.UNLOADED
        self.entities: List[str] = []

    @property
    def is_loaded(self) -> bool:
        return self.state == PartitionState.LOADED

    def load(self, entities: List[str]):
        self.entities = entities
        self.state = PartitionState.LOADED

    def unload(self):
        self.entities = []
        self.state = PartitionState.UNLOADED

    def __repr__(self) -> str:
        if self.is_loaded:
            return f"RolePartition({self.role.value}, {self.entities!r})"
        return f"RolePartition({self.role.value}, {self.state.value})"


class AccessList:
    """Lazily loaded, role-partitioned access control list of one bucket."""

    def __init__(
        self, bucket_name: str, authority: RemoteAuthority, config: AccessListConfig
    ):
        self.bucket_name = bucket_name
        self.authority = authority
        self.config = config
        self._partitions: Dict[AclRole, RolePartition] = {
            role: RolePartition(role) for role in config.supported_roles
        }

    @property
    def supported_roles(self) -> Tuple[AclRole, ...]:
        return self.config.supported_roles

    def _partition(self, role: Any) -> RolePartition:
        try:
            key = AclRole(role)
        except ValueError:
            key = None
        partition = self._partitions.get(key)
        if partition is None:
            raise UnsupportedRoleError(role, self.supported_roles, self.config.name)
        return partition

    def _call(self, operation: str, *args, **kwargs):
        return getattr(self.authority, operation)(self.bucket_name, *args, **kwargs)

    def state(self, role: AclRole | str) -> PartitionState:
        return self._partition(role).state

    def is_loaded(self, role: AclRole | str | None = None) -> bool:
        if role is not None:
            return self._partition(role).is_loaded
        return all(p.is_loaded for p in self._partitions.values())

    def reload(self) -> "AccessList":
        """Reload every role from the storage API, replacing cached entities."""
        previous = {
            role: (p.state, p.entities) for role, p in self._partitions.items()
        }
        for partition in self._partitions.values():
            partition.state = PartitionState.LOADING

        try:
            grants: List[Grant] = self._call(self.config.list_operation)
        except BaseException:
            for role, (state, entities) in previous.items():
                self._partitions[role].state = state
                self._partitions[role].entities = entities
            raise

        by_role: Dict[AclRole, List[str]] = {role: [] for role in self._partitions}
        for grant in grants:
            try:
                role = AclRole(grant.role)
            except ValueError:
                role = None
            if role not in by_role:
                logger.debug(
                    f"Ignoring {grant.role} grant for {grant.entity} in "
                    f"{self.config.name} of {self.bucket_name}"
                )
                continue
            by_role[role].append(grant.entity)

        for role, entities in by_role.items():
            self._partitions[role].load(entities)

        logger.debug(
            f"Loaded {self.config.name} of {self.bucket_name}: "
            + ", ".join(f"{r.value}={len(e)}" for r, e in by_role.items())
        )
        return self

    refresh = reload

    def list(self, role: AclRole | str) -> List[str]:
        """Entities holding role, loading the access list on first use."""
        partition = self._partition(role)
        if not partition.is_loaded:
            self.reload()
        return list(partition.entities)

    def grant(self, role: AclRole | str, entity: str) -> str:
        """Grant role to entity.

        Returns:
            The entity as stored by the API, which may differ in spelling
            from the one passed in.
        """
        partition = self._partition(role)
        grant = self._call(self.config.insert_operation, entity, partition.role.value)
        entity = grant.entity
        if partition.is_loaded:
            partition.entities.append(entity)
        logger.debug(
            f"Granted {partition.role.value} to {entity} in "
            f"{self.config.name} of {self.bucket_name}"
        )
        return entity

    def revoke(self, entity: str) -> bool:
        """Remove every grant entity holds in this access list."""
        self._call(self.config.delete_operation, entity)
        for partition in self._partitions.values():
            if partition.is_loaded:
                partition.entities[:] = [e for e in partition.entities if e != entity]
        logger.debug(
            f"Revoked {entity} from {self.config.name} of {self.bucket_name}"
        )
        return True

    delete = revoke

    def apply_predefined_rule(self, rule: Any) -> "AccessList":
        """Replace the whole access list with a predefined rule.

        Args:
            rule: canonical rule id or one of its aliases; unknown values are
                sent unchanged.
        """
        rule_id = self.config.rules.rule_for(rule)
        self.authority.patch_bucket(
            self.bucket_name, **{self.config.patch_field: rule_id}
        )
        logger.debug(
            f"Applied predefined rule {rule_id} to {self.config.name} "
            f"of {self.bucket_name}"
        )
        return self.clear()

    def clear(self) -> "AccessList":
        for partition in self._partitions.values():
            partition.unload()
        return self

    def __repr__(self) -> str:
        partitions = ", ".join(
            f"{role.value}={p.state.value}" for role, p in self._partitions.items()
        )
        return (
            f"{type(self).__name__}(bucket={self.bucket_name!r}, {partitions})"
        )
