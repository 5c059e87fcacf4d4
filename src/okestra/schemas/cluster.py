from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from ..core import CLOUD, DISTRIBUTION
from .requests import NodePoolRequest, OKEClusterRequest


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ClusterStatus(str, Enum):
    REQUESTED = "REQUESTED"
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    ERROR = "ERROR"
    UPDATING = "UPDATING"
    DELETING = "DELETING"
    DELETED = "DELETED"


class NodePool(BaseModel):
    name: str
    shape: str
    image: str
    version: str
    quantity_per_subnet: int = 0
    subnet_ids: list[str] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)
    delete: bool = Field(
        default=False, description="Pending delete: dropped after the next apply"
    )
    created_by: int | None = None
    created_at: datetime = Field(default_factory=_now)

    @property
    def count(self) -> int:
        return self.quantity_per_subnet * len(self.subnet_ids)

    @classmethod
    def from_request(cls, name: str, r: NodePoolRequest, user_id: int) -> "NodePool":
        return cls(
            name=name,
            shape=r.shape,
            image=r.image,
            version=r.version,
            quantity_per_subnet=r.quantity_per_subnet,
            subnet_ids=list(r.subnet_ids),
            labels=dict(r.labels),
            created_by=user_id,
        )

    def apply_request(self, r: NodePoolRequest) -> None:
        self.shape = r.shape or self.shape
        self.image = r.image or self.image
        self.version = r.version or self.version
        self.quantity_per_subnet = r.quantity_per_subnet
        self.subnet_ids = list(r.subnet_ids)
        self.labels = dict(r.labels)
        self.delete = False


class OKESpec(BaseModel):
    """Desired state submitted to the container engine."""

    name: str
    version: str
    ocid: str | None = Field(default=None, description="Engine cluster OCID")
    vcn_id: str | None = None
    lb_subnet_id1: str | None = None
    lb_subnet_id2: str | None = None
    node_pools: list[NodePool] = Field(default_factory=list)
    delete: bool = False
    created_by: int | None = None

    @classmethod
    def from_create_request(
        cls, name: str, r: OKEClusterRequest, user_id: int
    ) -> "OKESpec":
        spec = cls(name=name, version=r.version, created_by=user_id)
        spec._set_network(r)
        spec.node_pools = [
            NodePool.from_request(np_name, np, user_id)
            for np_name, np in r.node_pools.items()
        ]
        return spec

    def merged_with(self, r: OKEClusterRequest, user_id: int) -> "OKESpec":
        """
        Returns a new spec with the update request applied. Pools missing
        from the request are flagged for deletion, never dropped here.
        """
        spec = self.model_copy(deep=True)
        spec.delete = False
        if r.version:
            spec.version = r.version
        spec._set_network(r)

        for np in spec.node_pools:
            if np.name in r.node_pools:
                np.apply_request(r.node_pools[np.name])
            else:
                np.delete = True

        existing = {np.name for np in spec.node_pools}
        for name, np in r.node_pools.items():
            if name not in existing:
                spec.node_pools.append(NodePool.from_request(name, np, user_id))

        return spec

    def to_request(self) -> OKEClusterRequest:
        return OKEClusterRequest(
            version=self.version,
            node_pools={
                np.name: NodePoolRequest(
                    version=np.version,
                    count=np.count,
                    image=np.image,
                    shape=np.shape,
                    labels=dict(np.labels),
                )
                for np in self.node_pools
                if not np.delete
            },
        )

    def _set_network(self, r: OKEClusterRequest) -> None:
        if r.vcn_id:
            self.vcn_id = r.vcn_id
        if len(r.lb_subnet_ids) == 2:
            self.lb_subnet_id1, self.lb_subnet_id2 = r.lb_subnet_ids


class Cluster(BaseModel):
    """Cluster aggregate as persisted."""

    id: int | None = None
    uid: str = Field(default_factory=lambda: str(uuid4()))
    organization_id: int
    created_by: int
    created_at: datetime = Field(default_factory=_now)
    name: str
    location: str
    cloud: str = CLOUD
    distribution: str = DISTRIBUTION
    status: ClusterStatus = ClusterStatus.REQUESTED
    status_message: str = ""
    secret_id: str
    ssh_secret_id: str | None = None
    config_secret_id: str | None = None
    api_endpoint: str | None = Field(default=None, description="Cached API URL")
    oke: OKESpec
