from pydantic import BaseModel, Field

from ..core import DEFAULT_K8S_VERSION, DEFAULT_NODE_IMAGE, DEFAULT_NODE_SHAPE


class NodePoolRequest(BaseModel):
    version: str = ""
    count: int = Field(default=1, ge=0, description="Total instances in the pool")
    image: str = ""
    shape: str = ""
    labels: dict[str, str] = Field(default_factory=dict)

    # Filled in from the VCN subnet inventory
    quantity_per_subnet: int = 0
    subnet_ids: list[str] = Field(default_factory=list)

    def identity(self) -> tuple[str, int, str, str, dict[str, str]]:
        return (self.version, self.count, self.image, self.shape, self.labels)


class OKEClusterRequest(BaseModel):
    version: str = ""
    node_pools: dict[str, NodePoolRequest] = Field(default_factory=dict)

    # Filled in from the VCN subnet inventory
    vcn_id: str | None = None
    lb_subnet_ids: list[str] = Field(default_factory=list)

    def add_defaults(self) -> None:
        if not self.version:
            self.version = DEFAULT_K8S_VERSION
        for np in self.node_pools.values():
            if not np.version:
                np.version = self.version
            if not np.image:
                np.image = DEFAULT_NODE_IMAGE
            if not np.shape:
                np.shape = DEFAULT_NODE_SHAPE


class CreateClusterRequest(BaseModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    secret_id: str = Field(min_length=1)
    ssh_secret_id: str | None = None
    properties: OKEClusterRequest = Field(default_factory=OKEClusterRequest)


class UpdateClusterRequest(BaseModel):
    properties: OKEClusterRequest = Field(default_factory=OKEClusterRequest)
