from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NodePoolStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int
    autoscaling: bool = False
    min_count: int
    max_count: int
    instance_type: str
    image: str
    version: str


class ClusterStatusResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    status_message: str
    name: str
    location: str
    cloud: str
    distribution: str
    version: str
    resource_id: int | None
    created_at: datetime
    created_by: int
    node_pools: dict[str, NodePoolStatus] = Field(default_factory=dict)


class NodeDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    created_at: datetime
    created_by: int | None
    version: str
    count: int
    min_count: int
    max_count: int


class ClusterDetailsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None
    name: str
    location: str
    status: str
    master_version: str
    endpoint: str | None = None
    created_at: datetime
    created_by: int
    node_pools: dict[str, NodeDetails] = Field(default_factory=dict)
