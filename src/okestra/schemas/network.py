from pydantic import BaseModel, ConfigDict, Field


class VirtualNetwork(BaseModel):
    name: str
    id: str | None = Field(default=None, description="VCN OCID, None if not assigned")


class NetworkValues(BaseModel):
    """Subnet inventory of a cluster VCN."""

    lb_subnet_ids: list[str] = Field(default_factory=list)
    worker_subnet_ids: list[str] = Field(default_factory=list)


class PoolDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    quantity_per_subnet: int = 0
    subnet_ids: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return self.quantity_per_subnet * len(self.subnet_ids)

    @property
    def distributable(self) -> bool:
        return self.quantity_per_subnet > 0 and bool(self.subnet_ids)
