from pydantic import BaseModel


class EngineCluster(BaseModel):
    """Live cluster object as reported by the container engine."""

    id: str | None = None
    lifecycle_state: str
    endpoint: str | None = None
    version: str | None = None
