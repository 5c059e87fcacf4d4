from ..core import ENGINE_ACTIVE_STATE
from ..errors import ClusterNotReady
from ..schemas.cluster import Cluster
from ..schemas.engine import EngineCluster
from ..schemas.status import (
    ClusterDetailsResponse,
    ClusterStatusResponse,
    NodeDetails,
    NodePoolStatus,
)


class StatusProjector:
    """
    Read-only views over a cluster snapshot.

    Node counts are recomputed from the stored spec
    (quantity per subnet x assigned subnets), never read back from the cloud,
    so they go stale if pools are resized outside this tool.
    """

    def __init__(self, cluster: Cluster) -> None:
        self.cluster = cluster.model_copy(deep=True)

    def status(self) -> ClusterStatusResponse:
        c = self.cluster
        node_pools = {
            np.name: NodePoolStatus(
                count=np.count,
                autoscaling=False,
                min_count=np.count,
                max_count=np.count,
                instance_type=np.shape,
                image=np.image,
                version=np.version,
            )
            for np in c.oke.node_pools
        }

        return ClusterStatusResponse(
            status=c.status.value,
            status_message=c.status_message,
            name=c.name,
            location=c.location,
            cloud=c.cloud,
            distribution=c.distribution,
            version=c.oke.version,
            resource_id=c.id,
            created_at=c.created_at,
            created_by=c.created_by,
            node_pools=node_pools,
        )

    def details(self, live: EngineCluster) -> ClusterDetailsResponse:
        if live.lifecycle_state != ENGINE_ACTIVE_STATE:
            raise ClusterNotReady(live.lifecycle_state)

        c = self.cluster
        node_pools = {
            np.name: NodeDetails(
                created_at=np.created_at,
                created_by=np.created_by,
                version=np.version,
                count=np.count,
                min_count=np.count,
                max_count=np.count,
            )
            for np in c.oke.node_pools
        }

        return ClusterDetailsResponse(
            id=c.id,
            name=c.name,
            location=c.location,
            status=c.status.value,
            master_version=live.version or c.oke.version,
            endpoint=live.endpoint,
            created_at=c.created_at,
            created_by=c.created_by,
            node_pools=node_pools,
        )
