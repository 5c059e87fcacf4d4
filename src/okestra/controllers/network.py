from collections.abc import Sequence

from ..core import MAX_WORKER_SPREAD, NETWORK_NAME_PREFIX, REQUIRED_LB_SUBNETS
from ..errors import ConfigError, ResourceError
from ..logger import logger
from ..protocols import HasNetwork, NetworkManager
from ..schemas.network import NetworkValues, PoolDistribution
from ..schemas.requests import OKEClusterRequest


def distribute(count: int, worker_subnet_ids: Sequence[str]) -> PoolDistribution:
    """
    Splits ``count`` instances evenly over the first 3, 2 or 1 worker subnets.

    Returns an empty distribution when ``count`` is 0 or fewer than 3 worker
    subnets exist. Counts divisible by neither 3 nor 2 land on one subnet.
    """
    if count <= 0 or len(worker_subnet_ids) < MAX_WORKER_SPREAD:
        return PoolDistribution()

    for spread in range(MAX_WORKER_SPREAD, 1, -1):
        if count % spread == 0:
            return PoolDistribution(
                quantity_per_subnet=count // spread,
                subnet_ids=tuple(worker_subnet_ids[:spread]),
            )

    return PoolDistribution(
        quantity_per_subnet=count, subnet_ids=tuple(worker_subnet_ids[:1])
    )


def network_name(cluster_name: str) -> str:
    return f"{NETWORK_NAME_PREFIX}{cluster_name}"


class NetworkProvisioner:
    """Creates and inspects the VCN backing a cluster."""

    def __init__(self, manager: NetworkManager) -> None:
        self.manager = manager

    def create_virtual_network(self, cluster_name: str) -> str:
        name = network_name(cluster_name)
        logger.info(f"Creating virtual network {name}")

        vcn = self.manager.create(name)
        if not vcn.id:
            raise ResourceError(f"virtual network {name} has no id")

        logger.info(f"Virtual network {name} created: {vcn.id}")
        return vcn.id

    def delete_virtual_network(self, vcn_id: str) -> None:
        logger.info(f"Deleting virtual network {vcn_id}")
        self.manager.delete(vcn_id)

    def delete_cluster_network(self, owner: HasNetwork) -> bool:
        if not owner.vcn_id:
            logger.warning("No virtual network recorded for cluster, skipping delete")
            return False
        self.delete_virtual_network(owner.vcn_id)
        return True

    def get_network_values(self, vcn_id: str) -> NetworkValues:
        values = self.manager.describe_subnets(vcn_id)
        if len(values.lb_subnet_ids) != REQUIRED_LB_SUBNETS:
            raise ConfigError(
                f"invalid network config: there must be {REQUIRED_LB_SUBNETS} "
                f"load balancer subnets, found {len(values.lb_subnet_ids)}"
            )
        return values

    def populate_network_values(
        self, properties: OKEClusterRequest, vcn_id: str
    ) -> OKEClusterRequest:
        """
        Returns a copy of ``properties`` with the VCN id, both LB subnets and
        every node pool's subnet distribution filled in.
        """
        values = self.get_network_values(vcn_id)

        populated = properties.model_copy(deep=True)
        populated.vcn_id = vcn_id
        populated.lb_subnet_ids = list(values.lb_subnet_ids)

        for name, np in populated.node_pools.items():
            dist = distribute(np.count, values.worker_subnet_ids)
            np.quantity_per_subnet = dist.quantity_per_subnet
            np.subnet_ids = list(dist.subnet_ids)
            logger.debug(
                f"Node pool {name}: {dist.quantity_per_subnet} x {len(dist.subnet_ids)}"
            )

        return populated
