"""Contracts of the collaborators a cluster lifecycle depends on.

Implementations live outside this package (persistence, secret storage, the
cloud SDK and the Kubernetes API), except for the JSON store in
:mod:`okestra.store` and the Kubernetes factory in :mod:`okestra.clients`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .schemas.cluster import Cluster, ClusterStatus, OKESpec
    from .schemas.credentials import OracleCredential
    from .schemas.engine import EngineCluster
    from .schemas.network import NetworkValues, VirtualNetwork
    from .schemas.rbac import ClusterRoleBindingRequest

__all__ = [
    "ModelPersistence",
    "SecretStore",
    "ContainerEngineManager",
    "NetworkManager",
    "CloudClient",
    "CloudClientFactory",
    "RbacClient",
    "KubernetesClientFactory",
    "HasSecret",
    "HasNetwork",
    "HasKubeconfig",
]


class ModelPersistence(Protocol):
    def load(self, cluster_id: int) -> Cluster: ...

    def save(self, cluster: Cluster) -> int:
        """Persists the full aggregate and returns its id."""
        ...

    def update_status(
        self, cluster_id: int, status: ClusterStatus, message: str
    ) -> None: ...

    def update_ssh_secret(self, cluster_id: int, ssh_secret_id: str) -> None: ...

    def update_config_secret(self, cluster_id: int, config_secret_id: str) -> None: ...

    def delete(self, cluster_id: int) -> None:
        """Removes the aggregate together with its provider rows."""
        ...


class SecretStore(Protocol):
    def get_validated(self, secret_id: str) -> dict[str, str]: ...


class ContainerEngineManager(Protocol):
    """Converges a declared cluster spec into running infrastructure.

    ``apply`` is expected to diff against the live cluster and change only
    what differs; a spec with ``delete`` set tears the cluster down. It
    returns the engine cluster id when one is known.
    """

    def validate(self, spec: OKESpec) -> None: ...

    def apply(self, spec: OKESpec) -> str | None: ...

    def get_cluster(self, cluster_ocid: str) -> EngineCluster: ...

    def get_kubeconfig(self, cluster_ocid: str) -> bytes: ...


class NetworkManager(Protocol):
    def create(self, name: str) -> VirtualNetwork: ...

    def delete(self, vcn_id: str) -> None: ...

    def describe_subnets(self, vcn_id: str) -> NetworkValues: ...


class CloudClient(Protocol):
    def change_region(self, region: str) -> None: ...

    def container_engine(self) -> ContainerEngineManager: ...

    def network(self) -> NetworkManager: ...


class CloudClientFactory(Protocol):
    def __call__(self, credential: OracleCredential, region: str) -> CloudClient: ...


class RbacClient(Protocol):
    def create_cluster_role_binding(
        self, binding: ClusterRoleBindingRequest
    ) -> None: ...


class KubernetesClientFactory(Protocol):
    def __call__(self, kubeconfig: bytes) -> RbacClient: ...


# Capabilities a lifecycle step can depend on


@runtime_checkable
class HasSecret(Protocol):
    @property
    def secret_id(self) -> str: ...

    def get_secret_with_validation(self) -> dict[str, str]: ...


@runtime_checkable
class HasNetwork(Protocol):
    @property
    def location(self) -> str: ...

    @property
    def vcn_id(self) -> str | None: ...


@runtime_checkable
class HasKubeconfig(Protocol):
    def get_k8s_config(self) -> bytes: ...
