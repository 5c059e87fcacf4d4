import base64

from ..clients import get_rbac_client
from ..core import CLOUD
from ..errors import (
    ConfigError,
    NothingToUpdateError,
    ResourceError,
    ValidationError,
    stage,
)
from ..logger import logger
from ..protocols import (
    CloudClient,
    CloudClientFactory,
    ContainerEngineManager,
    KubernetesClientFactory,
    ModelPersistence,
    SecretStore,
)
from ..schemas.cluster import Cluster, ClusterStatus, OKESpec
from ..schemas.credentials import KUBECONFIG_KEY, OracleCredential
from ..schemas.requests import (
    CreateClusterRequest,
    OKEClusterRequest,
    UpdateClusterRequest,
)
from ..schemas.status import ClusterDetailsResponse, ClusterStatusResponse
from .network import NetworkProvisioner
from .rbac import set_cluster_admin_rights
from .status import StatusProjector


def _require_distributable(spec: OKESpec) -> None:
    for np in spec.node_pools:
        if not np.delete and np.count == 0:
            raise ConfigError(
                f"node pool {np.name} cannot be distributed over the "
                "available worker subnets"
            )


class ClusterLifecycleController:
    """
    Drives one OKE cluster through create, update and delete.

    The controller holds the only mutable handle on its cluster aggregate.
    Steps run strictly in order and a failing step aborts the operation
    without undoing earlier ones: a VCN created before a failed engine apply
    stays behind and is recorded on the aggregate for a later delete.
    Callers must serialize operations on the same cluster.
    """

    def __init__(
        self,
        cluster: Cluster,
        persistence: ModelPersistence,
        secrets: SecretStore,
        cloud_factory: CloudClientFactory,
        k8s_factory: KubernetesClientFactory = get_rbac_client,
    ) -> None:
        self._cluster: Cluster | None = cluster
        self.persistence = persistence
        self.secrets = secrets
        self.cloud_factory = cloud_factory
        self.k8s_factory = k8s_factory
        self._create_properties: OKEClusterRequest | None = None

    @classmethod
    def from_request(
        cls,
        request: CreateClusterRequest,
        org_id: int,
        user_id: int,
        persistence: ModelPersistence,
        secrets: SecretStore,
        cloud_factory: CloudClientFactory,
        k8s_factory: KubernetesClientFactory = get_rbac_client,
    ) -> "ClusterLifecycleController":
        logger.debug(f"Building cluster {request.name} from create request")
        properties = request.properties.model_copy(deep=True)
        properties.add_defaults()

        cluster = Cluster(
            name=request.name,
            location=request.location,
            organization_id=org_id,
            created_by=user_id,
            secret_id=request.secret_id,
            ssh_secret_id=request.ssh_secret_id,
            oke=OKESpec(name=request.name, version=properties.version),
        )
        controller = cls(cluster, persistence, secrets, cloud_factory, k8s_factory)
        controller._create_properties = properties
        return controller

    @classmethod
    def from_model(
        cls,
        cluster: Cluster,
        persistence: ModelPersistence,
        secrets: SecretStore,
        cloud_factory: CloudClientFactory,
        k8s_factory: KubernetesClientFactory = get_rbac_client,
    ) -> "ClusterLifecycleController":
        return cls(cluster, persistence, secrets, cloud_factory, k8s_factory)

    # Aggregate access

    @property
    def cluster(self) -> Cluster:
        if self._cluster is None:
            raise ResourceError("cluster has been deleted from the database")
        return self._cluster

    def snapshot(self) -> Cluster:
        return self.cluster.model_copy(deep=True)

    @property
    def id(self) -> int | None:
        return self.cluster.id

    @property
    def uid(self) -> str:
        return self.cluster.uid

    @property
    def name(self) -> str:
        return self.cluster.name

    @property
    def location(self) -> str:
        return self.cluster.location

    @property
    def organization_id(self) -> int:
        return self.cluster.organization_id

    @property
    def cloud(self) -> str:
        return CLOUD

    @property
    def distribution(self) -> str:
        return self.cluster.distribution

    @property
    def secret_id(self) -> str:
        return self.cluster.secret_id

    @property
    def ssh_secret_id(self) -> str | None:
        return self.cluster.ssh_secret_id

    @property
    def config_secret_id(self) -> str | None:
        return self.cluster.config_secret_id

    @property
    def vcn_id(self) -> str | None:
        return self.cluster.oke.vcn_id

    def rbac_enabled(self) -> bool:
        return True

    def list_node_names(self) -> list[str]:
        # Nodes are labeled through the create request
        return []

    # Cloud access

    def get_secret_with_validation(self) -> dict[str, str]:
        return self.secrets.get_validated(self.secret_id)

    def _cloud(self) -> CloudClient:
        credential = OracleCredential.from_values(self.get_secret_with_validation())
        return self.cloud_factory(credential, credential.region or self.location)

    def _cloud_with_region(self, region: str) -> CloudClient:
        client = self._cloud()
        client.change_region(region)
        return client

    def _engine(self) -> ContainerEngineManager:
        with stage("cloud client"):
            return self._cloud_with_region(self.location).container_engine()

    def _network(self) -> NetworkProvisioner:
        with stage("cloud client"):
            return NetworkProvisioner(self._cloud_with_region(self.location).network())

    # Persistence

    def _save(self) -> None:
        with stage("persist"):
            self.cluster.id = self.persistence.save(self.cluster)

    def update_status(self, status: ClusterStatus, message: str = "") -> None:
        self.cluster.status = status
        self.cluster.status_message = message
        if self.cluster.id is None:
            return
        with stage("persist status"):
            self.persistence.update_status(self.cluster.id, status, message)

    def persist(self, status: ClusterStatus, message: str = "") -> None:
        self.update_status(status, message)

    def save_ssh_secret_id(self, ssh_secret_id: str) -> None:
        self.cluster.ssh_secret_id = ssh_secret_id
        if self.cluster.id is not None:
            with stage("persist ssh secret"):
                self.persistence.update_ssh_secret(self.cluster.id, ssh_secret_id)

    def save_config_secret_id(self, config_secret_id: str) -> None:
        self.cluster.config_secret_id = config_secret_id
        if self.cluster.id is not None:
            with stage("persist config secret"):
                self.persistence.update_config_secret(
                    self.cluster.id, config_secret_id
                )

    def delete_from_database(self) -> None:
        if self.cluster.id is not None:
            with stage("persist delete"):
                self.persistence.delete(self.cluster.id)
        self._cluster = None

    # Lifecycle

    def validate_creation_fields(self) -> None:
        spec = self.cluster.oke
        if not spec.node_pools:
            raise ValidationError("at least one node pool is required")
        _require_distributable(spec)
        with stage("engine validate"):
            self._engine().validate(spec)

    def create_cluster(self) -> None:
        if self._create_properties is None:
            raise ValidationError("cluster was not built from a create request")

        logger.info(f"Start creating Oracle cluster {self.name}")
        if self.cluster.id is None:
            self._save()
        self.update_status(ClusterStatus.CREATING)

        network = self._network()
        vcn_id = self.vcn_id
        if vcn_id:
            # VCN left over from an earlier attempt
            logger.info(f"Reusing virtual network {vcn_id}")
        else:
            with stage("network create"):
                vcn_id = network.create_virtual_network(self.name)
            self.cluster.oke.vcn_id = vcn_id
            self._save()

        with stage("network populate"):
            properties = network.populate_network_values(
                self._create_properties, vcn_id
            )

        self.cluster.oke = OKESpec.from_create_request(
            self.name, properties, self.cluster.created_by
        )
        with stage("validate"):
            self.validate_creation_fields()

        with stage("engine apply"):
            ocid = self._engine().apply(self.cluster.oke)
        if ocid:
            self.cluster.oke.ocid = ocid
        self._save()
        self._create_properties = None

        with stage("rbac binding"):
            set_cluster_admin_rights(self, self, self.k8s_factory)

        logger.info(f"Oracle cluster {self.name} created")

    def add_defaults_to_update(self, request: UpdateClusterRequest) -> None:
        if not request.properties.version:
            request.properties.version = self.cluster.oke.version
        request.properties.add_defaults()

    def check_equality_to_update(self, request: UpdateClusterRequest) -> None:
        logger.info("Check stored & updated cluster equals")
        stored = self.cluster.oke.to_request()
        wanted = request.properties

        if stored.version != wanted.version:
            return
        if stored.node_pools.keys() != wanted.node_pools.keys():
            return
        for name, np in wanted.node_pools.items():
            if np.identity() != stored.node_pools[name].identity():
                return
        raise NothingToUpdateError()

    def update_cluster(self, request: UpdateClusterRequest, user_id: int) -> None:
        logger.info(f"Start updating Oracle cluster {self.name}")
        vcn_id = self.vcn_id
        if not vcn_id:
            raise ResourceError(
                "cluster has no virtual network", stage="network populate"
            )

        self.update_status(ClusterStatus.UPDATING)

        with stage("network populate"):
            properties = self._network().populate_network_values(
                request.properties, vcn_id
            )

        desired = self.cluster.oke.merged_with(properties, user_id)
        with stage("validate"):
            _require_distributable(desired)

        with stage("engine apply"):
            self._engine().apply(desired)

        # Pending deletes leave the model only once the engine has applied them
        desired.node_pools = [np for np in desired.node_pools if not np.delete]
        self.cluster.oke = desired
        self._save()

        logger.info(f"Oracle cluster {self.name} updated")

    def delete_cluster(self) -> None:
        logger.info(f"Start deleting Oracle cluster {self.name}")
        self.update_status(ClusterStatus.DELETING)

        spec = self.cluster.oke.model_copy(deep=True)
        spec.delete = True
        with stage("engine apply"):
            self._engine().apply(spec)
        self.cluster.oke.delete = True

        with stage("network delete"):
            self._network().delete_cluster_network(self)

        logger.info(f"Oracle cluster {self.name} deleted")

    # Read paths

    def _require_ocid(self) -> str:
        ocid = self.cluster.oke.ocid
        if not ocid:
            raise ResourceError("cluster has no container engine id")
        return ocid

    def download_k8s_config(self) -> bytes:
        ocid = self._require_ocid()
        with stage("kubeconfig download"):
            return self._engine().get_kubeconfig(ocid)

    def get_k8s_config(self) -> bytes:
        if not self.config_secret_id:
            return self.download_k8s_config()

        with stage("kubeconfig secret"):
            values = self.secrets.get_validated(self.config_secret_id)
        encoded = values.get(KUBECONFIG_KEY)
        if not encoded:
            raise ValidationError(f"secret {self.config_secret_id} holds no kubeconfig")
        return base64.b64decode(encoded)

    def get_status(self) -> ClusterStatusResponse:
        return StatusProjector(self.cluster).status()

    def get_cluster_details(self) -> ClusterDetailsResponse:
        ocid = self._require_ocid()
        with stage("engine get cluster"):
            live = self._engine().get_cluster(ocid)
        return StatusProjector(self.cluster).details(live)

    def get_api_endpoint(self) -> str:
        if self.cluster.api_endpoint:
            return self.cluster.api_endpoint

        ocid = self._require_ocid()
        with stage("engine get cluster"):
            live = self._engine().get_cluster(ocid)
        if not live.endpoint:
            raise ResourceError("cluster reports no kubernetes endpoint")

        self.cluster.api_endpoint = f"https://{live.endpoint}"
        return self.cluster.api_endpoint
