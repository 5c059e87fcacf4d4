import pytest

from okestra.schemas.cluster import Cluster, NodePool, OKESpec
from okestra.schemas.engine import EngineCluster
from okestra.schemas.network import NetworkValues, VirtualNetwork

LB_SUBNETS = ["lb-1", "lb-2"]
WORKER_SUBNETS = ["w-1", "w-2", "w-3", "w-4"]


@pytest.fixture
def cloud(mocker):
    """Cloud client factory whose engine and network managers are mocks."""
    factory = mocker.Mock()
    client = factory.return_value

    network = client.network.return_value
    network.create.return_value = VirtualNetwork(name="p-demo", id="vcn-1")
    network.describe_subnets.return_value = NetworkValues(
        lb_subnet_ids=list(LB_SUBNETS), worker_subnet_ids=list(WORKER_SUBNETS)
    )

    engine = client.container_engine.return_value
    engine.apply.return_value = "ocid1.cluster.oc1..demo"
    engine.get_kubeconfig.return_value = b"apiVersion: v1\nkind: Config\n"
    engine.get_cluster.return_value = EngineCluster(
        id="ocid1.cluster.oc1..demo",
        lifecycle_state="ACTIVE",
        endpoint="10.0.0.1:6443",
        version="v1.11.1",
    )
    return factory


@pytest.fixture
def engine(cloud):
    return cloud.return_value.container_engine.return_value


@pytest.fixture
def network(cloud):
    return cloud.return_value.network.return_value


@pytest.fixture
def persistence(mocker):
    store = mocker.Mock()
    store.save.return_value = 7
    return store


@pytest.fixture
def secrets(mocker):
    store = mocker.Mock()
    store.get_validated.return_value = {
        "user_ocid": "ocid1.user.oc1..admin",
        "tenancy_ocid": "ocid1.tenancy.oc1..t",
        "region": "us-ashburn-1",
    }
    return store


@pytest.fixture
def k8s_factory(mocker):
    return mocker.Mock()


@pytest.fixture
def active_cluster():
    """A persisted cluster with one running pool and one about to go."""
    return Cluster(
        id=7,
        organization_id=1,
        created_by=42,
        name="demo",
        location="us-phoenix-1",
        secret_id="secret-1",
        status="ACTIVE",
        oke=OKESpec(
            name="demo",
            version="v1.10.3",
            ocid="ocid1.cluster.oc1..demo",
            vcn_id="vcn-1",
            lb_subnet_id1="lb-1",
            lb_subnet_id2="lb-2",
            node_pools=[
                NodePool(
                    name="pool1",
                    shape="VM.Standard1.1",
                    image="Oracle-Linux-7.4",
                    version="v1.10.3",
                    quantity_per_subnet=3,
                    subnet_ids=["w-1", "w-2", "w-3"],
                ),
                NodePool(
                    name="old",
                    shape="VM.Standard1.2",
                    image="Oracle-Linux-7.4",
                    version="v1.10.3",
                    quantity_per_subnet=1,
                    subnet_ids=["w-1"],
                ),
            ],
        ),
    )
