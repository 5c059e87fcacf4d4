import pytest

from okestra.controllers.status import StatusProjector
from okestra.errors import ClusterNotReady, StateError
from okestra.schemas.engine import EngineCluster


def test_status_counts_are_computed(active_cluster):
    status = StatusProjector(active_cluster).status()

    assert status.name == "demo"
    assert status.status == "ACTIVE"
    assert status.cloud == "oracle"
    assert status.distribution == "oke"
    assert status.resource_id == 7
    pool = status.node_pools["pool1"]
    assert pool.count == 9
    assert pool.min_count == pool.max_count == 9
    assert pool.autoscaling is False
    assert pool.instance_type == "VM.Standard1.1"
    assert status.node_pools["old"].count == 1


def test_status_is_a_snapshot(active_cluster):
    projector = StatusProjector(active_cluster)
    active_cluster.oke.node_pools[0].quantity_per_subnet = 10

    assert projector.status().node_pools["pool1"].count == 9


@pytest.mark.parametrize("state", ["CREATING", "UPDATING", "DELETING", "FAILED"])
def test_details_require_active_engine_state(active_cluster, state):
    with pytest.raises(ClusterNotReady) as exc:
        StatusProjector(active_cluster).details(EngineCluster(lifecycle_state=state))

    assert isinstance(exc.value, StateError)
    assert exc.value.state == state


def test_details_fall_back_to_stored_version(active_cluster):
    details = StatusProjector(active_cluster).details(
        EngineCluster(lifecycle_state="ACTIVE", endpoint="10.0.0.1")
    )

    assert details.master_version == "v1.10.3"
    assert details.endpoint == "10.0.0.1"
    assert details.id == 7
    assert details.node_pools["pool1"].max_count == 9
