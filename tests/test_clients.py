import pytest

from okestra import clients
from okestra.schemas.rbac import ClusterRoleBindingRequest


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cached API clients between tests."""
    clients.get_api_client.cache_clear()


def test_get_rbac_client_loads_kubeconfig(mocker):
    mock_new = mocker.patch("okestra.clients.config.new_client_from_config_dict")

    rbac = clients.get_rbac_client(b"apiVersion: v1\nkind: Config\n")
    clients.get_rbac_client(b"apiVersion: v1\nkind: Config\n")

    mock_new.assert_called_once_with({"apiVersion": "v1", "kind": "Config"})
    assert isinstance(rbac, clients.KubernetesRbacClient)


def test_create_cluster_role_binding(mocker):
    mock_api = mocker.patch("okestra.clients.client.RbacAuthorizationV1Api")

    rbac = clients.KubernetesRbacClient(api_client=mocker.Mock())
    rbac.create_cluster_role_binding(
        ClusterRoleBindingRequest(name="admins", subject_name="ocid1.user.oc1..u")
    )

    body = mock_api.return_value.create_cluster_role_binding.call_args.kwargs["body"]
    assert body.metadata.name == "admins"
    assert body.subjects[0].kind == "User"
    assert body.subjects[0].name == "ocid1.user.oc1..u"
    assert body.role_ref.kind == "ClusterRole"
    assert body.role_ref.name == "cluster-admin"
