from ..core import ADMIN_BINDING_NAME
from ..errors import stage
from ..logger import logger
from ..protocols import HasKubeconfig, HasSecret, KubernetesClientFactory
from ..schemas.credentials import OracleCredential
from ..schemas.rbac import ClusterRoleBindingRequest


def set_cluster_admin_rights(
    owner: HasSecret,
    kubeconfig: HasKubeconfig,
    client_factory: KubernetesClientFactory,
    name: str = ADMIN_BINDING_NAME,
) -> ClusterRoleBindingRequest:
    """
    Binds cluster-admin to the user OCID of the credential that created the
    cluster.
    """
    with stage("kubeconfig fetch"):
        config = kubeconfig.get_k8s_config()

    with stage("kubernetes client"):
        client = client_factory(config)

    with stage("secret fetch"):
        credential = OracleCredential.from_values(owner.get_secret_with_validation())
        user_ocid = credential.require_user_ocid()

    binding = ClusterRoleBindingRequest(name=name, subject_name=user_ocid)
    with stage("cluster role binding"):
        client.create_cluster_role_binding(binding)

    logger.info(f"Cluster role binding {name} created")
    return binding
