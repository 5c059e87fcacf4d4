from __future__ import annotations

from functools import lru_cache
from typing import Any

import yaml
from kubernetes import client, config

from .schemas.rbac import ClusterRoleBindingRequest

# Kubernetes clients keyed by kubeconfig content (lazy-loaded and cached)


class KubernetesRbacClient:
    def __init__(self, api_client: Any) -> None:
        self.rbac = client.RbacAuthorizationV1Api(api_client)

    def create_cluster_role_binding(self, binding: ClusterRoleBindingRequest) -> None:
        body = client.V1ClusterRoleBinding(
            metadata=client.V1ObjectMeta(name=binding.name),
            subjects=[
                client.RbacV1Subject(
                    kind=binding.subject_kind,
                    name=binding.subject_name,
                    api_group=binding.subject_api_group,
                )
            ],
            role_ref=client.V1RoleRef(
                kind=binding.role_kind,
                name=binding.role_name,
                api_group=binding.role_api_group,
            ),
        )
        self.rbac.create_cluster_role_binding(body=body)


@lru_cache(maxsize=8)
def get_api_client(kubeconfig: bytes) -> Any:
    return config.new_client_from_config_dict(yaml.safe_load(kubeconfig))


def get_rbac_client(kubeconfig: bytes) -> KubernetesRbacClient:
    return KubernetesRbacClient(get_api_client(kubeconfig))
