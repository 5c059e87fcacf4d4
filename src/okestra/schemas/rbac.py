from pydantic import BaseModel, ConfigDict

from ..core import ADMIN_CLUSTER_ROLE, RBAC_API_GROUP


class ClusterRoleBindingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    subject_name: str
    subject_kind: str = "User"
    subject_api_group: str = RBAC_API_GROUP
    role_kind: str = "ClusterRole"
    role_name: str = ADMIN_CLUSTER_ROLE
    role_api_group: str = RBAC_API_GROUP
