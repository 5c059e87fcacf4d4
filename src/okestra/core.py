# Provider identity
CLOUD = "oracle"
DISTRIBUTION = "oke"

# Virtual network naming
# e.g. cluster "demo" -> VCN "p-demo"
NETWORK_NAME_PREFIX = "p-"

# Network topology requirements for a cluster VCN
REQUIRED_LB_SUBNETS = 2
MAX_WORKER_SPREAD = 3

# Admin RBAC granted to the credential owner after creation
ADMIN_BINDING_NAME = "cluster-creator-admin-right"
ADMIN_CLUSTER_ROLE = "cluster-admin"
RBAC_API_GROUP = "rbac.authorization.k8s.io"

# Defaults applied to node pools that omit them
DEFAULT_K8S_VERSION = "v1.10.3"
DEFAULT_NODE_IMAGE = "Oracle-Linux-7.4"
DEFAULT_NODE_SHAPE = "VM.Standard1.1"

# Lifecycle state reported by the container engine for a usable cluster
ENGINE_ACTIVE_STATE = "ACTIVE"
