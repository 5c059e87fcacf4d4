from .controllers.lifecycle import ClusterLifecycleController
from .controllers.network import NetworkProvisioner, distribute
from .controllers.status import StatusProjector

__all__ = [
    "ClusterLifecycleController",
    "NetworkProvisioner",
    "StatusProjector",
    "distribute",
]
