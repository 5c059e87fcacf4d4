"""Error taxonomy for cluster lifecycle operations.

Every error may carry a ``stage`` label naming the lifecycle step that failed
(``network create``, ``engine apply``, ...). Foreign exceptions raised by
collaborators are wrapped into :class:`UpstreamError` by :func:`stage`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from .logger import logger


class OkestraError(Exception):
    """Base class for all lifecycle errors."""

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def __str__(self) -> str:
        if self.stage:
            return f"{self.stage}: {self.message}"
        return self.message


class ConfigError(OkestraError):
    """Invalid network topology, e.g. a VCN without exactly 2 LB subnets."""


class ResourceError(OkestraError):
    """A provisioned resource lacks an expected identifier."""


class StateError(OkestraError):
    """The live cluster is not in the lifecycle state an operation requires."""


class ClusterNotReady(StateError):
    def __init__(self, state: str | None = None, stage: str | None = None) -> None:
        msg = "cluster is not ready"
        if state:
            msg = f"{msg} (lifecycle state {state})"
        super().__init__(msg, stage=stage)
        self.state = state


class ValidationError(OkestraError):
    """A required field (credential, request value) is missing or invalid."""


class NothingToUpdateError(ValidationError):
    def __init__(self, stage: str | None = None) -> None:
        super().__init__("update request does not change the cluster", stage=stage)


class UpstreamError(OkestraError):
    """An external collaborator failed."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__, stage=stage)
        self.cause = cause


@contextmanager
def stage(label: str) -> Iterator[None]:
    """Labels failures raised inside the block with ``label``.

    Lifecycle errors keep their type and get the label if they have none;
    any other exception is re-raised as :class:`UpstreamError`.
    """
    try:
        yield
    except OkestraError as e:
        if e.stage is None:
            e.stage = label
            logger.error(f"{label} failed: {e.message}")
        raise
    except Exception as e:
        logger.error(f"{label} failed: {e}")
        raise UpstreamError(label, e) from e
