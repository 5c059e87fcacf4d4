import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigError, ResourceError
from .logger import logger
from .schemas.cluster import Cluster, ClusterStatus

HOME_ENV = "OKESTRA_HOME"


def default_store_dir() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "okestra"


class ClusterStore:
    """Cluster aggregates kept in a single JSON file, keyed by id."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else default_store_dir() / "clusters.json"
        self.records: dict[str, dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with self.path.open("r") as f:
                self.records = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"corrupt cluster store {self.path}: {e}") from e

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        with tmp.open("w") as f:
            json.dump(self.records, f, indent=2)
        tmp.replace(self.path)

    def _record(self, cluster_id: int) -> dict[str, Any]:
        try:
            return self.records[str(cluster_id)]
        except KeyError:
            raise ResourceError(f"cluster {cluster_id} not found") from None

    def _parse(self, record: dict[str, Any]) -> Cluster:
        try:
            return Cluster.model_validate(record)
        except ValidationError as e:
            raise ConfigError(f"malformed cluster record in {self.path}: {e}") from e

    def list_clusters(self) -> list[Cluster]:
        return [self._parse(r) for r in self.records.values()]

    def load(self, cluster_id: int) -> Cluster:
        return self._parse(self._record(cluster_id))

    def save(self, cluster: Cluster) -> int:
        cluster_id = cluster.id
        if cluster_id is None:
            cluster_id = max((int(k) for k in self.records), default=0) + 1
        data = cluster.model_dump(mode="json")
        data["id"] = cluster_id
        self.records[str(cluster_id)] = data
        self._flush()
        logger.debug(f"Saved cluster {cluster.name} as {cluster_id}")
        return cluster_id

    def update_status(
        self, cluster_id: int, status: ClusterStatus, message: str
    ) -> None:
        record = self._record(cluster_id)
        record["status"] = ClusterStatus(status).value
        record["status_message"] = message
        self._flush()

    def update_ssh_secret(self, cluster_id: int, ssh_secret_id: str) -> None:
        self._record(cluster_id)["ssh_secret_id"] = ssh_secret_id
        self._flush()

    def update_config_secret(self, cluster_id: int, config_secret_id: str) -> None:
        self._record(cluster_id)["config_secret_id"] = config_secret_id
        self._flush()

    def delete(self, cluster_id: int) -> None:
        # Provider rows (spec, node pools) are nested in the record
        self._record(cluster_id)
        del self.records[str(cluster_id)]
        self._flush()
