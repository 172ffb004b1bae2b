"""On-disk snapshot cache for the corpus and the two generative models."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from fakeword.core.errors import SnapshotError
from fakeword.utils.observability import create_counter, get_logger

CORPUS = "syllabified-phonemes"
SONORITY_GRAPH = "sonority-graph"
SYLLABLE_CONNECTIONS = "syllable-connections"

CACHE_LOOKUPS = create_counter(
    "fakeword_cache_lookups",
    "Snapshot cache lookups by artefact and outcome.",
    ("artefact", "outcome"),
)


class SnapshotCache:
    """Stores one JSON snapshot per artefact under ``cache_dir``.

    Snapshots are derived data. Anything that cannot be read back is reported
    as a miss so the caller rebuilds from the raw corpus. When a
    ``fingerprint`` of the corpus settings is given, every saved payload is
    stamped with it and :meth:`verify` rejects payloads stamped differently.
    """

    def __init__(self, cache_dir: Path | str, *, fingerprint: Optional[str] = None) -> None:
        self.cache_dir = Path(cache_dir)
        self.fingerprint = fingerprint
        self._logger = get_logger(__name__).bind(component="snapshot_cache")

    def path_for(self, name: str) -> Path:
        return self.cache_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(name)
        if not path.is_file():
            CACHE_LOOKUPS.labels(artefact=name, outcome="missing").inc()
            self._logger.info("Snapshot not found", context={"artefact": name})
            return None

        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            CACHE_LOOKUPS.labels(artefact=name, outcome="unreadable").inc()
            self._logger.warning(
                "Snapshot unreadable",
                context={"artefact": name, "error": str(exc)},
            )
            return None

        if not isinstance(payload, dict):
            CACHE_LOOKUPS.labels(artefact=name, outcome="unreadable").inc()
            self._logger.warning("Snapshot is not a JSON object", context={"artefact": name})
            return None

        CACHE_LOOKUPS.labels(artefact=name, outcome="hit").inc()
        return payload

    def save(self, name: str, payload: Dict[str, Any]) -> Path:
        """Write ``payload`` atomically and return the snapshot path."""

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        if self.fingerprint is not None:
            payload = dict(payload, source=self.fingerprint)
        target = self.path_for(name)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.cache_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, separators=(",", ":"))
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self._logger.info("Snapshot written", context={"artefact": name, "path": str(target)})
        return target

    def verify(self, name: str, payload: Dict[str, Any]) -> None:
        """Raise :class:`SnapshotError` if ``payload`` came from other corpus settings."""

        if self.fingerprint is None:
            return
        stamped = payload.get("source")
        if stamped != self.fingerprint:
            raise SnapshotError(
                f"Snapshot {name!r} was built from different corpus settings ({stamped!r})"
            )

    def mark_invalid(self, name: str, error: Exception) -> None:
        CACHE_LOOKUPS.labels(artefact=name, outcome="invalid").inc()
        self._logger.warning(
            "Snapshot rejected, rebuilding",
            context={"artefact": name, "error": str(error)},
        )

    def invalidate(self, name: str) -> bool:
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        self._logger.info("Snapshot invalidated", context={"artefact": name})
        return True

    def clear(self) -> int:
        if not self.cache_dir.is_dir():
            return 0
        removed = 0
        for path in self.cache_dir.glob("*.json"):
            path.unlink()
            removed += 1
        return removed


__all__ = [
    "CORPUS",
    "SONORITY_GRAPH",
    "SYLLABLE_CONNECTIONS",
    "SnapshotCache",
]
