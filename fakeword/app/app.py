"""Application wiring for the fakeword project."""

from __future__ import annotations

import random
import threading
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fakeword.config import FakeWordSettings, share_interface
from fakeword.core import (
    CMUDictLoader,
    ConnectionMode,
    FakeWordGenerator,
    SnapshotError,
    SonorityGraph,
    SyllabifiedCorpus,
    SyllableConnections,
    WordGenConfig,
)
from fakeword.utils.observability import get_logger
from fakeword.utils.telemetry import StructuredTelemetry, TelemetryLogger

from .data.cache_store import CORPUS, SONORITY_GRAPH, SYLLABLE_CONNECTIONS, SnapshotCache

T = TypeVar("T")


def connections_artefact(mode: ConnectionMode | str) -> str:
    return f"{SYLLABLE_CONNECTIONS}-{ConnectionMode(mode).value}"


class FakeWordApp:
    """High-level facade that loads or builds the models and generates words.

    One instance is shared by every UI request. The sonority graph and the
    connection tables are never mutated once loaded; each connection mode
    gets its own table, loaded on first use under ``_model_lock``.
    """

    def __init__(
        self,
        settings: Optional[FakeWordSettings] = None,
        *,
        cache: Optional[SnapshotCache] = None,
        telemetry: Optional[StructuredTelemetry] = None,
        connection_mode: ConnectionMode | str = ConnectionMode.WEIGHTED,
    ) -> None:
        self.settings = settings or FakeWordSettings.from_env()
        self.cache = cache or SnapshotCache(
            self.settings.cache_dir,
            fingerprint=self.settings.fingerprint(),
        )
        self.telemetry = telemetry or StructuredTelemetry(listeners=[TelemetryLogger()])
        self.connection_mode = ConnectionMode(connection_mode)
        self._logger = get_logger(__name__).bind(component="app_facade")

        self._model_lock = threading.RLock()
        self._corpus: Optional[SyllabifiedCorpus] = None
        self._connection_tables: Dict[ConnectionMode, SyllableConnections] = {}
        self.sonority_graph = SonorityGraph()
        self.initialize()

    # Initialisation ----------------------------------------------------------
    def initialize(self) -> None:
        """Load every artefact from the cache, rebuilding whatever is missing."""

        with self._model_lock:
            self.telemetry.start_trace("Initializing fake word generator")
            self._corpus = None
            self._connection_tables = {}

            connections_name = connections_artefact(self.connection_mode)
            if not self.cache.exists(SONORITY_GRAPH) or not self.cache.exists(connections_name):
                self._corpus = self._load_or_build(
                    CORPUS,
                    SyllabifiedCorpus.from_snapshot,
                    self._build_corpus,
                )

            self.sonority_graph = self._load_or_build(
                SONORITY_GRAPH,
                SonorityGraph.from_snapshot,
                lambda: SonorityGraph.from_corpus(self.corpus),
            )
            table = self.connections_for(self.connection_mode)

        self._logger.info(
            "Generator ready",
            context={
                "graph_nodes": len(self.sonority_graph),
                "boundaries": len(table),
                "mode": self.connection_mode.value,
            },
        )

    def _load_or_build(
        self,
        name: str,
        decode: Callable[[Dict[str, Any]], T],
        build: Callable[[], T],
    ) -> T:
        with self.telemetry.phase(f"Generating {name}") as phase:
            payload = self.cache.load(name)
            if payload is not None:
                try:
                    self.cache.verify(name, payload)
                    artefact = decode(payload)
                except SnapshotError as exc:
                    self.cache.mark_invalid(name, exc)
                else:
                    phase["source"] = "cache"
                    self.telemetry.increment("cache.hit")
                    return artefact

            self.telemetry.increment("cache.rebuild")
            phase["source"] = "rebuilt"
            artefact = build()
            self.cache.save(name, artefact.to_snapshot())  # type: ignore[attr-defined]
            return artefact

    def _build_corpus(self) -> SyllabifiedCorpus:
        loader = CMUDictLoader(
            self.settings.dict_path,
            self.settings.frequency_path,
            frequency_limit=self.settings.frequency_limit,
            max_workers=self.settings.max_workers,
        )
        corpus = loader.load()
        self.telemetry.annotate("corpus.words", len(corpus))
        self.telemetry.annotate("corpus.malformed", loader.malformed_entries)
        return corpus

    @property
    def corpus(self) -> SyllabifiedCorpus:
        with self._model_lock:
            if self._corpus is None:
                self._corpus = self._load_or_build(
                    CORPUS,
                    SyllabifiedCorpus.from_snapshot,
                    self._build_corpus,
                )
            return self._corpus

    def connections_for(self, mode: ConnectionMode | str) -> SyllableConnections:
        """Return the connection table for ``mode``, loading it on first use."""

        mode = ConnectionMode(mode)
        table = self._connection_tables.get(mode)
        if table is not None:
            return table

        with self._model_lock:
            table = self._connection_tables.get(mode)
            if table is None:
                table = self._load_or_build(
                    connections_artefact(mode),
                    SyllableConnections.from_snapshot,
                    lambda: SyllableConnections.from_corpus(self.corpus, mode),
                )
                self._connection_tables[mode] = table
            return table

    @property
    def syllable_connections(self) -> SyllableConnections:
        """Connection table of the default mode."""

        return self.connections_for(self.connection_mode)

    def rebuild(self) -> None:
        """Drop every cached snapshot and rebuild from the raw corpus."""

        with self._model_lock:
            removed = self.cache.clear()
            self._logger.info("Snapshot cache cleared", context={"removed": removed})
            self.initialize()

    # Public API --------------------------------------------------------------
    def create_generator(
        self,
        config: Optional[WordGenConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> FakeWordGenerator:
        config = config or WordGenConfig(connection_mode=self.connection_mode)
        return FakeWordGenerator(
            self.sonority_graph,
            self.connections_for(config.connection_mode),
            config,
            rng=rng,
        )

    def generate_words(
        self,
        count: int = 10,
        config: Optional[WordGenConfig] = None,
    ) -> List[Dict[str, Any]]:
        generator = self.create_generator(config)
        return [word.as_dict() for word in generator.generate_words(count)]

    def create_gradio_interface(self):
        from fakeword.app.ui.gradio import create_interface

        return create_interface(self)


def main() -> None:
    from fakeword.utils.logging_config import configure_logging

    configure_logging()
    app = FakeWordApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=share_interface(),
    )


__all__ = ["FakeWordApp", "connections_artefact", "main"]
