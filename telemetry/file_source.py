"""
File-based Telemetry Source

Loads circuit snapshots and breach history from one JSON document:

    {"circuits": [...], "breachEvents": [...]}

A missing file yields an empty source. A malformed document raises at load.
"""

import json
import logging
from pathlib import Path
from typing import Union

from schemas.circuit import BreachEvent, CircuitRow
from telemetry.source import InMemoryTelemetrySource


logger = logging.getLogger(__name__)


class FileTelemetrySource(InMemoryTelemetrySource):
    """JSON file-backed telemetry, read once at construction."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

        circuits = []
        events = []

        if self._path.exists():
            with open(self._path, "r", encoding="utf-8") as f:
                document = json.load(f)

            circuits = [CircuitRow.model_validate(item) for item in document.get("circuits", [])]
            events = [BreachEvent.model_validate(item) for item in document.get("breachEvents", [])]
            logger.info(
                f"Loaded telemetry from {self._path}: "
                f"{len(circuits)} circuits, {len(events)} breach events"
            )
        else:
            logger.warning(f"Telemetry file not found: {self._path}; serving no circuits")

        super().__init__(circuits=circuits, breach_events=events)

    @property
    def path(self) -> Path:
        return self._path
