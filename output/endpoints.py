"""EndpointTable: ordered upload destinations and their cadences."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from core.config import ConfigError


@dataclass(frozen=True)
class EndpointConfig:
    name: str
    interval: int
    snapshot_url: str
    info_url: str | None = None


def build_endpoint_config(cfg_block) -> EndpointConfig:
    return EndpointConfig(
        name=str(cfg_block.name),
        interval=int(cfg_block.interval),
        snapshot_url=str(cfg_block.snapshot_url),
        info_url=str(cfg_block.info_url) if cfg_block.info_url else None,
    )


class EndpointTable:
    def __init__(self, endpoints: Iterable[EndpointConfig]):
        self._entries = tuple(endpoints)
        if not self._entries:
            raise ConfigError("at least one endpoint is required")
        for ep in self._entries:
            if ep.interval < 1:
                raise ConfigError(f"endpoint {ep.name!r} interval must be > 0")
        self._min_cadence = min(ep.interval for ep in self._entries)

    def __iter__(self) -> Iterator[EndpointConfig]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def min_cadence(self) -> int:
        return self._min_cadence

    def due(self, since: int) -> list[EndpointConfig]:
        """Entries whose interval is strictly below `since`, in configured order."""
        return [ep for ep in self._entries if since > ep.interval]


def build_endpoint_table_from_loaded_config(cfg) -> EndpointTable:
    return EndpointTable(build_endpoint_config(block) for block in cfg.endpoints)


__all__ = [
    "EndpointConfig",
    "EndpointTable",
    "build_endpoint_config",
    "build_endpoint_table_from_loaded_config",
]
