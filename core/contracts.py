"""Data contracts for dispatch-loop results."""

from dataclasses import dataclass, field


@dataclass(slots=True)
class UploadAttempt:
    camera: str = ""
    endpoint: str = ""
    kind: str = ""  # "info"/"image"
    ok: bool = False
    error: str | None = None


@dataclass(slots=True)
class TickReport:
    started_at: float = 0.0
    gate_open: bool = False
    captured: list[str] = field(default_factory=list)
    uploads: list[UploadAttempt] = field(default_factory=list)

    @property
    def failed_uploads(self) -> list[UploadAttempt]:
        return [u for u in self.uploads if not u.ok]


__all__ = [
    "UploadAttempt",
    "TickReport",
]
