"""Load the three representations of one asset from a JSON snapshot file.

Layout::

    {
      "kind": "achievement",
      "notes": {"0x1234": "lives"},
      "generated": {"ID": 0, "Title": "...", "MemAddr": "0xH1234=3"},
      "local": null,
      "published": {"ID": 12, "Title": "...", "Flags": 3, "MemAddr": "..."}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError, field_validator

from assetsync.adapters.published.schema import AssetPayload, PublishedBaseModel
from assetsync.adapters.published.translator import parse_asset
from assetsync.domain.model import AssetKind

if TYPE_CHECKING:
    from pathlib import Path

    from assetsync.domain.model import Asset

log = getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or interpreted."""


class SnapshotFile(PublishedBaseModel):
    kind: AssetKind = AssetKind.ACHIEVEMENT
    notes: dict[int, str] = Field(default_factory=dict)
    generated: AssetPayload | None = None
    local: AssetPayload | None = None
    published: AssetPayload | None = None

    @field_validator("notes", mode="before")
    @classmethod
    def _parse_addresses(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        return {_parse_address(str(key)): note for key, note in value.items()}


@dataclass(frozen=True, slots=True)
class AssetSnapshot:
    kind: AssetKind
    generated: Asset | None = None
    local: Asset | None = None
    published: Asset | None = None
    notes: dict[int, str] = field(default_factory=dict)


def load_snapshot(path: Path) -> AssetSnapshot:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}") from exc
    return parse_snapshot(raw, source=str(path))


def parse_snapshot(raw: str, *, source: str = "<snapshot>") -> AssetSnapshot:
    try:
        data = SnapshotFile.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {source}: {exc}") from exc

    try:
        snapshot = AssetSnapshot(
            kind=data.kind,
            generated=_translate(data.generated, data.kind),
            local=_translate(data.local, data.kind),
            published=_translate(data.published, data.kind),
            notes=data.notes,
        )
    except ValueError as exc:
        raise SnapshotError(f"Invalid trigger in snapshot {source}: {exc}") from exc

    log.debug(
        "Loaded %s snapshot from %s: generated=%s, local=%s, published=%s",
        snapshot.kind,
        source,
        snapshot.generated is not None,
        snapshot.local is not None,
        snapshot.published is not None,
    )
    return snapshot


def _translate(payload: AssetPayload | None, kind: AssetKind) -> Asset | None:
    if payload is None:
        return None
    return parse_asset(payload, kind)


def _parse_address(key: str) -> int:
    text = key.strip().lower()
    if text.startswith("0x"):
        return int(text[2:], 16)
    return int(text)
