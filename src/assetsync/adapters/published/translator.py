"""Translate published asset payloads into domain assets."""

from __future__ import annotations

from logging import getLogger

from assetsync.domain.model import (
    Achievement,
    Asset,
    AssetKind,
    Leaderboard,
    RichPresence,
    Trigger,
    ValueFormat,
)

from .memaddr import parse_trigger
from .schema import AssetPayload, AssetPayloadInput

log = getLogger(__name__)

ACHIEVEMENT_TRIGGER_LABEL = "Requirements"
_LEADERBOARD_PARTS = {"STA": "start", "CAN": "cancel", "SUB": "submit", "VAL": "value"}


def _ensure_payload(payload: AssetPayloadInput) -> AssetPayload:
    if isinstance(payload, AssetPayload):
        return payload
    return AssetPayload.model_validate(payload)


def parse_asset(
    payload: AssetPayloadInput,
    kind: AssetKind,
    *,
    unofficial: bool | None = None,
) -> Asset:
    if kind is AssetKind.LEADERBOARD:
        return parse_leaderboard(payload, unofficial=unofficial)
    if kind is AssetKind.RICH_PRESENCE:
        return parse_rich_presence(payload, unofficial=unofficial)
    return parse_achievement(payload, unofficial=unofficial)


def parse_achievement(
    payload: AssetPayloadInput,
    *,
    unofficial: bool | None = None,
) -> Achievement:
    """Return an Achievement.

    ``unofficial`` overrides the payload flags; the game endpoint only reports
    the requested flag set, not a per-achievement one.
    """

    data = _ensure_payload(payload)
    triggers: tuple[Trigger, ...] = ()
    if data.mem_addr:
        triggers = (parse_trigger(data.mem_addr, label=ACHIEVEMENT_TRIGGER_LABEL),)
    else:
        log.warning("Achievement %s (%s) has no trigger definition", data.id, data.title)

    return Achievement(
        id=data.id,
        title=data.title,
        description=data.description,
        points=data.points,
        badge_name=data.badge_name,
        source_line=data.source_line,
        triggers=triggers,
        is_unofficial=data.is_unofficial if unofficial is None else unofficial,
    )


def parse_leaderboard(
    payload: AssetPayloadInput,
    *,
    unofficial: bool | None = None,
) -> Leaderboard:
    data = _ensure_payload(payload)
    parts = _split_leaderboard_mem(data.mem)
    try:
        value_format = ValueFormat(data.format.upper())
    except ValueError:
        log.warning("Unknown leaderboard format %r on %s, using OTHER", data.format, data.id)
        value_format = ValueFormat.OTHER

    return Leaderboard(
        id=data.id,
        title=data.title,
        description=data.description,
        badge_name=data.badge_name,
        source_line=data.source_line,
        is_unofficial=data.is_unofficial if unofficial is None else unofficial,
        format=value_format,
        lower_is_better=data.lower_is_better,
        **{
            attribute: parse_trigger(text, label=attribute.capitalize())
            for attribute, text in parts.items()
        },
    )


def parse_rich_presence(
    payload: AssetPayloadInput,
    *,
    unofficial: bool | None = None,
) -> RichPresence:
    data = _ensure_payload(payload)
    triggers = _display_conditions(data.script)
    return RichPresence(
        id=data.id,
        title=data.title or "Rich Presence",
        description=data.description,
        source_line=data.source_line,
        is_unofficial=data.is_unofficial if unofficial is None else unofficial,
        script=data.script,
        triggers=triggers,
    )


def _split_leaderboard_mem(mem: str) -> dict[str, str]:
    parts: dict[str, str] = {}
    for section in mem.split("::"):
        if not section:
            continue
        code, _, text = section.partition(":")
        attribute = _LEADERBOARD_PARTS.get(code.upper())
        if attribute is None:
            raise ValueError(f"Unknown leaderboard section {code!r}")
        parts[attribute] = text
    return parts


def _display_conditions(script: str) -> tuple[Trigger, ...]:
    """Conditional display lines look like ``?0xH1234=1?Text``."""

    triggers: list[Trigger] = []
    in_display = False
    for raw_line in script.splitlines():
        line = raw_line.strip()
        if not in_display:
            in_display = line.lower() == "display:"
            continue
        if not line:
            continue
        if not line.startswith("?"):
            # the unconditional default ends the display section
            break
        condition, _, text = line[1:].partition("?")
        triggers.append(parse_trigger(condition, label=text))
    return tuple(triggers)
