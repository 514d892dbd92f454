"""Helpers shared by CLI commands."""

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn

import typer

from memodeck.application.config import AppConfig, resolve_config
from memodeck.application.scheduler import utcnow
from memodeck.domain.models import DeckLimits
from memodeck.infrastructure.deck_file import DeckSnapshot, as_utc, load_deck


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, letting explicitly passed CLI options win."""
    return resolve_config({k: v for k, v in overrides.items() if v is not None})


def parse_now(value: str | None) -> datetime:
    """Parse an ISO-8601 `--now` value; naive values are UTC. Defaults to the current time."""
    if value is None:
        return utcnow()
    try:
        return as_utc(datetime.fromisoformat(value))
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not an ISO-8601 timestamp") from None


def load_snapshot(path: Path, now: datetime, config: AppConfig) -> DeckSnapshot:
    defaults = DeckLimits(
        daily_new_limit=config.daily_new_limit,
        daily_review_limit=config.daily_review_limit,
    )
    return load_deck(path, now, defaults=defaults)


def fail(message: str) -> NoReturn:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(1)


def _json_default(o: Any) -> Any:
    if is_dataclass(o) and not isinstance(o, type):
        return asdict(o)
    if isinstance(o, datetime):
        return o.isoformat()
    if isinstance(o, Enum):
        return o.value
    if isinstance(o, Path):
        return str(o)
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def echo_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, default=_json_default))
