"""Helpers shared by CLI commands."""

import asyncio
import logging
from typing import Any

import typer

from lexideck.application.config import AppConfig, resolve_config
from lexideck.application.factory import build_session
from lexideck.application.session import StudySession
from lexideck.domain.exceptions import LexideckError
from lexideck.domain.models import Rating

RATING_DIGITS = {
    "1": Rating.FAIL,
    "2": Rating.HARD,
    "3": Rating.GOOD,
    "4": Rating.EASY,
}


def _resolve_with_overrides(verbose: int | None = None, **overrides: Any) -> AppConfig:
    """Resolve config, dropping unset CLI options, and apply verbosity."""
    config = resolve_config({"verbose": verbose, **overrides})
    if config.verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    return config


def parse_rating(value: str) -> Rating:
    """Accept a rating name (fail/hard/good/easy, or again) or a digit 1-4."""
    value = value.strip()
    if value in RATING_DIGITS:
        return RATING_DIGITS[value]
    try:
        return Rating(value)
    except ValueError:
        raise typer.BadParameter(
            f"'{value}' is not a rating. Use fail, hard, good, easy or 1-4."
        ) from None


def fail(e: LexideckError) -> typer.Exit:
    typer.secho(f"Error: {e}", fg="red", err=True)
    return typer.Exit(1)


def open_session(config: AppConfig) -> StudySession:
    """Build a session and load catalog + progress, exiting cleanly on failure."""
    session = build_session(config)
    try:
        asyncio.run(session.reload())
    except LexideckError as e:
        raise fail(e) from e
    return session
