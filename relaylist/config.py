"""Persistent JSON config helpers.

Stores the relay constraints (ownership, providers, DAITA) and the recents
toggle. All access is defensive: malformed or missing config falls back to
the match-everything defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .relay_model.filtering import ANY, Constraint, Only, RelayFilter
from .relay_model.types import Ownership

APP_NAME = "relaylist"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep callers non-fatal when config
    cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _ownership_constraint(value: object) -> Constraint:
    """Map ``"owned"``/``"rented"`` to ``Only``; anything else means any."""
    if not isinstance(value, str):
        return ANY
    try:
        return Only(Ownership(value))
    except ValueError:
        return ANY


def _providers_constraint(value: object) -> Constraint:
    """Accept a list of provider names; non-string members are dropped."""
    if not isinstance(value, list):
        return ANY
    return Only(frozenset(item for item in value if isinstance(item, str) and item))


def load_relay_filter() -> RelayFilter:
    """Return the persisted relay constraints with invalid values reset."""
    config = load_config()
    daita = config.get("daita")
    return RelayFilter(
        ownership=_ownership_constraint(config.get("ownership")),
        providers=_providers_constraint(config.get("providers")),
        daita=daita if isinstance(daita, bool) else False,
    )


def save_relay_filter(relay_filter: RelayFilter) -> None:
    """Persist relay constraints; ``ANY`` constraints are stored as absent keys."""
    config = load_config()
    config.pop("ownership", None)
    config.pop("providers", None)
    if isinstance(relay_filter.ownership, Only) and isinstance(relay_filter.ownership.value, Ownership):
        config["ownership"] = relay_filter.ownership.value.value
    if isinstance(relay_filter.providers, Only):
        config["providers"] = sorted(str(item) for item in relay_filter.providers.value)
    config["daita"] = bool(relay_filter.daita)
    save_config(config)


def load_recents_enabled() -> bool:
    """Return persisted recents visibility; only explicit ``false`` disables it."""
    value = load_config().get("recents_enabled")
    return value if isinstance(value, bool) else True


def save_recents_enabled(enabled: bool) -> None:
    config = load_config()
    config["recents_enabled"] = bool(enabled)
    save_config(config)
