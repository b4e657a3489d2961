"""Command-line front door for relaylist.

Loads a catalog snapshot and optional custom-list store, applies relay
constraints, and prints the flat location list (or the filtered catalog as
JSON).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import config
from .highlight import DEFAULT_STYLE, colorize_json
from .list_model.expansion import ExpansionKey, expand_all, initial_expansion, prune_expansion
from .list_model.rendering import format_relay_list
from .list_pane.sync import ListViewport, SelectionScrollCoordinator
from .pipeline import RelayListSnapshot, derive
from .relay_model.catalog import (
    CatalogFormatError,
    CustomListRecord,
    dump_countries,
    load_catalog,
    parse_custom_lists,
    parse_recents,
    read_json_document,
    resolve_custom_lists,
)
from .relay_model.filtering import ANY, Only, RelayFilter
from .relay_model.lookup import canonical_item_id
from .relay_model.types import Country, Ownership, RelayItemId, parse_geo_location_id
from .ui_theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def parse_item_id(
    value: str,
    custom_lists: Sequence[CustomListRecord],
    countries: Sequence[Country] = (),
) -> RelayItemId:
    """Resolve a CLI id: custom-list ids take precedence over location codes.

    Relay hostnames resolve to the id the catalog files them under.
    """
    for record in custom_lists:
        if record.id.value == value:
            return record.id
    try:
        geo_id = parse_geo_location_id(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid location id: {value!r}") from exc
    return canonical_item_id(countries, geo_id)


def relay_filter_from_args(args: argparse.Namespace, base: RelayFilter) -> RelayFilter:
    """Overlay explicit CLI constraints on the persisted ones.

    ``--ownership any``, ``--any-provider`` and ``--no-daita`` clear a
    persisted constraint instead of leaving it in place.
    """
    ownership = base.ownership
    if args.ownership == "any":
        ownership = ANY
    elif args.ownership is not None:
        ownership = Only(Ownership(args.ownership))
    providers = base.providers
    if args.any_provider:
        providers = ANY
    elif args.provider:
        providers = Only(frozenset(args.provider))
    daita = base.daita
    if args.daita is not None:
        daita = args.daita
    return RelayFilter(ownership=ownership, providers=providers, daita=daita)


def recents_enabled_from_args(args: argparse.Namespace, base: bool) -> bool:
    return base if args.recents is None else args.recents


def _load_lists(path: Path | None) -> tuple[list[CustomListRecord], list[RelayItemId]]:
    if path is None:
        return [], []
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    document = read_json_document(path)
    return parse_custom_lists(document), parse_recents(document)


def render_relay_list(lines: list[str], rows: int | None, viewport_start: int) -> str:
    """Join rendered rows, optionally clipped to a ``rows``-high window."""
    if rows is not None:
        lines = lines[viewport_start : viewport_start + rows]
    return "".join(line + "\n" for line in lines)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and print the relay list for a catalog file."""
    parser = argparse.ArgumentParser(description="Filter a relay catalog and print the location list.")
    parser.add_argument("catalog", help="Path to a relay-list JSON document.")
    parser.add_argument("--lists", metavar="PATH", help="Custom lists and recents JSON document.")
    parser.add_argument("--ownership", choices=("owned", "rented", "any"), default=None, help="Ownership constraint.")
    provider_group = parser.add_mutually_exclusive_group()
    provider_group.add_argument("--provider", action="append", default=[], help="Allowed provider (repeatable).")
    provider_group.add_argument("--any-provider", action="store_true", help="Clear the provider constraint.")
    daita_group = parser.add_mutually_exclusive_group()
    daita_group.add_argument("--daita", dest="daita", action="store_true", default=None, help="Only show DAITA-capable relays.")
    daita_group.add_argument("--no-daita", dest="daita", action="store_false", default=None, help="Clear the DAITA constraint.")
    recents_group = parser.add_mutually_exclusive_group()
    recents_group.add_argument("--recents", dest="recents", action="store_true", default=None, help="Show the recents section.")
    recents_group.add_argument("--no-recents", dest="recents", action="store_false", default=None, help="Hide the recents section.")
    parser.add_argument("--select", metavar="ID", default=None, help="Selected location code or custom-list id.")
    parser.add_argument("--expand", metavar="ID", action="append", default=[], help="Expand a location or custom list.")
    parser.add_argument("--expand-all", action="store_true", help="Expand every location and custom list.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Print only a window centred on the selection.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--json", action="store_true", help="Print the filtered catalog as JSON.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --json output.")
    parser.add_argument("--save-filters", action="store_true", help="Persist the effective constraints and recents toggle.")
    parser.add_argument("--verbose", action="store_true", help="Log skipped catalog entries.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )

    catalog_path = Path(args.catalog)
    if not catalog_path.exists():
        raise SystemExit(f"Path not found: {catalog_path}")
    try:
        countries = load_catalog(catalog_path)
        records, recents = _load_lists(Path(args.lists) if args.lists else None)
    except CatalogFormatError as exc:
        raise SystemExit(str(exc)) from exc

    relay_filter = relay_filter_from_args(args, config.load_relay_filter())
    recents_enabled = recents_enabled_from_args(args, config.load_recents_enabled())
    if args.save_filters:
        config.save_relay_filter(relay_filter)
        config.save_recents_enabled(recents_enabled)

    selected = parse_item_id(args.select, records, countries) if args.select else None
    resolved_lists = resolve_custom_lists(records, countries)
    if args.expand_all:
        expanded = expand_all(countries, resolved_lists)
    else:
        expanded = initial_expansion(selected) | {
            ExpansionKey(parse_item_id(value, records, countries)) for value in args.expand
        }
    expanded = prune_expansion(expanded, countries, resolved_lists)

    state = derive(
        RelayListSnapshot(
            countries=tuple(countries),
            custom_lists=tuple(records),
            recents=tuple(recents),
            relay_filter=relay_filter,
            expanded=expanded,
            selected=selected,
            recents_enabled=recents_enabled,
        )
    )

    if args.json:
        text = json.dumps(dump_countries(state.countries), indent=2) + "\n"
        if not args.no_color and sys.stdout.isatty():
            text = colorize_json(text, args.style)
        sys.stdout.write(text)
        return

    theme = resolve_theme(args.theme, no_color=args.no_color)
    viewport = ListViewport(visible_rows=args.rows or 0)
    coordinator = SelectionScrollCoordinator()
    coordinator.on_render(state.items, viewport)
    viewport = coordinator.settle(state.items, viewport)
    lines = format_relay_list(list(state.items), theme)
    sys.stdout.write(render_relay_list(lines, args.rows, viewport.first_visible_index))


if __name__ == "__main__":
    main()
