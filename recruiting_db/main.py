"""CLI entry point: serve the browser, or query and ingest from the shell."""

import argparse
import json
import logging
import sys

import requests

from recruiting_db.browser import ProfileTableView
from recruiting_db.config import AppConfig, load_config, validate_config
from recruiting_db.errors import DownstreamFailure, RecruitingDBError
from recruiting_db.ingest.proxy import IngestProxy
from recruiting_db.profiles.models import TAG_LABELS, Profile
from recruiting_db.profiles.query import QueryState, SortDirection, SortField
from recruiting_db.profiles.selection import DetailStatus, load_detail
from recruiting_db.storage.store import create_store
from recruiting_db.utils.logging_config import setup_logging

logger = logging.getLogger("recruiting_db")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recruiting-db",
        description="Recruiting Database - browse candidate profiles and forward ingestion requests",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config file (default: environment only)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web UI and API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    list_cmd = sub.add_parser("list", help="Print profiles matching the given filters")
    list_cmd.add_argument("--search", default="", help="Match name, company, title or location")
    list_cmd.add_argument("--skill", action="append", default=[], help="Skill tag (repeatable)")
    list_cmd.add_argument("--focus", action="append", default=[], help="Focus area tag (repeatable)")
    list_cmd.add_argument("--excellence", action="append", default=[], help="Excellence tag (repeatable)")
    list_cmd.add_argument("--domain", action="append", default=[], help="Domain tag (repeatable)")
    list_cmd.add_argument("--sort", choices=[f.value for f in SortField], default=None)
    list_cmd.add_argument("--desc", action="store_true", help="Sort descending")

    show = sub.add_parser("show", help="Print one profile")
    show.add_argument("profile_id")

    sub.add_parser("tags", help="Print every tag per category")

    ingest = sub.add_parser("ingest", help="Forward a JSON file to the ingestion function")
    ingest.add_argument("file", help="JSON with linkedin_url, raw_json and canonical_json")

    return parser.parse_args(argv)


def query_from_args(args: argparse.Namespace) -> QueryState:
    return QueryState(
        search_query=args.search.strip(),
        selected_skills=frozenset(args.skill),
        selected_focus_areas=frozenset(args.focus),
        selected_excellence=frozenset(args.excellence),
        selected_domains=frozenset(args.domain),
        sort_field=SortField(args.sort) if args.sort else None,
        sort_direction=SortDirection.DESC if args.desc else SortDirection.ASC,
    )


def _na(value) -> str:
    return "N/A" if value is None or value == "" else str(value)


def print_profiles(view: ProfileTableView):
    print(f"\nShowing {len(view.visible)} of {len(view.profiles)} profiles")
    for p in view.visible:
        print(
            f"  {p.id}  {_na(p.full_name)} | {_na(p.current_title)} @ {_na(p.current_company)}"
            f" | {_na(p.location_resolved)} | {_na(p.years_experience)} yrs"
            f" ({_na(p.years_at_current_company)} @ co)"
        )
    print()


def print_profile(profile: Profile):
    print(f"\n=== {profile.full_name or 'Unnamed Profile'} ===")
    print(f"Location: {_na(profile.location_resolved)}")
    print(f"Current Company: {_na(profile.current_company)}")
    print(f"Current Title: {_na(profile.current_title)}")
    print(f"Years of Experience: {_na(profile.years_experience)}")
    print(f"Years at Current Company: {_na(profile.years_at_current_company)}")
    print(f"LinkedIn: {_na(profile.linkedin_url)}")
    for category, label in TAG_LABELS.items():
        tags = profile.tags(category)
        if tags:
            print(f"{label}: {', '.join(tags)}")
    if profile.notes:
        print(f"\nNotes:\n{profile.notes}")
    if profile.created_at:
        print(f"\nCreated: {profile.created_at}")
    if profile.updated_at:
        print(f"Updated: {profile.updated_at}")
    print()


def print_tags(view: ProfileTableView):
    for category, tags in view.vocabulary.items():
        print(f"{TAG_LABELS[category]} ({len(tags)}):")
        for tag in tags:
            print(f"  {tag}")


def run_ingest(config: AppConfig, path: str) -> int:
    try:
        with open(path, "r", encoding="utf-8") as f:
            body = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return 1

    try:
        data = IngestProxy(config).forward(body)
    except DownstreamFailure as e:
        print(f"Error ({e.status_code}): {e.message}", file=sys.stderr)
        return 1
    except RecruitingDBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Error: ingestion request failed: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: invalid response from ingestion function: {e}", file=sys.stderr)
        return 1

    print(json.dumps(data, indent=2))
    return 0


def serve(config: AppConfig, host=None, port=None):
    import uvicorn

    from recruiting_db.web.app import create_app

    uvicorn.run(
        create_app(config),
        host=host or config.web.host,
        port=port or config.web.port,
        log_config=None,
    )


def main(argv=None) -> int:
    args = parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_dir, config.log_level)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    if args.command == "serve":
        serve(config, args.host, args.port)
        return 0

    if args.command == "ingest":
        return run_ingest(config, args.file)

    try:
        store = create_store(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "show":
        detail = load_detail(store, args.profile_id)
        if detail.status == DetailStatus.NOT_FOUND:
            print(f"Profile not found: {args.profile_id}", file=sys.stderr)
            return 1
        print_profile(detail.profile)
        return 0

    view = ProfileTableView(store, query=query_from_args(args) if args.command == "list" else None)
    view.load()
    if args.command == "tags":
        print_tags(view)
    else:
        print_profiles(view)
    return 0


if __name__ == "__main__":
    sys.exit(main())
