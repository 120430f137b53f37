import argparse
import json
import logging
import sys
from typing import Optional

from rich.console import Console

from client import HevyClient, HevyClientError
from config import APP_VERSION, YamlConfig, resolve_api_key
from report_service import PerformanceReportService, parse_payload

logger = logging.getLogger(__name__)

EPILOG = """\
authentication:
  All API commands require a Hevy API key (Hevy Pro).
  Get yours at: https://hevy.com/settings?developer

  The key is resolved in this order:
    1. --api-key <KEY>
    2. HEVY_API_KEY environment variable
    3. Persisted config via `hevy-bridge config set-key <KEY>`

output:
  Data commands print JSON to stdout for piping into jq or scripts.
  process-workout prints a table comparing each set with its routine target.
"""


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def parse_body(raw: str, command: str) -> dict:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON body ({e}). See `hevy-bridge {command} --help`."
        ) from e


def add_paging(parser: argparse.ArgumentParser, max_size: int = 10) -> None:
    parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    parser.add_argument(
        "--page-size", type=int, default=5, help=f"Items per page (max {max_size})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hevy-bridge",
        description="CLI client for the Hevy workout tracking API",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=APP_VERSION)
    parser.add_argument("--api-key", help="Hevy API key (overrides env and config)")
    parser.add_argument("--config", help="Path to the config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    cfg = sub.add_parser("config", help="Manage API key configuration")
    cfg_sub = cfg.add_subparsers(dest="action", required=True)
    set_key = cfg_sub.add_parser("set-key", help="Persist the API key")
    set_key.add_argument("key")
    cfg_sub.add_parser("path", help="Print the config file path")

    user = sub.add_parser("user", help="Authenticated user information")
    user_sub = user.add_subparsers(dest="action", required=True)
    user_sub.add_parser("info")

    wk = sub.add_parser("workouts", help="List, view, create and update workouts")
    wk_sub = wk.add_subparsers(dest="action", required=True)
    add_paging(wk_sub.add_parser("list"))
    wk_sub.add_parser("get").add_argument("id")
    wk_sub.add_parser("count")
    events = wk_sub.add_parser("events", help="Workout updates and deletes")
    add_paging(events)
    events.add_argument("--since", help="ISO 8601 date, e.g. 2024-01-01T00:00:00Z")
    wk_sub.add_parser("create").add_argument("--json", required=True)
    wk_update = wk_sub.add_parser("update")
    wk_update.add_argument("id")
    wk_update.add_argument("--json", required=True)

    rt = sub.add_parser("routines", help="List, view, create and update routines")
    rt_sub = rt.add_subparsers(dest="action", required=True)
    add_paging(rt_sub.add_parser("list"))
    rt_sub.add_parser("get").add_argument("id")
    rt_sub.add_parser("create").add_argument("--json", required=True)
    rt_update = rt_sub.add_parser("update")
    rt_update.add_argument("id")
    rt_update.add_argument("--json", required=True)

    ex = sub.add_parser("exercises", help="Exercise templates")
    ex_sub = ex.add_subparsers(dest="action", required=True)
    add_paging(ex_sub.add_parser("list"), max_size=100)
    ex_sub.add_parser("get").add_argument("id")
    ex_sub.add_parser("create").add_argument("--json", required=True)

    fd = sub.add_parser("folders", help="Routine folders")
    fd_sub = fd.add_subparsers(dest="action", required=True)
    add_paging(fd_sub.add_parser("list"))
    fd_sub.add_parser("get").add_argument("id")
    fd_sub.add_parser("create").add_argument("--json", required=True)

    hist = sub.add_parser("history", help="Set-level history for an exercise")
    hist_sub = hist.add_subparsers(dest="action", required=True)
    hist_get = hist_sub.add_parser("get")
    hist_get.add_argument("exercise_template_id")
    hist_get.add_argument("--start", help="ISO 8601 start date")
    hist_get.add_argument("--end", help="ISO 8601 end date")

    proc = sub.add_parser(
        "process-workout",
        help="Summarise a webhook workout against its routine",
    )
    proc.add_argument(
        "--json", required=True, help='Webhook payload, e.g. {"workoutId":"<UUID>"}'
    )
    return parser


def run_config(args, config: YamlConfig) -> None:
    if args.action == "set-key":
        config.store_api_key(args.key)
        print(f"API key saved to {config.path}", file=sys.stderr)
    else:
        print(config.path)


def run_api(args, client: HevyClient) -> None:
    cmd, action = args.cmd, args.action
    if cmd == "user":
        print_json(client.user_info())
    elif cmd == "workouts":
        if action == "list":
            print_json(client.list_workouts(args.page, args.page_size))
        elif action == "get":
            print_json(client.get_workout(args.id))
        elif action == "count":
            print_json(client.workout_count())
        elif action == "events":
            print_json(client.workout_events(args.page, args.page_size, args.since))
        elif action == "create":
            print_json(client.create_workout(parse_body(args.json, "workouts create")))
        else:
            body = parse_body(args.json, "workouts update")
            print_json(client.update_workout(args.id, body))
    elif cmd == "routines":
        if action == "list":
            print_json(client.list_routines(args.page, args.page_size))
        elif action == "get":
            print_json(client.get_routine(args.id))
        elif action == "create":
            print_json(client.create_routine(parse_body(args.json, "routines create")))
        else:
            body = parse_body(args.json, "routines update")
            print_json(client.update_routine(args.id, body))
    elif cmd == "exercises":
        if action == "list":
            print_json(client.list_exercise_templates(args.page, args.page_size))
        elif action == "get":
            print_json(client.get_exercise_template(args.id))
        else:
            body = parse_body(args.json, "exercises create")
            print_json(client.create_exercise_template(body))
    elif cmd == "folders":
        if action == "list":
            print_json(client.list_routine_folders(args.page, args.page_size))
        elif action == "get":
            print_json(client.get_routine_folder(args.id))
        else:
            body = parse_body(args.json, "folders create")
            print_json(client.create_routine_folder(body))
    elif cmd == "history":
        print_json(client.exercise_history(args.exercise_template_id, args.start, args.end))


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = YamlConfig(args.config)

    try:
        if args.cmd == "config":
            run_config(args, config)
            return 0

        if args.cmd == "process-workout":
            # reject a bad payload before touching credentials or the network
            workout_id = parse_payload(args.json)

        settings = config.settings()
        client = HevyClient(
            resolve_api_key(args.api_key, config),
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        if args.cmd == "process-workout":
            PerformanceReportService(client, Console()).generate_report(workout_id)
        else:
            run_api(args, client)
    except (HevyClientError, ValueError) as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
