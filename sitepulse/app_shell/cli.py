import argparse
import logging
import sys
from pathlib import Path

from sitepulse.app_shell.config import load_settings, load_tracking_rules
from sitepulse.app_shell.replay import dumps_calls, load_steps, replay
from sitepulse.rules.loader import load_rules

logger = logging.getLogger("sitepulse.cli")


def handle_replay(args: argparse.Namespace) -> int:
    settings = load_settings()
    tracking_id = args.tracking_id if args.tracking_id is not None else settings.tracking_id

    try:
        rules = load_rules(Path(args.rules)) if args.rules else load_tracking_rules(settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot load rules: {e}")
        return 1

    try:
        steps = load_steps(Path(args.signals))
    except FileNotFoundError:
        logger.error(f"Signals file {args.signals} not found.")
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 1

    if not tracking_id:
        logger.warning("No tracking id: replay runs with tracking disabled")

    result = replay(steps, tracking_id, rules)
    output = dumps_calls(result.calls)
    if output:
        print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="site-pulse behavioral analytics engine")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_parser = subparsers.add_parser(
        "replay", help="Replay a recorded session and print the sink calls"
    )
    replay_parser.add_argument("signals", help="JSON-lines file of replay steps")
    replay_parser.add_argument(
        "--tracking-id", default=None, help="Overrides SITEPULSE_TRACKING_ID"
    )
    replay_parser.add_argument("--rules", default=None, help="Overrides SITEPULSE_RULES_PATH")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "replay":
        return handle_replay(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
