"""Utility script to push a notification through the configured broker."""

from __future__ import annotations

import argparse
import json

from casetools.config import get_settings
from casetools.infrastructure.notifications import get_notification_dispatcher
from casetools.logging_config import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for a one-off notification."""

    parser = argparse.ArgumentParser(
        description="Send a notification to a user, a channel or every subscriber.",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--user", type=int, help="Identifier of the receiving user")
    target.add_argument("--channel", help="Channel name, e.g. cases or admin")
    target.add_argument(
        "--broadcast",
        action="store_true",
        help="Send to every subscriber of the global notifications topic",
    )
    parser.add_argument("--event", required=True, help="Event name, e.g. case.updated")
    parser.add_argument(
        "--payload",
        default="{}",
        help="JSON document sent as the notification payload (default: {})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Send the notification described by the command line arguments."""

    args = parse_args(argv)
    configure_logging(get_settings().log_level)

    try:
        payload = json.loads(args.payload)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"--payload is not valid JSON: {exc}") from exc

    dispatcher = get_notification_dispatcher()
    try:
        if args.user is not None:
            dispatcher.send_to_user(args.user, args.event, payload)
        elif args.channel:
            dispatcher.send_to_channel(args.channel, args.event, payload)
        else:
            dispatcher.broadcast(args.event, payload)
    finally:
        dispatcher.close()


if __name__ == "__main__":
    main()
