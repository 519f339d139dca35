import argparse
import json
import sys
from datetime import date, datetime

import numpy as np

from .di import Repository, Service
from .domain.factory import KioskFactory
from .domain.model import CapturedSample
from .settings import KioskSettings
from .utils import get_logger

logger = get_logger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        prog="clock_kiosk",
        description="Administer face enrollments and inspect clock events",
    )
    parser.add_argument("--env-file", default=None, help="Optional .env file with CLOCK_KIOSK_ settings")
    subparsers = parser.add_subparsers(dest="command", required=True)

    enroll = subparsers.add_parser("enroll", help="Enroll or replace an employee descriptor")
    enroll.add_argument("--employee", required=True)
    enroll.add_argument("--embedding", required=True, help="Path to a .npy embedding")
    enroll.add_argument("--actor", required=True, help="Operator performing the enrollment")

    revoke = subparsers.add_parser("revoke", help="Clear an employee descriptor")
    revoke.add_argument("--employee", required=True)
    revoke.add_argument("--actor", required=True)

    for name, help_text in (("state", "Show the clock state"), ("events", "List clock events")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--employee", required=True)
        sub.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD")

    return parser.parse_args(argv)


def _today(settings: KioskSettings) -> date:
    return datetime.now(settings.tzinfo).date()


def main(argv=None) -> int:
    args = parse_arguments(argv)
    settings = KioskSettings.from_env(args.env_file)
    factory = KioskFactory(service=Service(settings), repository=Repository(settings))

    if args.command == "enroll":
        embedding = np.load(args.embedding).astype(np.float32).reshape(-1)
        sample = CapturedSample(embedding=embedding.tolist())
        try:
            identity = factory.enroll_employee().invoke(args.employee, sample, args.actor)
        except ValueError as e:
            logger.error(f"Enrollment failed: {e}")
            return 1
        print(json.dumps(identity.to_json()))
        return 0

    if args.command == "revoke":
        removed = factory.revoke_enrollment().invoke(args.employee, args.actor)
        print(json.dumps({"employee_id": args.employee, "removed": removed}))
        return 0 if removed else 1

    work_date = args.date or _today(settings)
    if args.command == "state":
        state = factory.get_current_state().invoke(args.employee, work_date)
        print(json.dumps({"employee_id": args.employee, "date": work_date.isoformat(), "state": state.value}))
        return 0

    events = factory.get_clock_events().invoke(args.employee, work_date)
    print(json.dumps([event.to_json() for event in events], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
