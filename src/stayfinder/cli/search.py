from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from stayfinder.config import load_config
from stayfinder.errors import AggregationFailure, ValidationError
from stayfinder.models import StayRequest
from stayfinder.services import aggregate, build_sources
from stayfinder.utils.log import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Query availability across configured booking systems")
    parser.add_argument("check_in", help="Check-in date (YYYY-MM-DD)")
    parser.add_argument("check_out", help="Check-out date (YYYY-MM-DD)")
    parser.add_argument("-g", "--guests", default=None, help="Number of guests (default 2)")
    parser.add_argument("-l", "--location", default=None, help="Location or property name filter")
    parser.add_argument("--live", action="store_true", help="Use credential-store sources instead of the demo catalog")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    cfg = load_config()
    if args.live:
        cfg.live_sources = True
    configure_logging(args.log_level or cfg.log_level)

    raw = {"checkIn": args.check_in, "checkOut": args.check_out, "guests": args.guests, "location": args.location}
    try:
        stay = StayRequest.parse(raw, max_guests=cfg.aggregator.max_guests, default_guests=cfg.aggregator.default_guests)
        result = aggregate(stay, build_sources(cfg), cfg.aggregator)
    except ValidationError as e:
        print(json.dumps({"success": False, "error": e.reason, "field": e.field}))
        return 2
    except AggregationFailure as e:
        print(json.dumps({"success": False, "error": str(e)}))
        return 1
    print(json.dumps(result.to_wire(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
