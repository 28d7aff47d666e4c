"""
Command-line access to the estimator, geocoder and shop finder.

Usage:
  python backend/scripts/repair_estimate_cli.py estimate assessment.json
  python backend/scripts/repair_estimate_cli.py geocode "Chicago"
  python backend/scripts/repair_estimate_cli.py --json shops "94101"

The assessment file holds the vision model's JSON, e.g.
  {"vehicleDetected": true, "damageDetected": true, "confidence": 0.9,
   "parts": [{"part": "front_bumper", "severity": "moderate"}]}

GOOGLE_API_KEY is read from the environment / .env; without it the geocoder
falls back to the local directory and the shop finder to demo shops.
"""

import argparse
import json
import sys
from dataclasses import asdict

from app.core.di.service_locator import ServiceLocator
from app.data.repositories.assessment_mapper import assessment_from_payload
from app.domain.exceptions import InvalidAssessmentPayloadError


def _dump(obj) -> str:
    return json.dumps(asdict(obj), indent=2, default=str)


def cmd_estimate(args) -> int:
    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, ValueError) as e:
        print(f"ERROR: cannot read assessment file {args.file}: {e}", file=sys.stderr)
        return 1
    try:
        assessment = assessment_from_payload(payload)
    except InvalidAssessmentPayloadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    breakdown = ServiceLocator.estimate_usecase().execute(assessment)
    if args.json:
        print(_dump(breakdown))
        return 0
    for item in breakdown.line_items:
        print(f"  {item.part:<14} {item.severity:<12} ${item.part_cost:>8.2f}  paint ${item.paint_cost:.2f}")
    print(f"Parts & labor: ${breakdown.parts_and_labor:.2f}")
    print(f"Paint:         ${breakdown.paint:.2f}")
    print(f"Surcharges:    ${breakdown.surcharges:.2f}")
    print(f"Estimate:      {breakdown.formatted_range()} (midpoint ${breakdown.midpoint}, confidence {breakdown.confidence:.2f})")
    return 0


def cmd_geocode(args) -> int:
    location = ServiceLocator.resolve_location_usecase().execute(args.address)
    if args.json:
        print(_dump(location))
    else:
        print(f"{location.formatted_address}: {location.lat}, {location.lng} [{location.source.value}]")
    return 0


def cmd_shops(args) -> int:
    location = ServiceLocator.resolve_location_usecase().execute(args.address)
    shops = ServiceLocator.rank_shops_usecase().execute(location.point)
    if args.json:
        print(json.dumps([asdict(s) for s in shops], indent=2, default=str))
        return 0
    print(f"Repair shops near {location.formatted_address}:")
    for shop in shops:
        status = "open" if shop.is_open else ("closed" if shop.is_open is False else "hours unknown")
        demo = " (demo)" if shop.synthetic else ""
        print(f"  {shop.distance_miles:5.2f} mi  {shop.name}{demo} - {shop.address} - {shop.rating} ({shop.total_ratings}) - {status}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Repair cost estimates and nearby repair shops")
    parser.add_argument("--json", action="store_true", help="print raw JSON output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_estimate = sub.add_parser("estimate", help="estimate repair cost from an assessment JSON file")
    p_estimate.add_argument("file", type=str)
    p_estimate.set_defaults(func=cmd_estimate)

    p_geocode = sub.add_parser("geocode", help="resolve an address, city or zip code")
    p_geocode.add_argument("address", type=str)
    p_geocode.set_defaults(func=cmd_geocode)

    p_shops = sub.add_parser("shops", help="list repair shops near an address")
    p_shops.add_argument("address", type=str)
    p_shops.set_defaults(func=cmd_shops)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
