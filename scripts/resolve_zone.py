"""
Zone Resolution Check
Resolves a latitude/longitude against the configured zone registry and
prints the result as JSON.

    python scripts/resolve_zone.py 33.1599 131.6046 --language ja
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from waste_guide.geo.context import resolve_location
from waste_guide.geo.exceptions import ConfigurationError, InputError
from waste_guide.geo.registry import get_zone_registry
from waste_guide.shared.config import get_config
from waste_guide.shared.log_config import configure_logging

logger = logging.getLogger("waste_guide.scripts.resolve_zone")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("latitude", help="Latitude in degrees")
    parser.add_argument("longitude", help="Longitude in degrees")
    parser.add_argument("--language", default="en", help="Language code for the zone name")
    parser.add_argument("--env", default=None, help="Configuration environment (dev, test, prod)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args.env)
        configure_logging(config)
        registry = get_zone_registry(config)
        context = resolve_location(args.latitude, args.longitude, registry)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1
    except (ValidationError, FileNotFoundError) as e:
        logger.error(f"Could not load configuration: {e}")
        return 1
    except InputError as e:
        logger.error(f"Invalid coordinates: {e}")
        return 2

    output = {
        "latitude": context.latitude,
        "longitude": context.longitude,
        "zone_id": context.zone_id,
        "zone_name": context.zone_name(args.language),
        "in_service_area": context.in_service_area,
    }
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
