#!/usr/bin/env python3
"""Validate fleet YAML files against the schema."""
import sys
from datetime import date
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from rental.loader import TRUE_FLAGS


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def _stringify_dates(value):
    """Turn YAML-native dates back into ISO strings so the schema sees one type."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _stringify_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_dates(v) for v in value]
    return value


def validate_fleet_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single fleet YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=_stringify_dates(data), schema=schema)
        errors.extend(check_date_order(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def check_date_order(data: dict) -> list[str]:
    """Report entries whose dates are not real calendar dates or run backwards."""
    errors = []
    for vehicle in data.get("vehicles") or []:
        vid = vehicle.get("id")
        availability = vehicle.get("availability") or {}
        rates = vehicle.get("rates") or {}
        sections = [
            ("quantityPeriods", availability.get("quantityPeriods") or []),
            ("seasonalRates", rates.get("seasonalRates") or []),
        ]
        for section, entries in sections:
            for i, entry in enumerate(entries):
                try:
                    start = date.fromisoformat(str(entry["startDate"]))
                    end = date.fromisoformat(str(entry["endDate"]))
                except ValueError as e:
                    errors.append(f"Date error: {vid} {section}[{i}]: {e}")
                    continue
                # Recurring seasons may wrap New Year
                recurring = str(entry.get("recurring")).lower() in TRUE_FLAGS
                if start > end and not recurring:
                    errors.append(f"Date error: {vid} {section}[{i}]: start after end")
    return errors


def fleet_files(paths: list[str]) -> list[Path]:
    """Files named on the command line, or every YAML file under fleet/."""
    if paths:
        return [Path(p) for p in paths]
    fleet_dir = Path(__file__).parent / "fleet"
    return sorted(fleet_dir.glob("*.yaml")) + sorted(fleet_dir.glob("*.yml"))


def main(argv=None) -> int:
    """Validate fleet files and print one OK/FAIL line per file."""
    files = fleet_files(sys.argv[1:] if argv is None else argv)
    if not files:
        print("Warning: no fleet files to validate")
        return 0

    schema = load_schema()
    failures = 0
    for filepath in files:
        errors = validate_fleet_file(filepath, schema)
        status = "FAIL" if errors else "OK"
        print(f"{status}: {filepath.name}")
        for error in errors:
            print(f"  {error}")
        failures += bool(errors)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
