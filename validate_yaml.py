#!/usr/bin/env python3
"""Validate vehicle YAML files against the packaged schema."""
import argparse
import sys
from pathlib import Path
from typing import List

import yaml
from jsonschema import validate, ValidationError

from carservice.config import load_schema as _load_packaged_schema


def load_schema() -> dict:
    """Load the vehicle file JSON schema."""
    return _load_packaged_schema("vehicle")


def validate_vehicle_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single vehicle YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def collect_files(paths: List[Path]) -> List[Path]:
    """Expand directories into the YAML files they contain."""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(list(path.glob("*.yaml")) + list(path.glob("*.yml"))))
        else:
            files.append(path)
    return files


def main(argv=None):
    """Validate the given vehicle files (or every file in the given directories)."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        default=[Path("vehicles")],
        help="Vehicle YAML files or directories (default: vehicles/)",
    )
    args = parser.parse_args(argv)

    schema = load_schema()
    yaml_files = collect_files(args.paths)

    if not yaml_files:
        print("Warning: No YAML files found")
        return 0

    all_valid = True
    for filepath in yaml_files:
        errors = validate_vehicle_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
