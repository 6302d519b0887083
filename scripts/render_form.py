#!/usr/bin/env python3
"""Render a record schema as an HTML form.

Usage:
    python scripts/render_form.py contact
    python scripts/render_form.py path/to/schema.yaml --data defaults.yaml --submit Save

The schema argument is either a key from the schema definitions directory
or a YAML schema definition file. Default data may be YAML or JSON.
"""

import argparse
import json
import sys
from pathlib import Path

import yaml

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from omniform.capabilities.errors import UndefinedCapabilityError  # noqa: E402
from omniform.capabilities.registry import CapabilityRegistry  # noqa: E402
from omniform.datatypes.registry import DataTypeRegistry  # noqa: E402
from omniform.html5 import install  # noqa: E402
from omniform.records.registry import SchemaRegistry  # noqa: E402
from omniform.records.schemas import SchemaDefinition  # noqa: E402
from omniform.rendering.composer import FormComposer  # noqa: E402
from omniform.rendering.schemas import RenderOptions  # noqa: E402


def load_data(path: Path) -> dict:
    """Load default data from a YAML or JSON file."""
    with open(path, "r") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f) or {}


def main():
    parser = argparse.ArgumentParser(description="Render a record schema as an HTML form")
    parser.add_argument("schema", help="Schema key or path to a YAML schema definition")
    parser.add_argument("--data", type=str, help="YAML/JSON file with default values")
    parser.add_argument("--submit", type=str, default="", help="Submit button label")
    parser.add_argument(
        "--no-submit", action="store_true", help="Render without a submit button"
    )
    parser.add_argument("--action", type=str, help="Form action URL")
    parser.add_argument(
        "--schema-dir", type=str, help="Schema definitions directory (default: builtin)"
    )
    args = parser.parse_args()

    types = DataTypeRegistry()
    capabilities = CapabilityRegistry()
    install(capabilities, types)
    capabilities.seal()

    schemas = SchemaRegistry(
        definitions_dir=Path(args.schema_dir) if args.schema_dir else None, types=types
    )

    schema_path = Path(args.schema)
    try:
        if schema_path.suffix in (".yaml", ".yml") and schema_path.exists():
            with open(schema_path, "r") as f:
                schema = schemas.add_definition(SchemaDefinition.model_validate(yaml.safe_load(f)))
        else:
            schema = schemas.require(args.schema)
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    options = RenderOptions(
        submit_button=None if args.no_submit else args.submit,
        form_attributes={"action": args.action} if args.action else {},
    )
    default_data = load_data(Path(args.data)) if args.data else {}

    try:
        html = FormComposer(capabilities).render_schema(schema, options, default_data)
    except UndefinedCapabilityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(html)
    return 0


if __name__ == "__main__":
    sys.exit(main())
