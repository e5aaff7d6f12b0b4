"""Generate the OpenAPI schema of the tax service.

Usage: python scripts/generate_openapi.py [output.json]
Prints to stdout when no output path is given.
"""

import json
import sys
from pathlib import Path
from typing import Any

from taxcore.main import app


def generate_openapi() -> dict[str, Any]:
    """Return the OpenAPI document with the tax tag first in the tag list."""
    spec = app.openapi()
    spec["tags"] = sorted(spec.get("tags", []), key=lambda tag: tag["name"] != "Tax")
    return spec


def main(argv: list[str]) -> None:
    output = json.dumps(generate_openapi(), indent=2)
    if len(argv) > 1:
        Path(argv[1]).write_text(output + "\n")
    else:
        print(output)


if __name__ == "__main__":
    main(sys.argv)
