"""
Write the content API's OpenAPI document to disk (default: interfaces/openapi.json).

Usage:
  python -m cms_api.api.generate_openapi [output_path]
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

from fastapi.openapi.utils import get_openapi  # type: ignore

from .main import app
from ..core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT = "interfaces/openapi.json"


# PUBLIC_INTERFACE
def build_openapi_schema() -> Dict[str, Any]:
    """Return the OpenAPI document for the application's routes and tags."""
    return get_openapi(
        title=app.title,
        version=app.version,
        description=app.description or "",
        routes=app.routes,
        tags=app.openapi_tags,
    )


# PUBLIC_INTERFACE
def generate_openapi_file(output_path: str = DEFAULT_OUTPUT) -> str:
    """Write the schema as indented JSON, creating parent directories; return the absolute path."""
    schema = build_openapi_schema()
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(schema, indent=2, ensure_ascii=False), encoding="utf-8")
    abs_path = str(out.resolve())
    logger.info("OpenAPI schema written.", extra={"path": abs_path, "paths": sorted(schema.get("paths", {}))})
    return abs_path


if __name__ == "__main__":
    generate_openapi_file(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_OUTPUT)
