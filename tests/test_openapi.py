from __future__ import annotations

import json
from pathlib import Path

from cms_api.api.generate_openapi import generate_openapi_file


def test_generate_openapi_file_writes_content_routes(tmp_path: Path) -> None:
    target = tmp_path / "interfaces" / "openapi.json"

    written = generate_openapi_file(str(target))

    assert Path(written) == target.resolve()
    schema = json.loads(target.read_text(encoding="utf-8"))
    assert "/items" in schema["paths"]
    assert "/items/{item_id}" in schema["paths"]
    assert set(schema["paths"]["/items/{item_id}"]) == {"get", "put", "delete"}
    assert {"get", "post"} <= set(schema["paths"]["/items"])
