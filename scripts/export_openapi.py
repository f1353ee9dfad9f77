"""Write the service's OpenAPI document to docs/openapi.json."""

from pathlib import Path

import orjson
from fastapi.openapi.utils import get_openapi

from recipe_importer.main import app


openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    description=app.description,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
output.write_bytes(orjson.dumps(openapi_schema, option=orjson.OPT_INDENT_2))
