"""Load schema documents from a URL, local file, or stdin.

A schema document is a YAML or JSON mapping with a top-level ``modules``
list (see :class:`~yang2swagger.models.Module` for the shape of each
entry). This module only handles I/O and format detection; the raw dict is
turned into a :class:`~yang2swagger.models.SchemaContext` by
:func:`~yang2swagger.parser.resolver.resolve_schema`.

The public function is :func:`load_schema`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from yang2swagger.exceptions import SchemaParseError


def load_schema(source: str) -> dict[str, Any]:
    """Load a schema document from URL, file path, or stdin (``'-'``).

    Supports JSON and YAML. The format is taken from the file extension or
    the HTTP content type when available, otherwise detected from content.

    Args:
        source: A URL (http/https), file path, or ``'-'`` for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SchemaParseError: If the source cannot be read or parsed, or does
            not declare a ``modules`` list.
    """
    if source == "-":
        document = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        document = _load_from_url(source)
    else:
        document = _load_from_file(source)

    modules = document.get("modules")
    if not isinstance(modules, list):
        raise SchemaParseError(
            f"Schema document {source} must declare a 'modules' list"
        )
    return document


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SchemaParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SchemaParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a schema document over HTTP(S)."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SchemaParseError(
            f"HTTP {exc.response.status_code} fetching schema from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SchemaParseError(f"Failed to fetch schema from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SchemaParseError(f"Schema file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaParseError(f"Failed to read schema file {path}: {exc}") from exc

    if not content.strip():
        raise SchemaParseError(f"Schema file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless the hint says YAML; valid JSON is also valid
    YAML, but the JSON parser gives better error messages for JSON input.

    Raises:
        SchemaParseError: If the content parses as neither format or is not
            a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SchemaParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse schema as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SchemaParseError(msg) from exc

    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SchemaParseError(f"Schema must be a JSON/YAML object (got {kind})")
    return result
