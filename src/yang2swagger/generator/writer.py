"""Serialise a generated document as YAML or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO, Union

import yaml

from yang2swagger.exceptions import OutputError
from yang2swagger.models import Format
from yang2swagger.swagger import Swagger


def to_dict(document: Swagger) -> dict[str, Any]:
    """Plain-data form of *document*: aliased keys, unset fields omitted."""
    return document.model_dump(by_alias=True, exclude_none=True, mode="json")


def dump(document: Swagger, fmt: Union[Format, str] = Format.YAML) -> str:
    """Render *document* as text in the requested format."""
    data = to_dict(document)
    if Format(fmt) == Format.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


def write(
    document: Swagger,
    target: Union[TextIO, str, Path],
    fmt: Union[Format, str] = Format.YAML,
) -> None:
    """Write *document* to a text stream or a file path.

    Raises:
        OutputError: If the target cannot be written.
    """
    text = dump(document, fmt)
    try:
        if isinstance(target, (str, Path)):
            path = Path(target)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        else:
            target.write(text)
            target.flush()
    except OSError as exc:
        raise OutputError(f"Failed to write generated document: {exc}") from exc
