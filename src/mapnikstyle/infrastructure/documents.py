"""Neutral style documents: JSON or YAML text <-> :class:`Style`.

YAML 1.2 is a superset of JSON, so a single ruamel.yaml loader reads both.
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any, Literal

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mapnikstyle.domain.errors import MalformedDocumentError
from mapnikstyle.domain.style import Style

DocumentFormat = Literal["json", "yaml"]


def _new_yaml(*, typ: str = "rt") -> YAML:
    """Create a fresh YAML instance (ruamel's YAML object is stateful)."""
    y = YAML(typ=typ)
    y.default_flow_style = False
    return y


def load_document(text: str) -> dict[str, Any]:
    """Parse JSON or YAML text into a plain mapping."""
    try:
        data = _new_yaml(typ="safe").load(text)
    except YAMLError as exc:
        raise MalformedDocumentError(f"Invalid style document: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Style document must be a mapping, got {type(data).__name__}"
        raise MalformedDocumentError(msg)
    return data


def load_style(text: str) -> Style:
    """Parse and validate a neutral style document.

    Raises:
        MalformedDocumentError: the text is not JSON/YAML, or does not
            describe a valid style.
    """
    data = load_document(text)
    try:
        return Style.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid style document: {where}: {first['msg']}"
        raise MalformedDocumentError(msg) from exc


def dump_style(style: Style, fmt: DocumentFormat = "json") -> str:
    """Serialize *style* to its JSON-shaped neutral document."""
    return dump_document(style.to_document(), fmt)


def dump_document(document: dict[str, Any], fmt: DocumentFormat = "json") -> str:
    """Serialize an already JSON-shaped document as JSON or YAML text."""
    if fmt == "json":
        return json.dumps(document, indent=2) + "\n"
    buf = StringIO()
    _new_yaml().dump(document, buf)
    return buf.getvalue()
