"""YAML codec for front-matter blocks (ruamel.yaml round-trip mode).

Round-trip mode keeps unknown keys, their order, quoting and nested
collection styles intact through ``serialize_yaml(parse_yaml(x))``.
"""

from __future__ import annotations

from collections.abc import Mapping
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from markfile.errors import MalformedFrontMatterError


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    A new instance per call avoids corrupted internal emitter state from
    propagating across operations (ruamel.yaml's YAML object is stateful
    and a failed dump can leave a shared instance in a broken state).
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


def parse_yaml(yaml_text: str) -> dict[str, Any]:
    """Parse a front-matter block into a mapping.

    An empty block parses to ``{}``.

    Raises:
        MalformedFrontMatterError: The YAML is invalid or is not a mapping.
    """
    try:
        data = _new_yaml().load(yaml_text)
    except YAMLError as exc:
        msg = f"Invalid YAML in front matter: {exc}"
        raise MalformedFrontMatterError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        msg = f"Front matter must be a mapping, got {type(data).__name__}"
        raise MalformedFrontMatterError(msg)
    return data  # type: ignore[return-value]


def serialize_yaml(data: Mapping[str, Any]) -> str:
    """Serialize *data* to block-style YAML, keys in insertion order."""
    buf = StringIO()
    _new_yaml().dump(dict(data), buf)
    return buf.getvalue()
