"""
Message catalog model and shape validation.

A catalog is a per-locale tree: a ``locale`` field plus a fixed set of
required message groups. Every leaf reachable by a dot-path must be a
string template; nested mappings hold structured sub-keys such as
``network.examples.ipv4``.

Validation is explicit and returns a ``ValidationResult`` instead of
raising, so the registry decides how to surface the failure.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

# Groups every catalog must carry. Extra groups are tolerated.
REQUIRED_GROUPS: tuple[str, ...] = ("common", "string", "email", "number", "network")


class ValidationResult(BaseModel):
    """Outcome of a validation step.

    Attributes:
        ok: True if the input passed validation
        reason: Human-readable failure reason when ok=False, None otherwise
    """

    ok: bool
    reason: str | None = None

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


class CatalogShape(BaseModel):
    """Top-level shape of a catalog document.

    Only the compatibility surface is declared: ``locale`` and the required
    groups. Anything else passes through as extra fields and is checked by
    the leaf walk in ``validate_catalog``.
    """

    locale: str
    common: dict[str, Any]
    string: dict[str, Any]
    email: dict[str, Any]
    number: dict[str, Any]
    network: dict[str, Any]

    model_config = {"extra": "allow"}


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
    if err.get("type") == "missing":
        return f"missing required field '{loc}'"
    return f"'{loc}': {err.get('msg', 'invalid value')}"


def _find_illegal_leaf(node: Mapping[str, Any], prefix: str) -> str | None:
    """Return the dot-path of the first leaf that is neither str nor mapping."""
    for key, value in node.items():
        if not isinstance(key, str):
            return f"{prefix}{key!r} (non-string key)"
        path = f"{prefix}{key}"
        if isinstance(value, str):
            continue
        if isinstance(value, Mapping):
            found = _find_illegal_leaf(value, f"{path}.")
            if found:
                return found
            continue
        return f"{path} ({type(value).__name__})"
    return None


def validate_catalog(data: Any, expected_locale: str | None = None) -> ValidationResult:
    """Validate a raw catalog payload.

    Args:
        data: Decoded catalog document (usually a dict from YAML)
        expected_locale: If given, the catalog's ``locale`` must match it

    Returns:
        ValidationResult; never raises for bad input
    """
    if not isinstance(data, Mapping):
        return ValidationResult.failure(
            f"catalog must be a mapping, got {type(data).__name__}"
        )

    try:
        shape = CatalogShape.model_validate(dict(data))
    except ValidationError as e:
        return ValidationResult.failure(_first_error(e))

    if expected_locale is not None and shape.locale != expected_locale:
        return ValidationResult.failure(
            f"locale field '{shape.locale}' does not match '{expected_locale}'"
        )

    body = {k: v for k, v in data.items() if k != "locale"}
    illegal = _find_illegal_leaf(body, "")
    if illegal:
        return ValidationResult.failure(f"illegal leaf at {illegal}")

    return ValidationResult.success()


def freeze_catalog(node: Mapping[str, Any]) -> Mapping[str, Any]:
    """Deep-copy a catalog into read-only mapping proxies."""
    return MappingProxyType(
        {
            key: freeze_catalog(value) if isinstance(value, Mapping) else value
            for key, value in node.items()
        }
    )


def flatten_keys(node: Mapping[str, Any], prefix: str = "") -> list[str]:
    """Collect every dot-path in ``node`` whose leaf is a string."""
    keys: list[str] = []
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, str):
            keys.append(path)
        elif isinstance(value, Mapping):
            keys.extend(flatten_keys(value, path))
    return keys


def lookup_path(node: Mapping[str, Any], path: str) -> str | None:
    """Walk ``path`` segment by segment.

    Returns:
        The string leaf, or None when any segment is missing, an
        intermediate segment is not a mapping, or the leaf is not a string.
    """
    current: Any = node
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current if isinstance(current, str) else None
