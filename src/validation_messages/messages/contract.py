"""
Grouped message contract: the legal keys of each message group and the
named parameters each key's template takes.

Callers that pass a ``group`` to the formatter are checked against this
table before any lookup. Templates only reference required parameters;
optional ones carry extra context for custom catalogs and loggers.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..localization.catalog import ValidationResult


@dataclass(frozen=True)
class ParamSpec:
    """Parameter names accepted by one message key."""

    required: frozenset[str] = field(default_factory=frozenset)
    optional: frozenset[str] = field(default_factory=frozenset)

    @property
    def allowed(self) -> frozenset[str]:
        return self.required | self.optional


def _p(*required: str, optional: tuple[str, ...] = ()) -> ParamSpec:
    return ParamSpec(frozenset(required), frozenset(optional))


_NONE = _p()

MESSAGE_CONTRACT: dict[str, dict[str, ParamSpec]] = {
    "string": {
        "required": _NONE,
        "invalid": _NONE,
        "empty": _NONE,
        "tooShort": _p("min"),
        "tooLong": _p("max"),
        "mustBeString": _p(optional=("receivedType",)),
        "trimmed": _p(optional=("originalLength", "trimmedLength")),
        "cannotBeEmpty": _NONE,
    },
    "number": {
        "required": _NONE,
        "invalid": _p(optional=("reason",)),
        "tooSmall": _p("min"),
        "tooBig": _p("max"),
        "mustBeNumber": _p(optional=("receivedType",)),
        "mustBeInteger": _p(optional=("receivedValue",)),
        "mustBeFloat": _NONE,
        "mustBePositive": _p(optional=("receivedValue",)),
        "mustBeNegative": _p(optional=("receivedValue",)),
        "mustBeNonNegative": _p(optional=("receivedValue",)),
        "mustBeNonPositive": _p(optional=("receivedValue",)),
        "outOfRange": _p("min", "max"),
        "invalidDecimalPlaces": _p("max"),
    },
    "email": {
        "required": _NONE,
        "invalid": _p(optional=("reason",)),
        "mustBeValidEmail": _p(optional=("suggestions",)),
        "invalidFormat": _p(optional=("expectedFormat",)),
        "domainInvalid": _p("domain"),
    },
    "phone": {
        "required": _NONE,
        "invalid": _p(optional=("detectedCountry",)),
        "mustBeValidPhone": _p(optional=("supportedFormats",)),
        "invalidE164Format": _p(optional=("receivedFormat",)),
        "invalidNationalFormat": _p(optional=("country", "expectedFormat")),
        "invalidFormat": _p(optional=("receivedFormat", "supportedFormats")),
        "examples.e164": _NONE,
        "examples.national": _NONE,
    },
    "uuid": {
        "required": _NONE,
        "invalid": _p(optional=("receivedValue", "reason")),
        "mustBeValidUuid": _p(optional=("receivedValue",)),
        "mustBeValidUuidV4": _p(optional=("receivedVersion",)),
        "mustBeValidUuidV6": _p(optional=("receivedVersion",)),
        "mustBeValidUuidV7": _p(optional=("receivedVersion",)),
        "mustBeValidNanoid": _p(optional=("receivedValue", "receivedLength")),
        "invalidFormat": _p(optional=("expectedFormat",)),
    },
    "url": {
        "required": _NONE,
        "invalid": _p(optional=("reason",)),
        "mustBeValidUrl": _p(optional=("receivedValue",)),
        "invalidProtocol": _p("protocol"),
        "invalidDomain": _p("domain"),
        "missingProtocol": _p(optional=("suggestedProtocols",)),
    },
    "boolean": {
        "invalid": _p(optional=("receivedValue", "receivedType")),
        "mustBeBoolean": _p(optional=("receivedType",)),
        "mustBeBooleanString": _p(optional=("receivedValue",)),
        "invalidBooleanString": _p(optional=("receivedValue", "validOptions")),
    },
    "array": {
        "required": _NONE,
        "invalid": _p(optional=("receivedType", "reason")),
        "empty": _p(optional=("minRequired",)),
        "tooSmall": _p("min"),
        "tooBig": _p("max"),
        "mustBeArray": _p(optional=("receivedType",)),
        "mustBeStringArray": _p(optional=("receivedTypes", "invalidIndices")),
        "mustHaveMinItems": _p("min"),
        "mustHaveMaxItems": _p("max"),
        "mustNotBeEmpty": _p(optional=("purpose",)),
        "duplicateItems": _p(optional=("duplicateValues", "indices")),
    },
    "enum": {
        "invalid": _p(optional=("receivedValue",)),
        "mustBeOneOf": _p("options"),
        "invalidOption": _p("option"),
        "availableOptions": _p("options"),
    },
    "date": {
        "required": _NONE,
        "invalid": _NONE,
        "mustBeValidDate": _NONE,
        "mustBeValidDateTime": _NONE,
        "invalidFormat": _NONE,
        "invalidDateString": _NONE,
        "mustIncludeTimezone": _NONE,
        "examples.date": _NONE,
        "examples.dateTime": _NONE,
    },
    "money": {
        "required": _NONE,
        "invalid": _NONE,
        "mustBeValidAmount": _NONE,
        "mustBeValidCurrency": _NONE,
        "mustBePositiveAmount": _NONE,
        "invalidCurrencyCode": _p("code"),
        "invalidDecimalPlaces": _p("max"),
        "mustBeMoneyObject": _NONE,
    },
    "postalCode": {
        "required": _NONE,
        "invalid": _NONE,
        "mustBeValidZipCode": _NONE,
        "mustBeValidPostalCode": _NONE,
        "invalidFormat": _NONE,
        "examples.us": _NONE,
        "examples.uk": _NONE,
        "examples.ca": _NONE,
    },
    "fileUpload": {
        "invalid": _NONE,
        "tooBig": _p("maxSize"),
        "mustBeValidFile": _NONE,
        "fileSizeExceeded": _p("maxSize"),
        "invalidFileType": _p("type"),
        "invalidMimeType": _p("mime"),
        "invalidFileName": _p("name"),
        "fileRequired": _NONE,
        "examples.maxSize": _p("size"),
        "examples.allowedTypes": _p("types"),
    },
    "pagination": {
        "required": _NONE,
        "invalid": _NONE,
        "invalidPageNumber": _p("page"),
        "invalidLimit": _p("limit"),
        "invalidOffset": _p("offset"),
        "invalidCursor": _p("cursor"),
        "invalidSortOrder": _p("order"),
        "pageOutOfRange": _p("page", "totalPages"),
        "limitExceeded": _p("limit"),
    },
    "address": {
        "required": _NONE,
        "invalid": _NONE,
        "mustBeValidAddress": _NONE,
        "streetRequired": _NONE,
        "cityRequired": _NONE,
        "stateRequired": _NONE,
        "countryRequired": _NONE,
        "postalCodeRequired": _NONE,
        "invalidState": _p("state"),
        "invalidUSState": _NONE,
        "invalidCountry": _p("country"),
    },
    "network": {
        "required": _NONE,
        "invalid": _NONE,
        "mustBeValidIPv4": _NONE,
        "mustBeValidIPv6": _NONE,
        "mustBeValidMacAddress": _NONE,
        "invalidIPv4Format": _NONE,
        "invalidIPv6Format": _NONE,
        "invalidMacFormat": _NONE,
        "examples.ipv4": _NONE,
        "examples.ipv6": _NONE,
        "examples.mac": _NONE,
    },
    "user": {
        "required": _NONE,
        "invalid": _p(optional=("reason",)),
        "usernameInvalid": _p(optional=("violations", "requirements")),
        "passwordWeak": _p(optional=("score", "missingRequirements", "suggestions")),
        "passwordTooShort": _p("min"),
        "passwordMissingUppercase": _p(optional=("minRequired",)),
        "passwordMissingLowercase": _p(optional=("minRequired",)),
        "passwordMissingNumbers": _p(optional=("minRequired",)),
        "passwordMissingSpecialChars": _p(optional=("minRequired", "allowedChars")),
        "passwordsDoNotMatch": _p(optional=("field1", "field2")),
        "passwordMustBeDifferent": _p(optional=("reason",)),
        "emailAlreadyExists": _p("email"),
        "usernameAlreadyExists": _p("username"),
        "invalidRole": _p("role"),
        "invalidAccountType": _p("type"),
        "termsNotAccepted": _p(optional=("termsVersion", "requiredSections")),
        "invalidUnderscorePosition": _p(optional=("position", "allowedPositions")),
        "invalidHyphenPosition": _p(optional=("position", "allowedPositions")),
        "mustBeValidUserObject": _p(optional=("requiredFields", "invalidFields")),
    },
    "record": {
        "required": _NONE,
        "invalid": _p(optional=("reason",)),
        "mustBeRecord": _p(optional=("receivedType",)),
        "tooFewEntries": _p("min"),
        "tooManyEntries": _p("max"),
        "invalidKeys": _p(optional=("allowedKeys", "invalidKeys")),
        "invalidKeyPattern": _p(optional=("pattern", "invalidKeys")),
        "missingRequiredKeys": _p(optional=("requiredKeys", "missingKeys")),
        "examples.keyValue": _NONE,
        "examples.stringRecord": _NONE,
    },
}


def message_groups() -> list[str]:
    """Names of every group in the contract."""
    return list(MESSAGE_CONTRACT)


def contract_for(group: str) -> Mapping[str, ParamSpec] | None:
    """Key → ParamSpec table for ``group``, or None if the group is unknown."""
    return MESSAGE_CONTRACT.get(group)


def split_key(group: str | None, message_key: str) -> tuple[str | None, str]:
    """Split ``message_key`` into (group, key).

    A key already qualified with ``group.`` is stripped back to the bare key;
    without a group the first segment of a dotted key is taken as the group.
    """
    if group is not None:
        prefix = f"{group}."
        if message_key.startswith(prefix):
            return group, message_key[len(prefix):]
        return group, message_key
    if "." in message_key:
        head, _, rest = message_key.partition(".")
        return head, rest
    return None, message_key


def validate_params(
    group: str,
    message_key: str,
    params: Mapping[str, Any] | None,
) -> ValidationResult:
    """Check ``params`` against the contract entry for (group, message_key).

    Args:
        group: Message group (e.g. "string")
        message_key: Key within the group, bare or group-qualified
        params: Parameters the caller intends to interpolate

    Returns:
        ValidationResult; failure reasons name the offending parameters
    """
    table = MESSAGE_CONTRACT.get(group)
    if table is None:
        return ValidationResult.failure(f"unknown message group '{group}'")

    _, key = split_key(group, message_key)
    spec = table.get(key)
    if spec is None:
        return ValidationResult.failure(f"unknown message key '{group}.{key}'")

    supplied = {name for name, value in (params or {}).items() if value is not None}
    missing = sorted(spec.required - supplied)
    if missing:
        return ValidationResult.failure(
            f"'{group}.{key}' is missing parameters: {', '.join(missing)}"
        )

    unexpected = sorted(set(params or {}) - spec.allowed)
    if unexpected:
        return ValidationResult.failure(
            f"'{group}.{key}' does not accept parameters: {', '.join(unexpected)}"
        )

    return ValidationResult.success()
