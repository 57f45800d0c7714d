"""Declarative request validation.

A route declares an ordered tuple of ``Rule`` objects. ``validate_request``
turns them into a FastAPI dependency (the gate) that runs every rule,
collects the failures in order and either raises ``RequestRejectedError`` or
returns the validated path parameters and body to the handler.

Values are checked in their string form: a missing or null value is ``""``,
booleans are ``"true"``/``"false"`` and numbers their decimal form.
"""
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from fastapi import Request

from products_api.errors import RequestRejectedError

PARAMS = "params"
BODY = "body"

_MISSING = object()

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_BOOLEAN_VALUES = ("true", "false", "1", "0")
_DECIMAL_RE = re.compile(r"^[+-]?([0-9]+[.]?[0-9]*|[.][0-9]+)([eE][+-]?[0-9]+)?$")
_RADIX_RE = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")


def as_text(value: Any) -> str:
    if value is _MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(as_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def as_number(value: Any) -> float:
    """Numeric coercion of a JSON value; NaN when it has no numeric reading.

    Strings accept decimal, exponent, hex/octal/binary literals and Infinity;
    blank strings and empty lists count as zero.
    """
    if value is _MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, list):
        value = as_text(value)
    if not isinstance(value, str):
        return math.nan
    text = value.strip()
    if not text:
        return 0.0
    if _DECIMAL_RE.match(text):
        return float(text)
    match = _RADIX_RE.match(text)
    if match:
        base = {"x": 16, "o": 8, "b": 2}[match.group(1).lower()]
        try:
            return float(int(match.group(2), base))
        except ValueError:
            return math.nan
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    return math.nan


def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    return bool(_NUMERIC_RE.match(as_text(value)))


def not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_boolean(value: Any) -> bool:
    return as_text(value) in _BOOLEAN_VALUES


def greater_than(limit: float) -> Callable[[Any], bool]:
    """Numeric comparison after coercion; NaN never passes."""
    def check(value: Any) -> bool:
        return as_number(value) > limit
    return check


def to_bool(value: Any) -> bool:
    return as_text(value) in ("true", "1")


@dataclass(frozen=True)
class Rule:
    location: str
    name: str
    check: Callable[[Any], bool]
    message: str

    def evaluate(self, source: Dict[str, Any]) -> List[Dict[str, Any]]:
        value = source.get(self.name, _MISSING)
        if self.check(value):
            return []
        error = {"type": "field"}
        if value is not _MISSING:
            error["value"] = value
        error.update(msg=self.message, path=self.name, location=self.location)
        return [error]


def param(name: str, check: Callable[[Any], bool], message: str) -> Rule:
    return Rule(PARAMS, name, check, message)


def body(name: str, check: Callable[[Any], bool], message: str) -> Rule:
    return Rule(BODY, name, check, message)


@dataclass(frozen=True)
class ValidatedRequest:
    params: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)


def check_rules(
    rules: Tuple[Rule, ...],
    params: Dict[str, Any],
    payload: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Run every rule and return all failures in declaration order."""
    sources = {PARAMS: params, BODY: payload}
    errors = []
    for rule in rules:
        errors.extend(rule.evaluate(sources[rule.location]))
    return errors


def is_json_request(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Parse a JSON object body. Other content types read as an empty body."""
    if not is_json_request(request):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise RequestRejectedError([
            {"type": "body", "msg": "Malformed JSON body", "location": BODY}
        ])
    if not isinstance(payload, dict):
        return {}
    return payload


def validate_request(*rules: Rule):
    """Build the validation gate dependency for a route."""
    needs_body = any(rule.location == BODY for rule in rules)

    async def gate(request: Request) -> ValidatedRequest:
        params = dict(request.path_params)
        payload = await read_json_body(request) if needs_body else {}
        errors = check_rules(rules, params, payload)
        if errors:
            raise RequestRejectedError(errors)
        return ValidatedRequest(params=params, body=payload)

    return gate
