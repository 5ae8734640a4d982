# product_service/validation.py

"""
Declarative request validation.

A route lists its field validators; each one runs every rule in its chain
against the raw value and reports one `FieldError` per failed rule. The gate
dependency concatenates the reports and rejects the request with 400 when
the list is not empty, before the handler or the database is reached.
"""
import json
import logging
import math
import re
from typing import Any, Callable, Dict, List, NamedTuple, Sequence, Tuple, Type

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .exceptions import RequestValidationFailed
from .models import PRICE_SCALE
from .schemas import FieldError

logger = logging.getLogger(__name__)

# Marks a field that is not in the request at all (as opposed to JSON null)
MISSING = object()

Predicate = Callable[[Any], bool]
Rule = Tuple[Predicate, str]
Validator = Callable[[Dict[str, Dict[str, Any]]], List[FieldError]]

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_BOOLEAN_TEXT = {"true", "false", "1", "0"}


def as_text(value: Any) -> str:
    """Renders a raw request value the way the rules compare it."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def as_number(value: Any) -> float:
    """Loose numeric coercion; anything unparseable becomes NaN."""
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


# -----------------------------
# Rules
# -----------------------------


def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    return bool(_NUMERIC_RE.match(as_text(value)))


def is_positive(value: Any) -> bool:
    # NaN compares False, so non-numeric text fails here too
    return as_number(value) > 0


def is_positive_price(value: Any) -> bool:
    # Prices are stored at cents precision; one that rounds to 0.00 is not positive
    return is_positive(round(as_number(value), PRICE_SCALE))


def not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_boolean(value: Any) -> bool:
    return as_text(value) in _BOOLEAN_TEXT


# -----------------------------
# Field validators
# -----------------------------


def _field(path: str, location: str, rules: Sequence[Rule]) -> Validator:
    def validate(sources: Dict[str, Dict[str, Any]]) -> List[FieldError]:
        value = sources.get(location, {}).get(path, MISSING)
        errors = []
        # No bail-out: every rule in the chain reports on its own
        for predicate, message in rules:
            if predicate(value):
                continue
            error = {"msg": message, "path": path, "location": location}
            if value is not MISSING:
                error["value"] = value
            errors.append(FieldError(**error))
        return errors

    return validate


def param(path: str, *rules: Rule) -> Validator:
    """Validator for a URL path parameter."""
    return _field(path, "params", rules)


def body(path: str, *rules: Rule) -> Validator:
    """Validator for a top-level key of the JSON body."""
    return _field(path, "body", rules)


def run_validators(
    validators: Sequence[Validator], sources: Dict[str, Dict[str, Any]]
) -> List[FieldError]:
    errors: List[FieldError] = []
    for validator in validators:
        errors.extend(validator(sources))
    return errors


# -----------------------------
# Gate
# -----------------------------


class CheckedRequest(NamedTuple):
    params: Dict[str, str]
    body: Dict[str, Any]

    @property
    def id(self) -> int:
        return int(self.params["id"])


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parses the request body as a JSON object.

    Only `application/json` bodies are read; any other content type, an empty
    body, or JSON that is not an object reads as `{}`.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "application/json":
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        raise RequestValidationFailed(
            [FieldError(msg="JSON no valido", path="", location="body")]
        )
    return parsed if isinstance(parsed, dict) else {}


def validate_request(*validators: Validator):
    """
    Builds the gate dependency for a route from its validators.
    """

    async def gate(request: Request) -> CheckedRequest:
        checked = CheckedRequest(
            params=dict(request.path_params), body=await read_json_body(request)
        )
        errors = run_validators(
            validators, {"params": checked.params, "body": checked.body}
        )
        if errors:
            logger.info(
                f"Rejected {request.method} {request.url.path}: "
                f"{[error.msg for error in errors]}"
            )
            raise RequestValidationFailed(errors)
        return checked

    return gate


def build_payload(schema: Type[BaseModel], data: Dict[str, Any]) -> BaseModel:
    """
    Converts a body that passed the gate into its typed schema.

    Values the rules do not cover (e.g. a non-boolean `availability` on create)
    can still be rejected here; they are reported in the same error shape.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise RequestValidationFailed(
            [
                FieldError(
                    msg=err["msg"],
                    path=".".join(str(part) for part in err["loc"]),
                    location="body",
                    value=err.get("input"),
                )
                for err in e.errors()
            ]
        )


# -----------------------------
# Rule lists used by the router
# -----------------------------

ID_RULES = [param("id", (is_int, "Id no valido"))]

PRODUCT_RULES = [
    body("name", (not_empty, "El nombre del producto no puede ir vacio")),
    body(
        "price",
        (is_numeric, "Valor no valido"),
        (is_positive_price, "Precio no valido"),
        (not_empty, "El precio del producto no puede ir vacio"),
    ),
]

AVAILABILITY_RULES = [
    body("availability", (is_boolean, "Valor para disponibilidad no valido"))
]
