# lunarscope/validation.py
# Trust-boundary checks: request records going in, model replies coming back.

from __future__ import annotations

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ValidationError

from lunarscope.analyses import get_analysis
from lunarscope.errors import InputValidationError, UpstreamError

logger = logging.getLogger("lunarscope.validation")


def _issues(exc: ValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors to [{"field": "a.0.b", "reason": "..."}]."""
    out = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        out.append({"field": field, "reason": err.get("msg", "invalid value")})
    return out


def validate_input(kind: str, payload: Any) -> BaseModel:
    """
    Validate a candidate input record for `kind`.
    Returns the normalized input model; raises InputValidationError with field-level issues.
    """
    analysis = get_analysis(kind)

    if isinstance(payload, analysis.input_schema):
        payload = payload.model_dump(by_alias=True, exclude_none=True)

    try:
        return analysis.input_schema.model_validate(payload)
    except ValidationError as e:
        issues = _issues(e)
        logger.info("Rejected %s request: %s", kind, issues)
        fields = ", ".join(i["field"] for i in issues)
        raise InputValidationError(f"Invalid {kind} request ({fields})", issues=issues) from None


def validate_output(kind: str, reply: Any) -> BaseModel:
    """
    Parse the model's reply into the declared output schema.
    A reply that does not conform is an upstream failure; nothing partial is returned.
    """
    analysis = get_analysis(kind)
    try:
        return analysis.output_schema.model_validate(reply)
    except ValidationError as e:
        issues = _issues(e)
        raise UpstreamError(
            f"Model reply does not match the {kind} output schema",
            details={"issues": issues},
        ) from None
