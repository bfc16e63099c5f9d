# lunarscope/flows.py
# validate -> compose prompt -> call model -> validate reply -> return.
# Exposes: run_analysis(kind, payload) and one async entry point per analysis kind.

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from lunarscope.analyses import (
    FEATURE_DETECTION,
    GEOLOGICAL_REASONING,
    SHADOW_SLOPE,
    TEMPORAL,
    get_analysis,
)
from lunarscope.errors import LunarScopeError, UpstreamError
from lunarscope.model import StructuredModel, get_model
from lunarscope.prompts import compose_prompt, render_text
from lunarscope.schemas import (
    FeatureDetectionOutput,
    GeologicalReasoningOutput,
    ShadowSlopeOutput,
    TemporalOutput,
)
from lunarscope.validation import validate_input, validate_output

logger = logging.getLogger("lunarscope.flows")


async def run_analysis(
    kind: str,
    payload: Mapping[str, Any],
    model: Optional[StructuredModel] = None,
) -> BaseModel:
    """
    Run one analysis end to end.
    Returns the validated output model; raises InputValidationError (before any model call)
    or UpstreamError. Never returns a partial result.
    """
    analysis = get_analysis(kind)
    record = validate_input(kind, payload)
    document = compose_prompt(analysis.template, record)

    logger.info("Running %s analysis", kind)
    logger.debug("Prompt for %s:\n%s", kind, render_text(document))
    model = model or get_model()
    try:
        reply = await model.generate(document, analysis.output_schema)
    except LunarScopeError as e:
        logger.warning("%s analysis failed upstream: %s", kind, e.message)
        raise
    except Exception as e:
        logger.warning("%s analysis failed upstream: %s", kind, e)
        raise UpstreamError(f"Model call failed: {e}") from e

    try:
        return validate_output(kind, reply)
    except UpstreamError as e:
        logger.warning("%s analysis returned an off-schema reply: %s", kind, e.details.get("issues"))
        raise


# -----------------------------------------------------------------------------
# Public entry points
# -----------------------------------------------------------------------------
async def detect_features(
    image: str,
    context: Optional[str] = None,
    *,
    model: Optional[StructuredModel] = None,
) -> FeatureDetectionOutput:
    payload = {"photoDataUri": image}
    if context is not None:
        payload["additionalContext"] = context
    return await run_analysis(FEATURE_DETECTION, payload, model=model)


async def analyze_shadow_slope(
    image: str,
    terrain_model: str,
    description: str,
    *,
    model: Optional[StructuredModel] = None,
) -> ShadowSlopeOutput:
    payload = {"imageUri": image, "dtmUri": terrain_model, "description": description}
    return await run_analysis(SHADOW_SLOPE, payload, model=model)


async def enhance_geological_reasoning(
    extracted_features: str,
    known_data: str,
    *,
    model: Optional[StructuredModel] = None,
) -> GeologicalReasoningOutput:
    payload = {"extractedFeatures": extracted_features, "knownGeologicalData": known_data}
    return await run_analysis(GEOLOGICAL_REASONING, payload, model=model)


async def analyze_temporal_changes(
    image_before: str,
    image_after: str,
    date_before: str,
    date_after: str,
    *,
    model: Optional[StructuredModel] = None,
) -> TemporalOutput:
    payload = {
        "imageBeforeUri": image_before,
        "imageAfterUri": image_after,
        "dateBefore": date_before,
        "dateAfter": date_after,
    }
    return await run_analysis(TEMPORAL, payload, model=model)
