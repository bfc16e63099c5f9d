# lunarscope/analyses.py
# Registry: analysis kind -> (input schema, output schema, template).
# The runner in flows.py is driven entirely by this table.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Type

from pydantic import BaseModel

from lunarscope import prompts, schemas
from lunarscope.errors import UnknownAnalysisError


@dataclass(frozen=True)
class Analysis:
    kind: str
    entry_point: str
    description: str
    input_schema: Type[BaseModel]
    output_schema: Type[BaseModel]
    template: str


FEATURE_DETECTION = "feature-detection"
SHADOW_SLOPE = "shadow-slope"
GEOLOGICAL_REASONING = "geological-reasoning"
TEMPORAL = "temporal"


ANALYSES: Dict[str, Analysis] = {
    a.kind: a
    for a in (
        Analysis(
            kind=FEATURE_DETECTION,
            entry_point="detect_features",
            description="Detect landslides, boulders and other hazards in a lunar image.",
            input_schema=schemas.FeatureDetectionInput,
            output_schema=schemas.FeatureDetectionOutput,
            template=prompts.FEATURE_DETECTION_TEMPLATE,
        ),
        Analysis(
            kind=SHADOW_SLOPE,
            entry_point="analyze_shadow_slope",
            description="Separate natural terrain from displaced mass using an image and a DTM.",
            input_schema=schemas.ShadowSlopeInput,
            output_schema=schemas.ShadowSlopeOutput,
            template=prompts.SHADOW_SLOPE_TEMPLATE,
        ),
        Analysis(
            kind=GEOLOGICAL_REASONING,
            entry_point="enhance_geological_reasoning",
            description="Correlate extracted features with known geology into risk zones.",
            input_schema=schemas.GeologicalReasoningInput,
            output_schema=schemas.GeologicalReasoningOutput,
            template=prompts.GEOLOGICAL_REASONING_TEMPLATE,
        ),
        Analysis(
            kind=TEMPORAL,
            entry_point="analyze_temporal_changes",
            description="Compare before/after images of the same region and list the changes.",
            input_schema=schemas.TemporalInput,
            output_schema=schemas.TemporalOutput,
            template=prompts.TEMPORAL_TEMPLATE,
        ),
    )
}


def analysis_kinds() -> List[str]:
    return list(ANALYSES)


def get_analysis(kind: str) -> Analysis:
    try:
        return ANALYSES[kind]
    except KeyError:
        raise UnknownAnalysisError(kind, analysis_kinds()) from None
