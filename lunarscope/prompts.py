# lunarscope/prompts.py
# Instruction templates (one per analysis kind) and the composer that fills them.
#
# Template syntax:
#   {fieldName}          -> replaced by the field's text (wire name); missing optional -> ""
#   {{media fieldName}}  -> the field's data URI, attached inline as a media part

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from pydantic import BaseModel

from lunarscope.schemas import parse_data_uri

_MEDIA_RE = re.compile(r"\{\{media (\w+)\}\}")


@dataclass(frozen=True)
class MediaPart:
    """Binary attachment placed at a fixed position in the prompt."""
    mime_type: str
    data: bytes


PromptPart = Union[str, MediaPart]
PromptDocument = List[PromptPart]


FEATURE_DETECTION_TEMPLATE = """\
You are an expert in lunar geology and image analysis. Your task is to analyze lunar images and detect potential hazards, specifically landslides and boulders.

Analyze the following image and any additional context to identify landslides, boulders, and other notable geological features.

Image: {{media photoDataUri}}
Additional Context: {additionalContext}

Based on your analysis, provide a list of detected features with their type, a confidence level between 0 and 1, and a description of where each one is located in the image. Also provide a summary of the detected features and any potential hazards they pose to lunar missions.

Respond with JSON that follows the provided response schema.
"""

SHADOW_SLOPE_TEMPLATE = """\
You are an expert lunar geologist specializing in analyzing lunar terrain.

You will use the image and DTM data provided to analyze shadow and slope-based features to differentiate between natural terrain and displaced mass. Provide a risk assessment based on your findings.

Description: {description}
Image: {{media imageUri}}
DTM: {{media dtmUri}}
"""

GEOLOGICAL_REASONING_TEMPLATE = """\
You are a geologist specializing in lunar risk assessment. Analyze the extracted lunar features and correlate them with known geological data to identify and map risk zones accurately.

Extracted Features: {extractedFeatures}
Known Geological Data: {knownGeologicalData}

Based on your analysis, provide a risk zone mapping and contextual analysis.
Output a string that can be put into a GeoJSON file for the riskZoneMapping field, and then a paragraph form analysis for the llmContextualAnalysis field.
"""

TEMPORAL_TEMPLATE = """\
You are an expert in lunar geology and temporal image analysis. Your task is to compare two images of the same lunar region taken at different times and identify any geological changes.

Image Before (taken on {dateBefore}):
{{media imageBeforeUri}}

Image After (taken on {dateAfter}):
{{media imageAfterUri}}

Analyze these two images to identify any changes such as new craters, boulder movements, landslides, or any other surface disturbances. Provide a summary of your findings and a detailed list of each significant change you detect, including its location and its significance (low, medium or high) for mission planning.
"""


def _text_values(record: BaseModel) -> Dict[str, Any]:
    values = record.model_dump(by_alias=True)
    return {k: ("" if v is None else v) for k, v in values.items()}


def compose_prompt(template: str, record: BaseModel) -> PromptDocument:
    """
    Fill `template` from a validated input record.
    Returns the ordered parts: text chunks interleaved with MediaPart attachments.
    """
    values = _text_values(record)
    document: PromptDocument = []

    pieces = _MEDIA_RE.split(template)
    # re.split with one group alternates: text, field, text, field, ..., text
    for i, piece in enumerate(pieces):
        if i % 2 == 0:
            text = piece.format_map(values)
            if text:
                document.append(text)
        else:
            ref = parse_data_uri(values[piece])
            document.append(MediaPart(mime_type=ref.mime_type, data=ref.data))

    return document


def render_text(document: PromptDocument) -> str:
    """Human-readable rendering with media shown as placeholders, never raw bytes."""
    out: List[str] = []
    for part in document:
        if isinstance(part, MediaPart):
            out.append(f"<media {part.mime_type}, {len(part.data)} bytes>")
        else:
            out.append(part)
    return "".join(out)
