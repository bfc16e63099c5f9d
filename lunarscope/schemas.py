# lunarscope/schemas.py
# Pydantic models for the four analysis kinds (input + output records).
# Wire names are camelCase; Python attributes are snake_case.

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[^;,]*)*);base64,(?P<data>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class DataUri:
    """A decoded `data:<mimetype>;base64,<data>` reference."""
    mime_type: str
    data: bytes


def parse_data_uri(value: str) -> DataUri:
    """
    Split and decode a self-describing data reference.
    Raises ValueError if the value does not declare a media type and base64 encoding,
    or if the payload is empty or not valid base64.
    """
    if not isinstance(value, str) or not value.startswith("data:"):
        raise ValueError("Must be a data URI starting with 'data:'")

    m = _DATA_URI_RE.match(value)
    if not m:
        raise ValueError("Must be a data URI of the form data:<mimetype>;base64,<data>")

    payload = m.group("data").strip()
    if not payload:
        raise ValueError("Data URI payload is empty")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Data URI payload is not valid base64")

    return DataUri(mime_type=m.group("mime").lower(), data=data)


def _check_data_uri(value: str) -> str:
    parse_data_uri(value)
    return value


DataUriStr = Annotated[str, AfterValidator(_check_data_uri)]


class _WireModel(BaseModel):
    # Strict: no coercion of form inputs or of model replies
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, strict=True)


# -----------------------------------------------------------------------------
# Feature detection
# -----------------------------------------------------------------------------
class FeatureDetectionInput(_WireModel):
    photo_data_uri: DataUriStr = Field(
        ...,
        description="A photo of the lunar surface as a data URI: 'data:<mimetype>;base64,<encoded_data>'.",
        examples=["data:image/png;base64,iVBORw0KGgo="],
    )
    additional_context: Optional[str] = Field(
        default=None, description="Any additional context or information about the image."
    )


class DetectedFeature(_WireModel):
    feature_type: str = Field(..., alias="type", description="Kind of feature, e.g. landslide or boulder.")
    confidence: float = Field(..., description="Confidence of the detection (0-1).")
    location_description: str = Field(..., description="Where the feature sits within the image.")


class FeatureDetectionOutput(_WireModel):
    detected_features: List[DetectedFeature] = Field(..., description="Detected lunar features.")
    summary: str = Field(..., description="Summary of the detected features and potential hazards.")


# -----------------------------------------------------------------------------
# Shadow / slope analysis
# -----------------------------------------------------------------------------
class ShadowSlopeInput(_WireModel):
    image_uri: DataUriStr = Field(..., description="Lunar surface image as a data URI.")
    dtm_uri: DataUriStr = Field(..., description="Digital Terrain Model (DTM) as a data URI.")
    description: str = Field(..., description="Description of the area being analyzed.")


class ShadowSlopeOutput(_WireModel):
    analysis_results: str = Field(..., description="Findings on shadow and slope-based features.")
    risk_assessment: str = Field(..., description="Risk assessment based on the displaced-mass analysis.")


# -----------------------------------------------------------------------------
# Geological reasoning
# -----------------------------------------------------------------------------
class GeologicalReasoningInput(_WireModel):
    extracted_features: str = Field(..., description="Extracted lunar features such as landslides and boulders.")
    known_geological_data: str = Field(..., description="Known geological data of the lunar surface.")


class GeologicalReasoningOutput(_WireModel):
    # Meant to hold GeoJSON text; kept opaque, the model is trusted for its shape
    risk_zone_mapping: str = Field(..., description="Risk zone map, as text suitable for a GeoJSON file.")
    llm_contextual_analysis: str = Field(..., description="Paragraph-form contextual analysis.")


# -----------------------------------------------------------------------------
# Temporal comparison
# -----------------------------------------------------------------------------
Significance = Literal["low", "medium", "high"]


class TemporalInput(_WireModel):
    image_before_uri: DataUriStr = Field(..., description="The 'before' lunar image as a data URI.")
    image_after_uri: DataUriStr = Field(..., description="The 'after' lunar image as a data URI.")
    date_before: str = Field(..., description="Date the 'before' image was taken.")
    date_after: str = Field(..., description="Date the 'after' image was taken.")


class DetectedChange(_WireModel):
    description: str = Field(..., description="Description of a specific change.")
    location: str = Field(..., description="Location of the change within the image.")
    significance: Significance = Field(..., description="Significance of the change for mission planning.")


class TemporalOutput(_WireModel):
    change_summary: str = Field(..., description="High-level summary of the changes between the two images.")
    detailed_changes: List[DetectedChange] = Field(..., description="Each significant change found.")


# -----------------------------------------------------------------------------
# Service envelopes
# -----------------------------------------------------------------------------
class HealthResponse(BaseModel):
    status: str = Field(..., examples=["ok"])
    has_gemini_key: bool
    model: str


class AnalysisInfo(BaseModel):
    kind: str
    entry_point: str
    description: str
