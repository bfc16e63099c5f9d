"""Shared fixtures: sample requests, schema-conformant replies, and a recording stub model."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import pytest

PNG_URI = "data:image/png;base64,AAAA"
DTM_URI = "data:image/tiff;base64,SUkqAAgAAAA="


class RecordingModel:
    """Stub model collaborator: returns a canned reply and records every call."""

    def __init__(self, reply: Any = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @property
    def invoked(self) -> bool:
        return bool(self.calls)

    async def generate(self, document, output_schema):
        self.calls.append({"document": document, "output_schema": output_schema})
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.reply)


VALID_REQUESTS: Dict[str, Dict[str, Any]] = {
    "feature-detection": {
        "photoDataUri": PNG_URI,
        "additionalContext": "landing hazards",
    },
    "shadow-slope": {
        "imageUri": PNG_URI,
        "dtmUri": DTM_URI,
        "description": "Crater rim near the south pole",
    },
    "geological-reasoning": {
        "extractedFeatures": "Three boulders and one landslide scar on the east wall",
        "knownGeologicalData": "Highland anorthosite, regolith depth ~5m",
    },
    "temporal": {
        "imageBeforeUri": PNG_URI,
        "imageAfterUri": "data:image/jpeg;base64,/9j/4AAQ",
        "dateBefore": "2023-08-23",
        "dateAfter": "2024-01-10",
    },
}

REPLIES: Dict[str, Dict[str, Any]] = {
    "feature-detection": {
        "detectedFeatures": [
            {"type": "boulder", "confidence": 0.82, "locationDescription": "NE quadrant"},
        ],
        "summary": "One boulder detected.",
    },
    "shadow-slope": {
        "analysisResults": "Shadows on the west slope are consistent with slumped material.",
        "riskAssessment": "Moderate risk for landing within 200 m of the scarp.",
    },
    "geological-reasoning": {
        "riskZoneMapping": '{"type": "FeatureCollection", "features": []}',
        "llmContextualAnalysis": "The boulder field correlates with recent impact ejecta.",
    },
    "temporal": {
        "changeSummary": "A new crater appeared in sector 4.",
        "detailedChanges": [
            {"description": "new crater", "location": "sector 4", "significance": "high"},
        ],
    },
}

# Kinds with at least one embedded-binary field, and those fields
BINARY_FIELDS: Dict[str, List[str]] = {
    "feature-detection": ["photoDataUri"],
    "shadow-slope": ["imageUri", "dtmUri"],
    "temporal": ["imageBeforeUri", "imageAfterUri"],
}


@pytest.fixture
def valid_request():
    def _get(kind: str) -> Dict[str, Any]:
        return copy.deepcopy(VALID_REQUESTS[kind])
    return _get


@pytest.fixture
def reply_for():
    def _get(kind: str) -> Dict[str, Any]:
        return copy.deepcopy(REPLIES[kind])
    return _get


@pytest.fixture
def shared_model():
    """Install a stub as the process-wide model handle; reset afterwards."""
    from lunarscope.model import set_model

    stub = RecordingModel()
    set_model(stub)
    yield stub
    set_model(None)
