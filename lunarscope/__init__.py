# lunarscope/__init__.py
# Re-export the public entry points for convenience.

from .analyses import ANALYSES, analysis_kinds
from .errors import InputValidationError, LunarScopeError, UnknownAnalysisError, UpstreamError
from .flows import (
    analyze_shadow_slope,
    analyze_temporal_changes,
    detect_features,
    enhance_geological_reasoning,
    run_analysis,
)

__version__ = "0.1.0"

__all__ = [
    "ANALYSES",
    "analysis_kinds",
    "run_analysis",
    "detect_features",
    "analyze_shadow_slope",
    "enhance_geological_reasoning",
    "analyze_temporal_changes",
    "LunarScopeError",
    "InputValidationError",
    "UnknownAnalysisError",
    "UpstreamError",
]
