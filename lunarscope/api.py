# lunarscope/api.py
# FastAPI entrypoint: one POST route per analysis kind (via the registry), health, listing.
# Run locally with: uvicorn lunarscope.api:app  (or: python -m lunarscope serve)

from __future__ import annotations

from typing import Any, List

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lunarscope.analyses import ANALYSES
from lunarscope.errors import (
    InputValidationError,
    LunarScopeError,
    UnknownAnalysisError,
    format_error_response,
)
from lunarscope.flows import run_analysis
from lunarscope.schemas import AnalysisInfo, HealthResponse
from lunarscope.settings import get_settings, setup_logging

# -----------------------------------------------------------------------------
# App setup
# -----------------------------------------------------------------------------
settings = get_settings()
setup_logging(settings)

app = FastAPI(title="LunarScope", description="LLM-assisted lunar surface hazard analysis.")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _status_for(error: LunarScopeError) -> int:
    if isinstance(error, UnknownAnalysisError):
        return 404
    if isinstance(error, InputValidationError):
        return 422
    return 502


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [
        {"field": ".".join(str(p) for p in err.get("loc", ())) or "<root>", "reason": err.get("msg", "invalid value")}
        for err in exc.errors()
    ]
    error = InputValidationError("Invalid request body", issues=issues)
    return JSONResponse(status_code=422, content=format_error_response(error))


@app.exception_handler(LunarScopeError)
async def lunarscope_error_handler(request: Request, exc: LunarScopeError) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content=format_error_response(exc))


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
@app.get("/api/health", response_model=HealthResponse)
def health():
    st = get_settings()
    return HealthResponse(status="ok", has_gemini_key=st.has_gemini_key, model=st.GEMINI_MODEL)


@app.get("/api/v1/analyses", response_model=List[AnalysisInfo])
def list_analyses():
    return [
        AnalysisInfo(kind=a.kind, entry_point=a.entry_point, description=a.description)
        for a in ANALYSES.values()
    ]


@app.post("/api/v1/analyses/{kind}")
async def analyze(kind: str, payload: Any = Body(...)) -> JSONResponse:
    # Any JSON is accepted here; run_analysis checks it against the kind's own schema
    result = await run_analysis(kind, payload)
    return JSONResponse(content=result.model_dump(by_alias=True, mode="json"))


@app.get("/")
def root():
    return {"message": "LunarScope is running. POST /api/v1/analyses/<kind> with a JSON record."}


# -----------------------------------------------------------------------------
# Local dev
# -----------------------------------------------------------------------------
def serve(host: str = "0.0.0.0", port: int = 0) -> None:
    import uvicorn
    uvicorn.run("lunarscope.api:app", host=host, port=port or get_settings().PORT, reload=False)


if __name__ == "__main__":
    serve()
