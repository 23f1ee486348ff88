# Role: FastAPI app bootstrap. Loads environment config early, registers routers and error handlers,
# and exposes health/docs endpoints.

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import travelai.config
travelai.config.load_env()

from travelai.api.itinerary import router as itinerary_router
from travelai.models.errors import INVALID_INPUT_MESSAGE, PipelineError

logger = logging.getLogger(__name__)

app = FastAPI(title="TravelAI Itinerary API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=travelai.config.allowed_origins(),
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)
app.include_router(itinerary_router)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    # Key line: callers get a short message; diagnostics only go to `details` and the server log.
    logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Undecodable / missing JSON bodies are caller errors just like a bad discriminant.
    details = "; ".join(str(err.get("msg")) for err in exc.errors()) or "Invalid request body."
    return JSONResponse(status_code=400, content={"error": INVALID_INPUT_MESSAGE, "details": details})


@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health).
    return {
        "message": "TravelAI Itinerary API is running",
        "docs": "/docs",
        "health": "/health",
        "generate": "/generate-itinerary",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
