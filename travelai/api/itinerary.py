# Role: Thin HTTP adapter for itinerary generation. Hands the raw body to the pipeline (which owns
# validation) and serializes the canonical itinerary; typed failures are mapped to
# {"error", "details"} bodies by the exception handlers registered in travelai/main.py.

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from travelai.api.deps import get_pipeline
from travelai.core.pipeline import ItineraryPipeline

router = APIRouter(tags=["itinerary"])


@router.post("/generate-itinerary")
def generate_itinerary(
    payload: Any = Body(...),
    pipeline: ItineraryPipeline = Depends(get_pipeline),
) -> Dict[str, Any]:
    # 1) Forward the raw body (preferences OR naturalLanguageQuery) to the pipeline
    # 2) Return the itinerary with camelCase keys
    itinerary = pipeline.generate(payload)
    return itinerary.to_json_dict()
