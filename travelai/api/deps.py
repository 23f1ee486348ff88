# Role: Shared dependencies for the API routers. One stateless pipeline instance serves every request;
# routers receive it through FastAPI's dependency injection so tests can override it.

from travelai.core.pipeline import ItineraryPipeline

pipeline = ItineraryPipeline()


def get_pipeline() -> ItineraryPipeline:
    return pipeline
