"""
Health check router.

Liveness/readiness endpoint. Reports the build version, the deployment
environment and whether the database answers. A database that does not
answer turns the response into a 503.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.engine import Engine

from visionchat.core.config import settings
from visionchat.infrastructure.database import ping_database
from visionchat.interfaces.dependencies import get_engine
from visionchat.interfaces.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
    summary="Health check",
    description="Returns version, environment and database reachability.",
)
def health_check(response: Response, engine: Engine = Depends(get_engine)) -> HealthResponse:
    database_up = ping_database(engine)
    if not database_up:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="ok" if database_up else "degraded",
        version=settings.version,
        environment=settings.environment,
        database="ok" if database_up else "unavailable",
    )
