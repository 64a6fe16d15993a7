from typing import Annotated

from fastapi import APIRouter, Query

from homedash.core.modules.weather.models import WeatherReport
from homedash.web.deps import AppDep
from homedash.web.envelope import Envelope, ok
from homedash.web.openapi import ErrorResponse

router = APIRouter(tags=["weather"])


@router.get(
    "/weather",
    summary="Get weather forecast",
    description=(
        "Current conditions and the next 12 hours for a location, in imperial units "
        "(°F, mph, inches). Data comes from Open-Meteo."
    ),
    operation_id="getWeather",
    responses={
        200: {"description": "Forecast for the location"},
        400: {"model": ErrorResponse, "description": "Missing or out-of-range coordinates"},
        502: {"model": ErrorResponse, "description": "Forecast provider failed"},
    },
)
async def get_weather(
    app: AppDep,
    lat: Annotated[str | None, Query(description="Latitude, -90..90")] = None,
    lon: Annotated[str | None, Query(description="Longitude, -180..180")] = None,
) -> Envelope[WeatherReport]:
    return ok(await app.get_weather(lat, lon))
