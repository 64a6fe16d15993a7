import httpx
import structlog

from homedash.core.core import Database, Service
from homedash.core.modules.weather.models import Coordinates, WeatherReport
from homedash.errors import UpstreamError

logger = structlog.get_logger(__name__)

CURRENT_FIELDS = "temperature_2m,apparent_temperature,weather_code,wind_speed_10m"
HOURLY_FIELDS = "temperature_2m,apparent_temperature,weather_code,precipitation_probability"
USER_AGENT = "homedash/1.0"


class WeatherService(Service):
    """Proxies forecast requests to Open-Meteo."""

    def __init__(self, database: Database) -> None:
        super().__init__(database)
        self.transport: httpx.AsyncBaseTransport | None = None  # Replaced in tests
        self._client: httpx.AsyncClient | None = None

    async def on_start(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=self.core.config.weather_timeout,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        )

    async def on_stop(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Weather client not started")
        return self._client

    async def get_forecast(self, coordinates: Coordinates) -> WeatherReport:
        """Fetch current conditions and the next hours in imperial units."""
        params = {
            "latitude": f"{coordinates.latitude:.4f}",
            "longitude": f"{coordinates.longitude:.4f}",
            "current": CURRENT_FIELDS,
            "hourly": HOURLY_FIELDS,
            "timezone": "auto",
            "temperature_unit": "fahrenheit",
            "windspeed_unit": "mph",
            "precipitation_unit": "inch",
        }
        try:
            response = await self.client.get(self.core.config.weather_api_url, params=params)
        except httpx.HTTPError as e:
            logger.warning("weather_upstream_unreachable", error=str(e))
            raise UpstreamError("Weather upstream unavailable") from e

        if not response.is_success:
            logger.warning("weather_upstream_error", status_code=response.status_code)
            raise UpstreamError(f"Weather upstream error ({response.status_code} {response.reason_phrase})")

        return WeatherReport.from_forecast(response.json())
