from typing import Any

from pydantic import Field

from homedash.core.db import CamelModel

HOURLY_SLOTS = 12


class Coordinates(CamelModel):
    latitude: float
    longitude: float


class WeatherLocation(CamelModel):
    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None


class CurrentWeather(CamelModel):
    at: str | None = None
    temperature: float | None = None
    apparent_temperature: float | None = None
    weather_code: int | None = None
    wind_speed: float | None = None


class HourlyWeather(CamelModel):
    at: str
    temperature: float | None = None
    apparent_temperature: float | None = None
    weather_code: int | None = None
    precipitation_probability: float | None = None


class WeatherReport(CamelModel):
    """Forecast reshaped for the dashboard widget (imperial units)."""

    location: WeatherLocation
    current: CurrentWeather
    hourly: list[HourlyWeather] = Field(default_factory=list)

    @classmethod
    def from_forecast(cls, payload: dict[str, Any]) -> "WeatherReport":
        """Build the report from an Open-Meteo forecast response."""
        current = payload.get("current") or {}
        hourly = payload.get("hourly") or {}

        def hourly_value(key: str, index: int) -> Any:
            values = hourly.get(key) or []
            return values[index] if index < len(values) else None

        return cls(
            location=WeatherLocation(
                latitude=payload.get("latitude"),
                longitude=payload.get("longitude"),
                timezone=payload.get("timezone"),
            ),
            current=CurrentWeather(
                at=current.get("time"),
                temperature=current.get("temperature_2m"),
                apparent_temperature=current.get("apparent_temperature"),
                weather_code=current.get("weather_code"),
                wind_speed=current.get("wind_speed_10m"),
            ),
            hourly=[
                HourlyWeather(
                    at=time,
                    temperature=hourly_value("temperature_2m", index),
                    apparent_temperature=hourly_value("apparent_temperature", index),
                    weather_code=hourly_value("weather_code", index),
                    precipitation_probability=hourly_value("precipitation_probability", index),
                )
                for index, time in enumerate((hourly.get("time") or [])[:HOURLY_SLOTS])
            ],
        )
