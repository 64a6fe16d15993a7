"""Tests for reshaping forecast payloads."""

from homedash.core.modules.weather.models import HOURLY_SLOTS, WeatherReport


def test_report_from_full_forecast():
    payload = {
        "latitude": 40.71,
        "longitude": -74.01,
        "timezone": "America/New_York",
        "current": {
            "time": "2025-03-01T09:00",
            "temperature_2m": 41.2,
            "apparent_temperature": 36.5,
            "weather_code": 3,
            "wind_speed_10m": 9.8,
        },
        "hourly": {
            "time": [f"2025-03-01T{hour:02d}:00" for hour in range(24)],
            "temperature_2m": [float(hour) for hour in range(24)],
            "apparent_temperature": [float(hour) - 1 for hour in range(24)],
            "weather_code": [2] * 24,
            "precipitation_probability": [hour * 2 for hour in range(24)],
        },
    }

    report = WeatherReport.from_forecast(payload).model_dump(by_alias=True)

    assert report["location"] == {"latitude": 40.71, "longitude": -74.01, "timezone": "America/New_York"}
    assert report["current"] == {
        "at": "2025-03-01T09:00",
        "temperature": 41.2,
        "apparentTemperature": 36.5,
        "weatherCode": 3,
        "windSpeed": 9.8,
    }
    assert len(report["hourly"]) == HOURLY_SLOTS
    assert report["hourly"][5] == {
        "at": "2025-03-01T05:00",
        "temperature": 5.0,
        "apparentTemperature": 4.0,
        "weatherCode": 2,
        "precipitationProbability": 10,
    }


def test_missing_hourly_values_are_null():
    payload = {"hourly": {"time": ["2025-03-01T00:00", "2025-03-01T01:00"], "temperature_2m": [30.0]}}

    report = WeatherReport.from_forecast(payload)

    assert [hour.temperature for hour in report.hourly] == [30.0, None]
    assert report.hourly[1].weather_code is None


def test_empty_forecast():
    report = WeatherReport.from_forecast({})

    assert report.hourly == []
    assert report.current.temperature is None
    assert report.location.timezone is None
