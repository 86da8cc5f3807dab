"""Weather service - event forecasts from Open-Meteo (no API key required)."""
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import Request

from motorsports.config import Settings
from motorsports.exceptions import GeocodingError, UpstreamServiceError
from motorsports.schemas.event import as_utc

logger = logging.getLogger(__name__)

# WMO weather interpretation codes
# https://open-meteo.com/en/docs
WMO_WEATHER_CODES = {
    0: {"condition": "Clear Sky", "description": "Clear sky", "icon": "☀️"},
    1: {"condition": "Mainly Clear", "description": "Mainly clear", "icon": "🌤️"},
    2: {"condition": "Partly Cloudy", "description": "Partly cloudy", "icon": "⛅"},
    3: {"condition": "Overcast", "description": "Overcast", "icon": "☁️"},
    45: {"condition": "Foggy", "description": "Fog", "icon": "🌫️"},
    48: {"condition": "Icy Fog", "description": "Depositing rime fog", "icon": "🌫️"},
    51: {"condition": "Light Drizzle", "description": "Light drizzle", "icon": "🌦️"},
    53: {"condition": "Drizzle", "description": "Moderate drizzle", "icon": "🌦️"},
    55: {"condition": "Heavy Drizzle", "description": "Dense drizzle", "icon": "🌧️"},
    61: {"condition": "Light Rain", "description": "Slight rain", "icon": "🌧️"},
    63: {"condition": "Rain", "description": "Moderate rain", "icon": "🌧️"},
    65: {"condition": "Heavy Rain", "description": "Heavy rain", "icon": "🌧️"},
    71: {"condition": "Light Snow", "description": "Slight snowfall", "icon": "🌨️"},
    73: {"condition": "Snow", "description": "Moderate snowfall", "icon": "❄️"},
    75: {"condition": "Heavy Snow", "description": "Heavy snowfall", "icon": "❄️"},
    77: {"condition": "Snow Grains", "description": "Snow grains", "icon": "🌨️"},
    80: {"condition": "Light Showers", "description": "Slight rain showers", "icon": "🌦️"},
    81: {"condition": "Showers", "description": "Moderate rain showers", "icon": "🌧️"},
    82: {"condition": "Heavy Showers", "description": "Violent rain showers", "icon": "⛈️"},
    85: {"condition": "Snow Showers", "description": "Slight snow showers", "icon": "🌨️"},
    86: {"condition": "Heavy Snow Showers", "description": "Heavy snow showers", "icon": "❄️"},
    95: {"condition": "Thunderstorm", "description": "Thunderstorm", "icon": "⛈️"},
    96: {"condition": "Thunderstorm + Hail", "description": "Thunderstorm with slight hail", "icon": "⛈️"},
    99: {"condition": "Thunderstorm + Hail", "description": "Thunderstorm with heavy hail", "icon": "⛈️"},
}

UNKNOWN_WEATHER = {"condition": "Unknown", "description": "Unknown conditions", "icon": "❓"}

CURRENT_FIELDS = [
    "temperature_2m",
    "apparent_temperature",
    "precipitation",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "cloud_cover",
    "relative_humidity_2m",
    "visibility",
    "weather_code",
]

HOURLY_FIELDS = [
    "temperature_2m",
    "apparent_temperature",
    "precipitation_probability",
    "precipitation",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "weather_code",
    "cloud_cover",
    "relative_humidity_2m",
    "visibility",
]

# daily output key -> Open-Meteo series name
DAILY_FIELDS = {
    "temperature_max": "temperature_2m_max",
    "temperature_min": "temperature_2m_min",
    "precipitation_sum": "precipitation_sum",
    "precipitation_probability_max": "precipitation_probability_max",
    "wind_speed_max": "wind_speed_10m_max",
    "wind_gusts_max": "wind_gusts_10m_max",
    "wind_direction_dominant": "wind_direction_10m_dominant",
    "weather_code": "weather_code",
    "sunrise": "sunrise",
    "sunset": "sunset",
}

UNITS = {
    "temperature": "°F",
    "wind_speed": "mph",
    "precipitation": "in",
    "visibility": "m",
}


def describe_weather_code(code: Optional[int]) -> dict:
    return WMO_WEATHER_CODES.get(code, UNKNOWN_WEATHER)


def _series_value(series: dict, key: str, index: int, default=0):
    values = series.get(key) or []
    if index < len(values) and values[index] is not None:
        return values[index]
    return default


class WeatherService:
    """Geocoding and forecast lookups for event venues.

    ``transport`` lets tests plug in an ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.geocoding_url = settings.GEOCODING_API_URL
        self.forecast_url = settings.FORECAST_API_URL
        self.timeout = settings.WEATHER_TIMEOUT_SECONDS
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": "MotorsportsManagement/1.0"},
        )

    async def _get_json(self, url: str, params: dict) -> dict:
        try:
            async with self._client() as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamServiceError(f"{url}: {e}") from e

    async def geocode(self, query: str) -> Optional[dict]:
        """First geocoding match as ``{latitude, longitude}``, or None."""
        data = await self._get_json(
            self.geocoding_url,
            {"name": query, "count": 1, "language": "en", "format": "json"},
        )
        results = data.get("results") or []
        if not results:
            return None
        return {"latitude": results[0]["latitude"], "longitude": results[0]["longitude"]}

    async def fetch_forecast(self, latitude: float, longitude: float, start_date: str, end_date: str) -> dict:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS.values()),
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "precipitation_unit": "inch",
            "timezone": "auto",
            "start_date": start_date,
            "end_date": end_date,
        }
        return await self._get_json(self.forecast_url, params)

    async def get_event_weather(self, event) -> dict:
        """Forecast for an event's venue over its date range."""
        coordinates = await self.geocode(f"{event.venue}, {event.location}")
        if coordinates is None:
            # Venue names are often unknown to the geocoder
            coordinates = await self.geocode(event.location)
        if coordinates is None:
            raise GeocodingError(
                f'Unable to geocode location: "{event.location}". '
                "Please ensure the event location is a recognisable city or region."
            )

        start = as_utc(event.start_date)
        end = as_utc(event.end_date)
        forecast = await self.fetch_forecast(
            coordinates["latitude"],
            coordinates["longitude"],
            start.date().isoformat(),
            end.date().isoformat(),
        )
        logger.info("Fetched weather for event %s", event.id)

        current = forecast.get("current") or {}
        condition = describe_weather_code(current.get("weather_code"))

        hourly_series = forecast.get("hourly") or {}
        hourly = [
            dict(
                {"time": time},
                **{key: _series_value(hourly_series, key, i) for key in HOURLY_FIELDS},
            )
            for i, time in enumerate(hourly_series.get("time") or [])
        ]

        daily_series = forecast.get("daily") or {}
        daily = []
        for i, date in enumerate(daily_series.get("time") or []):
            day = {"date": date}
            for key, source in DAILY_FIELDS.items():
                default = "" if key in ("sunrise", "sunset") else 0
                day[key] = _series_value(daily_series, source, i, default)
            daily.append(day)

        return {
            "eventId": event.id,
            "eventName": event.name,
            "venue": event.venue,
            "location": event.location,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "coordinates": coordinates,
            "current": {
                "temperature": current.get("temperature_2m"),
                "apparent_temperature": current.get("apparent_temperature"),
                "wind_speed": current.get("wind_speed_10m"),
                "wind_direction": current.get("wind_direction_10m"),
                "wind_gusts": current.get("wind_gusts_10m"),
                "precipitation": current.get("precipitation"),
                "cloud_cover": current.get("cloud_cover"),
                "relative_humidity": current.get("relative_humidity_2m"),
                "visibility": current.get("visibility"),
                "weather_code": current.get("weather_code"),
                "condition": condition["condition"],
                "description": condition["description"],
                "icon": condition["icon"],
            },
            "daily": daily,
            "hourly": hourly,
            "units": dict(UNITS),
            "fetched_at": datetime.now(timezone.utc).isoformat(),
        }


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service
