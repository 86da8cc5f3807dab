"""Event weather: geocoding fallback, forecast shaping and error mapping."""
from datetime import datetime, timezone
from types import SimpleNamespace

import httpx
import pytest

from motorsports.exceptions import GeocodingError, UpstreamServiceError
from motorsports.services.weather import WeatherService, describe_weather_code, get_weather_service

FORECAST = {
    "current": {
        "temperature_2m": 64.2,
        "apparent_temperature": 62.0,
        "precipitation": 0.0,
        "wind_speed_10m": 8.1,
        "wind_direction_10m": 230,
        "wind_gusts_10m": 15.0,
        "cloud_cover": 40,
        "relative_humidity_2m": 71,
        "visibility": 24000,
        "weather_code": 2,
    },
    "hourly": {
        "time": ["2026-05-16T00:00", "2026-05-16T01:00"],
        "temperature_2m": [55.0, 54.1],
        "precipitation_probability": [10, None],
        "weather_code": [1, 3],
    },
    "daily": {
        "time": ["2026-05-16", "2026-05-17"],
        "temperature_2m_max": [68.0, 66.0],
        "temperature_2m_min": [50.0, 49.5],
        "weather_code": [2, 61],
        "sunrise": ["2026-05-16T05:48"],
        "sunset": ["2026-05-16T21:22", "2026-05-17T21:23"],
    },
}


def _event(**overrides):
    values = dict(
        id="evt-1",
        name="Spa 6 Hours",
        venue="Circuit de Spa-Francorchamps",
        location="Stavelot, Belgium",
        start_date=datetime(2026, 5, 16, 9, 0),
        end_date=datetime(2026, 5, 17, 15, 0, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class FakeOpenMeteo:
    """Routes geocoding and forecast requests; records what was asked."""

    def __init__(self, known_places=("Stavelot, Belgium",), forecast_status=200):
        self.known_places = set(known_places)
        self.forecast_status = forecast_status
        self.geocode_queries = []
        self.forecast_params = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "geocoding-api.open-meteo.com":
            name = request.url.params["name"]
            self.geocode_queries.append(name)
            if name in self.known_places:
                return httpx.Response(200, json={"results": [{"latitude": 50.44, "longitude": 5.97}]})
            return httpx.Response(200, json={})
        self.forecast_params = dict(request.url.params)
        if self.forecast_status != 200:
            return httpx.Response(self.forecast_status, json={"error": True})
        return httpx.Response(200, json=FORECAST)


def _service(settings, fake):
    return WeatherService(settings, transport=httpx.MockTransport(fake))


def test_weather_code_lookup():
    assert describe_weather_code(2)["condition"] == "Partly Cloudy"
    assert describe_weather_code(42)["condition"] == "Unknown"
    assert describe_weather_code(None)["condition"] == "Unknown"


@pytest.mark.asyncio
async def test_falls_back_to_location(settings):
    fake = FakeOpenMeteo()
    payload = await _service(settings, fake).get_event_weather(_event())

    assert fake.geocode_queries == ["Circuit de Spa-Francorchamps, Stavelot, Belgium", "Stavelot, Belgium"]
    assert payload["coordinates"] == {"latitude": 50.44, "longitude": 5.97}
    assert payload["eventId"] == "evt-1"
    assert payload["startDate"].startswith("2026-05-16T09:00:00")
    assert payload["units"] == {"temperature": "°F", "wind_speed": "mph", "precipitation": "in", "visibility": "m"}
    assert "fetched_at" in payload


@pytest.mark.asyncio
async def test_venue_match_skips_fallback(settings):
    fake = FakeOpenMeteo(known_places=("Circuit de Spa-Francorchamps, Stavelot, Belgium",))
    await _service(settings, fake).get_event_weather(_event())
    assert len(fake.geocode_queries) == 1


@pytest.mark.asyncio
async def test_forecast_request_parameters(settings):
    fake = FakeOpenMeteo()
    await _service(settings, fake).get_event_weather(_event())
    params = fake.forecast_params
    assert params["temperature_unit"] == "fahrenheit"
    assert params["wind_speed_unit"] == "mph"
    assert params["precipitation_unit"] == "inch"
    assert params["timezone"] == "auto"
    assert params["start_date"] == "2026-05-16"
    assert params["end_date"] == "2026-05-17"


@pytest.mark.asyncio
async def test_payload_shape(settings):
    payload = await _service(settings, FakeOpenMeteo()).get_event_weather(_event())

    current = payload["current"]
    assert current["temperature"] == 64.2
    assert current["relative_humidity"] == 71
    assert current["condition"] == "Partly Cloudy"

    assert len(payload["hourly"]) == 2
    assert payload["hourly"][1]["precipitation_probability"] == 0
    assert payload["hourly"][1]["wind_speed_10m"] == 0

    second_day = payload["daily"][1]
    assert second_day["date"] == "2026-05-17"
    assert second_day["temperature_min"] == 49.5
    assert second_day["weather_code"] == 61
    assert second_day["sunrise"] == ""


@pytest.mark.asyncio
async def test_no_geocoding_match(settings):
    with pytest.raises(GeocodingError) as exc_info:
        await _service(settings, FakeOpenMeteo(known_places=())).get_event_weather(_event())
    assert str(exc_info.value) == (
        'Unable to geocode location: "Stavelot, Belgium". '
        "Please ensure the event location is a recognisable city or region."
    )


@pytest.mark.asyncio
async def test_upstream_failure(settings):
    with pytest.raises(UpstreamServiceError):
        await _service(settings, FakeOpenMeteo(forecast_status=503)).get_event_weather(_event())


class TestWeatherRoute:
    def _use(self, app, settings, fake):
        app.dependency_overrides[get_weather_service] = lambda: _service(settings, fake)

    def test_success(self, client, app, settings, viewer_headers, event):
        self._use(app, settings, FakeOpenMeteo())
        response = client.get(f"/api/events/{event.id}/weather", headers=viewer_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["eventName"] == "Spa 6 Hours"
        assert data["current"]["icon"]

    def test_unknown_event(self, client, app, settings, viewer_headers):
        self._use(app, settings, FakeOpenMeteo())
        response = client.get("/api/events/missing/weather", headers=viewer_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "Event not found"

    def test_location_not_found_is_422(self, client, app, settings, viewer_headers, event):
        self._use(app, settings, FakeOpenMeteo(known_places=()))
        response = client.get(f"/api/events/{event.id}/weather", headers=viewer_headers)
        assert response.status_code == 422
        assert response.json()["error"].startswith('Unable to geocode location: "Stavelot, Belgium".')

    def test_upstream_failure_is_500(self, client, app, settings, viewer_headers, event):
        self._use(app, settings, FakeOpenMeteo(forecast_status=500))
        response = client.get(f"/api/events/{event.id}/weather", headers=viewer_headers)
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to fetch weather data. Please try again later.",
        }
