# tests/test_conditions.py
import forecast_bot.conditions as conditions
from forecast_bot.conditions import AccuWeatherClient, CurrentConditions


def _observation():
    return {
        "WeatherText": "Mostly sunny",
        "HasPrecipitation": False,
        "PrecipitationType": None,
        "Temperature": {"Metric": {"Value": 23.9}, "Imperial": {"Value": 75.0}},
        "RealFeelTemperature": {"Imperial": {"Value": 77.0}},
        "RelativeHumidity": 40,
        "Wind": {"Direction": {"English": "WSW"}, "Speed": {"Imperial": {"Value": 8.1}}},
        "WindGust": {"Speed": {"Imperial": {"Value": 12.7}}},
        "Pressure": {"Imperial": {"Value": 29.92}},
        "PressureTendency": {"LocalizedText": "Steady"},
        "PrecipitationSummary": {"PastHour": {"Imperial": {"Value": 0.0}}},
        "Link": "http://www.accuweather.com/en/us/los-angeles-ca/90012/current-weather/347625",
    }


def test_resolve_city_id(monkeypatch):
    captured = {}

    def fake_get_json(url, params=None):
        captured["url"] = url
        captured["params"] = params
        return [{"Key": "347625", "LocalizedName": "Los Angeles"}]

    monkeypatch.setattr(conditions, "get_json", fake_get_json)

    client = AccuWeatherClient("secret")
    assert client.resolve_city_id("Los Angeles") == "347625"
    assert captured["url"].endswith("/locations/v1/cities/search")
    assert captured["params"] == {"apikey": "secret", "q": "Los Angeles"}


def test_resolve_city_id_no_results(monkeypatch):
    monkeypatch.setattr(conditions, "get_json", lambda url, params=None: [])
    assert AccuWeatherClient("k").resolve_city_id("Nowhereville") is None


def test_fetch_conditions_parses_fields(monkeypatch):
    monkeypatch.setattr(conditions, "get_json", lambda url, params=None: [_observation()])

    out = AccuWeatherClient("k").fetch_conditions("347625")

    assert out.text == "Mostly sunny"
    assert out.temperature_f == 75.0
    assert out.temperature_c == 23.9
    assert out.wind_direction == "WSW"
    assert out.wind_gust_mph == 12.7
    assert out.pressure_inhg == 29.92
    assert out.humidity == 40
    assert out.has_precipitation is False
    assert out.link.endswith("/347625")


def test_fetch_conditions_failure(monkeypatch):
    monkeypatch.setattr(conditions, "get_json", lambda url, params=None: None)
    assert AccuWeatherClient("k").fetch_conditions("347625") is None


def test_render_conditions_full():
    text = conditions.render_conditions(conditions.parse_conditions(_observation()))
    lines = text.splitlines()

    assert lines[0] == "Currently: Mostly sunny"
    assert "Temperature: 75°F (24°C), feels like 77°F" in lines
    assert "Wind: 8 mph from WSW, gusts 13 mph" in lines
    assert "Pressure: 29.92 inHg (steady)" in lines
    assert "Humidity: 40%" in lines
    assert "Precipitation: none" in lines
    assert lines[-1].startswith("Source: http://www.accuweather.com/")


def test_render_conditions_precipitation():
    text = conditions.render_conditions(
        CurrentConditions(
            has_precipitation=True, precipitation_type="Rain", precipitation_past_hour_in=0.12
        )
    )
    assert text == "Precipitation: Rain (0.12 in past hour)"


def test_render_conditions_empty():
    assert conditions.render_conditions(CurrentConditions()) == ""
