import unittest

from app.data_sources.base import CallableWeatherDataSource
from app.data_sources.factory import DEFAULT_SOURCE_NAME, build_data_source
from app.data_sources.openweather_client import Observation, fetch_city_weather
from app.domain import CityConfig


class DummySettings:
    def __init__(self, **kwargs):
        self.data_source = DEFAULT_SOURCE_NAME
        self.openweather_api_key = "k"
        self.openweather_base_url = "http://weather.test/current"
        self.fetch_timeout_seconds = 2.5
        for k, v in kwargs.items():
            setattr(self, k, v)


class TestDataSourceFactory(unittest.TestCase):
    def test_build_openweathermap_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, CallableWeatherDataSource)
        self.assertIs(ds.fetch, fetch_city_weather)
        self.assertEqual(
            ds.options,
            {"api_key": "k", "base_url": "http://weather.test/current", "timeout": 2.5},
        )

    def test_source_name_is_case_insensitive(self):
        ds = build_data_source(DummySettings(data_source="OpenWeatherMap"))
        self.assertIsInstance(ds, CallableWeatherDataSource)

    def test_missing_api_key_still_builds(self):
        ds = build_data_source(DummySettings(openweather_api_key=None))
        self.assertIsNone(ds.options["api_key"])

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(data_source="open_meteo"))

    def test_callable_source_passes_options(self):
        seen = {}

        def fake_fetch(city, **kwargs):
            seen.update(kwargs)
            return Observation(city_id=city.city_id, city="X", temperature=1.0, humidity=2.0,
                               wind_speed=3.0, description="d")

        ds = CallableWeatherDataSource(fetch=fake_fetch, options={"timeout": 1})
        obs = ds.fetch_city_weather(CityConfig(city_id="9"))
        self.assertEqual(obs.city_id, "9")
        self.assertEqual(seen, {"timeout": 1})


if __name__ == "__main__":
    unittest.main()
