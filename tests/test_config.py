import json
import os
import tempfile
import unittest
from pathlib import Path

from app.config import DEFAULT_CITIES_FILE, Settings, load_cities


class _EnvOverride:
    """Temporarily set/unset environment variables."""

    def __init__(self, **values):
        self.values = values
        self.previous = {}

    def __enter__(self):
        for key, value in self.values.items():
            self.previous[key] = os.environ.get(key)
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        return self

    def __exit__(self, *exc):
        for key, value in self.previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


class TestSettings(unittest.TestCase):
    def test_settings_defaults(self):
        with _EnvOverride(COMFORT_CACHE_TTL_SECONDS=None, COMFORT_FETCH_TIMEOUT_SECONDS=None,
                          COMFORT_OPENWEATHER_BASE_URL=None):
            s = Settings(_env_file=None)
            self.assertEqual(s.cache_ttl_seconds, 300)
            self.assertEqual(s.fetch_timeout_seconds, 10)
            self.assertEqual(s.data_source, "openweathermap")
            self.assertEqual(s.openweather_base_url, "https://api.openweathermap.org/data/2.5/weather")
            self.assertTrue(s.single_flight)

    def test_settings_env_override(self):
        with _EnvOverride(COMFORT_CACHE_TTL_SECONDS="60", COMFORT_SINGLE_FLIGHT="false",
                          COMFORT_OPENWEATHER_BASE_URL="http://example.com/weather/"):
            s = Settings(_env_file=None)
            self.assertEqual(s.cache_ttl_seconds, 60)
            self.assertFalse(s.single_flight)
            self.assertEqual(s.openweather_base_url, "http://example.com/weather")

    def test_api_key_from_plain_env_name(self):
        with _EnvOverride(OPENWEATHER_API_KEY="plain-key", COMFORT_OPENWEATHER_API_KEY=None):
            s = Settings(_env_file=None)
            self.assertEqual(s.openweather_api_key, "plain-key")

    def test_api_key_by_field_name(self):
        s = Settings(_env_file=None, openweather_api_key="direct")
        self.assertEqual(s.openweather_api_key, "direct")


class TestLoadCities(unittest.TestCase):
    def _write(self, content):
        tmp = tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8")
        with tmp:
            tmp.write(content if isinstance(content, str) else json.dumps(content))
        self.addCleanup(os.unlink, tmp.name)
        return Path(tmp.name)

    def test_loads_citycode_format_in_order(self):
        path = self._write([
            {"CityCode": "1248991", "CityName": "Colombo", "Temp": "33.0"},
            {"CityCode": 1850147, "CityName": "Tokyo"},
        ])
        cities = load_cities(path)
        self.assertIsInstance(cities, tuple)
        self.assertEqual([c.city_id for c in cities], ["1248991", "1850147"])
        self.assertEqual([c.name for c in cities], ["Colombo", "Tokyo"])

    def test_loads_lowercase_keys_and_wrapped_list(self):
        path = self._write({"List": [{"id": "2643743", "name": "London"}, {"id": "5128581"}]})
        cities = load_cities(path)
        self.assertEqual(cities[0].name, "London")
        self.assertEqual(cities[1].name, "")

    def test_bundled_city_list_loads(self):
        cities = load_cities(DEFAULT_CITIES_FILE)
        self.assertGreater(len(cities), 0)

    def test_invalid_inputs_raise_value_error(self):
        bad = [
            "not json",
            json.dumps({"cities": []}),
            json.dumps([{"CityName": "No id"}]),
            json.dumps([{"CityCode": ""}]),
        ]
        for content in bad:
            with self.subTest(content=content):
                with self.assertRaises(ValueError):
                    load_cities(self._write(content))

    def test_missing_file_raises_value_error(self):
        with self.assertRaises(ValueError):
            load_cities("/nonexistent/cities.json")


if __name__ == "__main__":
    unittest.main()
