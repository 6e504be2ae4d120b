import unittest

from pydantic import ValidationError

from app.app_types import WeatherResult
from app.domain import CacheSource, CityConfig, ScoredCity


def _scored(**overrides):
    values = dict(city="Oslo", temp=12.0, humidity=70.0, wind_speed=4.0, description="light rain",
                  comfort_score=61, rank=1, city_id="3143244")
    values.update(overrides)
    return ScoredCity(**values)


class TestDomain(unittest.TestCase):
    def test_city_config_is_frozen(self):
        city = CityConfig(city_id="1")
        with self.assertRaises(ValidationError):
            city.name = "changed"

    def test_city_config_rejects_bool_id(self):
        with self.assertRaises(ValidationError):
            CityConfig.model_validate({"CityCode": True})

    def test_scored_city_payload_uses_camel_case_and_hides_id(self):
        self.assertEqual(
            _scored().to_payload(),
            {"city": "Oslo", "temp": 12.0, "humidity": 70.0, "windSpeed": 4.0,
             "description": "light rain", "comfortScore": 61, "rank": 1},
        )

    def test_scored_city_bounds(self):
        with self.assertRaises(ValidationError):
            _scored(comfort_score=101)
        with self.assertRaises(ValidationError):
            _scored(rank=0)

    def test_weather_result_payload(self):
        result = WeatherResult(source=CacheSource.HIT, data=(_scored(),))
        payload = result.to_payload()
        self.assertEqual(payload["source"], "HIT")
        self.assertEqual(payload["data"][0]["comfortScore"], 61)


if __name__ == "__main__":
    unittest.main()
