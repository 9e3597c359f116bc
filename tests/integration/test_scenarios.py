"""End-to-end scenarios over full hourly days.

Exercises the public entry points with the kind of data an hourly
weather API returns, no mocks involved.
"""

import pytest

from daylight_index import (
    BrightnessIndexEngine,
    EngineConfig,
    HourlyObservation,
    LocationContext,
    compute_brightness_index,
    compute_brightness_index_from_arrays,
)


@pytest.fixture
def berlin_summer() -> LocationContext:
    return LocationContext(latitude_deg=52.52, longitude_deg=13.405, utc_offset_minutes=120)


@pytest.fixture
def solstice_day() -> list[str]:
    return [f"2025-06-21T{hour:02d}:00:00" for hour in range(24)]


class TestBerlinSolstice:
    def test_local_noon_is_near_full_brightness(self, berlin_summer) -> None:
        sample = BrightnessIndexEngine().compute_detailed(["2025-06-21T12:00:00"], berlin_summer)[0]
        assert sample.altitude_deg == pytest.approx(58.2, abs=0.5)
        assert sample.brightness == pytest.approx(1.0, abs=0.02)

    def test_solar_noon_altitude(self, berlin_summer) -> None:
        sample = BrightnessIndexEngine().compute_detailed(["2025-06-21T13:00:00"], berlin_summer)[0]
        assert sample.altitude_deg == pytest.approx(60.9, abs=0.3)

    def test_midnight_is_dim_twilight_not_night(self, berlin_summer) -> None:
        sample = BrightnessIndexEngine().compute_detailed(["2025-06-21T00:00:00"], berlin_summer)[0]
        assert sample.error is None
        assert sample.band == "astronomical_twilight"
        assert 0.0 < sample.brightness < 0.1

    def test_day_curve_peaks_after_local_noon(self, berlin_summer, solstice_day) -> None:
        values = compute_brightness_index(solstice_day, berlin_summer)
        darkest = values.index(min(values))
        brightest = values.index(max(values))
        assert darkest in (0, 1, 2)
        assert 11 <= brightest <= 15

    def test_utc_series_matches_local_series(self, solstice_day) -> None:
        local = LocationContext(latitude_deg=52.52, longitude_deg=13.405, utc_offset_minutes=120)
        utc = LocationContext(
            latitude_deg=52.52, longitude_deg=13.405, utc_offset_minutes=120, timestamps_are_absolute_utc=True
        )
        utc_times = ["2025-06-20T22:00:00", "2025-06-20T23:00:00"] + [
            f"2025-06-21T{hour:02d}:00:00" for hour in range(22)
        ]
        assert compute_brightness_index(utc_times, utc) == compute_brightness_index(solstice_day, local)


class TestEquator:
    def test_solar_noon_is_near_zenith_minus_declination(self) -> None:
        location = LocationContext(latitude_deg=0.0, longitude_deg=0.0, utc_offset_minutes=0)
        engine = BrightnessIndexEngine()
        sample = engine.compute_detailed(["2025-03-20T12:07:00", "2025-06-21T12:00:00"], location)
        for s in sample:
            assert s.altitude_deg > 60.0
            assert s.brightness == pytest.approx(1.0)
        assert sample[0].altitude_deg == pytest.approx(90.0, abs=1.0)
        assert sample[1].altitude_deg == pytest.approx(66.5, abs=0.5)


class TestWeather:
    def test_overcast_scenario(self, berlin_summer) -> None:
        engine = BrightnessIndexEngine()
        clear = engine.compute_one("2025-06-21T09:00:00", berlin_summer)
        overcast = engine.compute_one(
            HourlyObservation(
                timestamp="2025-06-21T09:00:00",
                cloud_cover_percent=100,
                precipitation_rate=0,
                weather_code=3,
            ),
            berlin_summer,
        )
        assert 0.35 * clear <= overcast < clear

    def test_rainy_afternoon_dips_mid_series(self, berlin_summer, solstice_day) -> None:
        cloud = [0.0] * 24
        rain = [0.0] * 24
        codes = [0] * 24
        cloud[14], rain[14], codes[14] = 100.0, 6.0, 82
        values = compute_brightness_index_from_arrays(
            solstice_day, berlin_summer, cloud_cover=cloud, precipitation=rain, weather_codes=codes
        )
        assert values[14] < values[13]
        assert values[14] < values[15]

    def test_disabling_attenuation_ignores_weather(self, berlin_summer, solstice_day) -> None:
        observations = [
            HourlyObservation(timestamp=t, cloud_cover_percent=100, weather_code=45) for t in solstice_day
        ]
        plain = compute_brightness_index(solstice_day, berlin_summer)
        unattenuated = compute_brightness_index(
            observations, berlin_summer, config=EngineConfig(attenuation_enabled=False)
        )
        assert unattenuated == plain
