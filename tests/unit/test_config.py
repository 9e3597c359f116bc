import io
import json

import pytest
import structlog

from daylight_index.config import EngineConfig, InvalidTimestampPolicy, configure_logging
from daylight_index.daylight import CANONICAL_CURVE


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.attenuation_enabled is True
        assert config.on_invalid == InvalidTimestampPolicy.RAISE
        assert config.offset_snap_minutes == 60
        assert config.curve is CANONICAL_CURVE

    def test_empty_environment_gives_defaults(self) -> None:
        assert EngineConfig.from_env({}) == EngineConfig()

    def test_reads_environment(self) -> None:
        config = EngineConfig.from_env(
            {
                "BRIGHTNESS_ATTENUATION": "false",
                "BRIGHTNESS_ON_INVALID": "NaN",
                "BRIGHTNESS_OFFSET_SNAP_MINUTES": "30",
            }
        )
        assert config.attenuation_enabled is False
        assert config.on_invalid == InvalidTimestampPolicy.NAN
        assert config.offset_snap_minutes == 30

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BRIGHTNESS_ATTENUATION", "off")
        assert EngineConfig.from_env().attenuation_enabled is False

    @pytest.mark.parametrize(
        "environ",
        [
            {"BRIGHTNESS_ATTENUATION": "maybe"},
            {"BRIGHTNESS_ON_INVALID": "ignore"},
            {"BRIGHTNESS_OFFSET_SNAP_MINUTES": "half"},
            {"BRIGHTNESS_OFFSET_SNAP_MINUTES": "45"},
        ],
    )
    def test_invalid_environment_raises(self, environ: dict) -> None:
        with pytest.raises(ValueError):
            EngineConfig.from_env(environ)


class TestConfigureLogging:
    def test_debug_level_emits_json_events(self) -> None:
        stream = io.StringIO()
        configure_logging("debug", stream=stream)
        structlog.get_logger().debug("configured", answer=42)
        event = json.loads(stream.getvalue().strip())
        assert event["event"] == "configured"
        assert event["level"] == "debug"
        assert event["answer"] == 42
        assert "timestamp" in event

    def test_level_from_environment_filters_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        stream = io.StringIO()
        configure_logging(stream=stream)
        logger = structlog.get_logger()
        logger.debug("hidden")
        logger.warning("shown")
        lines = stream.getvalue().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["shown"]

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging("LOUD")
