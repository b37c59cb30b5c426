"""Tests for configuration and logging setup."""

import logging


class TestConstants:
    """Tests for constant helpers."""

    def test_clamp_font_size(self):
        from config.constants import clamp_font_size

        assert clamp_font_size(4) == 8
        assert clamp_font_size(16) == 16
        assert clamp_font_size(99) == 24
        assert clamp_font_size("12") == 12
        assert clamp_font_size(None) == 14

    def test_range_display_text(self):
        from config.constants import get_range_display_text

        assert get_range_display_text("last90days") == "Last 90 Days"
        assert get_range_display_text("other") == "Unknown Range"


class TestConfigLoader:
    """Tests for YAML defaults."""

    def test_widget_defaults_loaded(self):
        from config.config_loader import load_widget_defaults

        defaults = load_widget_defaults()

        assert defaults["format"]["default_range"] == "last7days"
        assert defaults["binding"]["sample_limit"] == 1000

    def test_accessors(self):
        from config.config_loader import get_binding_defaults, get_format_defaults

        assert get_format_defaults().font_size == 14
        assert get_binding_defaults().boundary_strategy == "static_window"
        assert get_binding_defaults().static_window_future_years == 5

    def test_cache_clear(self):
        from config.config_loader import clear_config_cache, load_widget_defaults

        first = load_widget_defaults()
        clear_config_cache()

        assert load_widget_defaults() == first


class TestSettings:
    """Tests for environment overrides."""

    def test_env_overrides(self, monkeypatch):
        from config.settings import WidgetConfig

        monkeypatch.setenv("SLICER_DEFAULT_RANGE", "last90days")
        monkeypatch.setenv("SLICER_SAMPLE_LIMIT", "250")
        monkeypatch.setenv("SLICER_DEBUG_MODE", "true")

        widget = WidgetConfig()

        assert widget.default_range == "last90days"
        assert widget.sample_limit == 250
        assert widget.debug_mode is True

    def test_debug_flag_false(self, monkeypatch):
        from config.settings import WidgetConfig

        monkeypatch.setenv("SLICER_DEBUG_MODE", "off")

        assert WidgetConfig().debug_mode is False


class TestLogging:
    """Tests for logger naming and the debug buffer."""

    def test_get_logger_prefix(self):
        from config.logging_config import get_logger

        assert get_logger("filters").name == "date_slicer.filters"
        assert get_logger().name == "date_slicer"

    def test_debug_buffer_format_and_capacity(self):
        from config.logging_config import DebugLogBuffer

        buffer = DebugLogBuffer(capacity=3)
        logger = logging.getLogger("date_slicer.test_buffer")
        logger.setLevel(logging.DEBUG)
        logger.addHandler(buffer)
        try:
            for i in range(5):
                logger.warning(f"entry {i}")
        finally:
            logger.removeHandler(buffer)

        lines = buffer.get_lines()
        assert len(lines) == 3
        assert lines[0].startswith("[WARNING] ")
        assert lines[-1].endswith(": entry 4")

        buffer.clear()
        assert buffer.get_formatted() == ""
