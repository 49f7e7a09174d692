"""
Tests for configuration loading and the process-wide service accessors.
"""
import gc
import os
import tempfile
import time
from decimal import Decimal

import pytest

from hotelier import services
from hotelier.config import (
    DEFAULT_RATE,
    DEFAULT_ROOM_COUNT,
    EnvironmentHotelConfig,
    _import_config_class,
    get_config,
    set_config,
)
from hotelier.exceptions import ConfigurationError


class TestEnvironmentHotelConfig:
    """Test suite for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for key in ("DATABASE_URL", "HOTEL_ROOM_COUNT", "HOTEL_DEFAULT_RATE", "HOTEL_NAME"):
            monkeypatch.delenv(key, raising=False)
        config = EnvironmentHotelConfig()
        assert config.get_database_url() == "sqlite:///hotel.db"
        assert config.get_room_count() == DEFAULT_ROOM_COUNT == 20
        assert config.get_default_rate() == DEFAULT_RATE
        assert config.get_hotel_display_name() == "Hotelier"

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("HOTEL_ROOM_COUNT", "8")
        monkeypatch.setenv("HOTEL_DEFAULT_RATE", "149.99")
        monkeypatch.setenv("HOTEL_NAME", "Seaside")
        config = EnvironmentHotelConfig()
        assert config.get_room_count() == 8
        assert config.get_default_rate() == Decimal("149.99")
        assert config.get_hotel_display_name() == "Seaside"

    def test_unparseable_room_count_falls_back(self, monkeypatch):
        monkeypatch.setenv("HOTEL_ROOM_COUNT", "lots")
        assert EnvironmentHotelConfig().get_room_count() == DEFAULT_ROOM_COUNT

    @pytest.mark.parametrize("key,value", [("HOTEL_ROOM_COUNT", "0"), ("HOTEL_DEFAULT_RATE", "-1"), ("HOTEL_DEFAULT_RATE", "abc")])
    def test_invalid_values(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        config = EnvironmentHotelConfig()
        with pytest.raises(ConfigurationError):
            config.get_room_count() if key == "HOTEL_ROOM_COUNT" else config.get_default_rate()


class TestConfigClassLoading:
    """Test suite for HOTEL_CONFIG class resolution."""

    def test_default_class(self):
        assert _import_config_class("hotelier.config.EnvironmentHotelConfig") is EnvironmentHotelConfig

    @pytest.mark.parametrize(
        "path",
        [
            "NoDots",
            "hotelier.missing_module.Config",
            "hotelier.config.MissingConfig",
            "hotelier.config.DEFAULT_RATE",
        ],
    )
    def test_bad_paths(self, path):
        with pytest.raises(ConfigurationError):
            _import_config_class(path)

    def test_get_config_uses_env_key(self, monkeypatch):
        monkeypatch.setenv("HOTEL_CONFIG", "hotelier.config.EnvironmentHotelConfig")
        set_config(None)
        try:
            assert isinstance(get_config(), EnvironmentHotelConfig)
        finally:
            set_config(None)


class TestServiceAccessors:
    """Test suite for get_manager()/get_adapter()."""

    def test_manager_built_from_config(self, monkeypatch):
        td = tempfile.TemporaryDirectory()
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{os.path.join(td.name, 'hotel.db')}")
        monkeypatch.setenv("HOTEL_ROOM_COUNT", "3")
        monkeypatch.setenv("HOTEL_DEFAULT_RATE", "90")
        set_config(EnvironmentHotelConfig())
        services.set_adapter(None)
        try:
            manager = services.get_manager()
            assert services.get_manager() is manager
            assert [room.room_id for room in manager.rooms] == [1, 2, 3]
            assert manager.rooms[0].cost == Decimal("90")

            reservation = manager.reserve(2, "2024-06-01", "2024-06-04")
            assert manager.total_cost(reservation.reservation_id) == Decimal("270")
        finally:
            services.set_adapter(None)
            set_config(None)
            gc.collect()
            time.sleep(0.1)
            td.cleanup()
