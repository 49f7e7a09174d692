from __future__ import annotations

import importlib
import os
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Type

from dotenv import load_dotenv

load_dotenv()

from hotelier.base_config import HotelConfig
from hotelier.adapters.base import HotelAdapter
from hotelier.adapters.sqlite_adapter import SQLiteHotelAdapter
from hotelier.exceptions import ConfigurationError


DEFAULT_CONFIG_CLASS = "hotelier.config.EnvironmentHotelConfig"
CONFIG_ENV_KEY = "HOTEL_CONFIG"

DEFAULT_ROOM_COUNT = 20
DEFAULT_RATE = Decimal("200.00")

logger = logging.getLogger(__name__)


def _import_config_class(path: str) -> Type[HotelConfig]:
    try:
        module_path, class_name = path.rsplit(".", 1)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid config path '{path}'") from exc

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import module '{module_path}'") from exc

    try:
        cls = getattr(module, class_name)
    except AttributeError as exc:
        raise ConfigurationError(f"Config class '{class_name}' not found in '{module_path}'") from exc

    if not isinstance(cls, type) or not issubclass(cls, HotelConfig):
        raise ConfigurationError(f"{path} is not a subclass of HotelConfig")

    return cls


class EnvironmentHotelConfig(HotelConfig):
    """Default configuration that reads from environment variables."""

    def __init__(self) -> None:
        self._env = os.environ

    def get_database_url(self) -> str:
        return self._env.get("DATABASE_URL", "sqlite:///hotel.db")

    def get_room_count(self) -> int:
        try:
            count = int(self._env.get("HOTEL_ROOM_COUNT", str(DEFAULT_ROOM_COUNT)))
        except (TypeError, ValueError):
            logger.warning(f"Invalid HOTEL_ROOM_COUNT, falling back to {DEFAULT_ROOM_COUNT}")
            return DEFAULT_ROOM_COUNT
        if count <= 0:
            raise ConfigurationError(f"HOTEL_ROOM_COUNT must be positive, got {count}")
        return count

    def get_default_rate(self) -> Decimal:
        raw = self._env.get("HOTEL_DEFAULT_RATE")
        if not raw:
            return DEFAULT_RATE
        try:
            rate = Decimal(raw)
        except InvalidOperation as exc:
            raise ConfigurationError(f"Invalid HOTEL_DEFAULT_RATE '{raw}'") from exc
        if not rate.is_finite() or rate <= 0:
            raise ConfigurationError(f"HOTEL_DEFAULT_RATE must be positive, got {raw}")
        return rate

    def get_hotel_display_name(self) -> str:
        return self._env.get("HOTEL_NAME", super().get_hotel_display_name())

    def create_adapter(self) -> HotelAdapter:
        """Creates the SQLite adapter, its tables, and the room catalog if empty."""
        adapter = SQLiteHotelAdapter(self.get_database_url())
        adapter.init()
        adapter.seed_rooms(self.get_room_count(), self.get_default_rate())
        return adapter


_CONFIG: Optional[HotelConfig] = None


def get_config() -> HotelConfig:
    global _CONFIG
    if _CONFIG is None:
        class_path = os.getenv(CONFIG_ENV_KEY, DEFAULT_CONFIG_CLASS)
        cls = _import_config_class(class_path)
        _CONFIG = cls()
    return _CONFIG


def set_config(config: Optional[HotelConfig]) -> None:
    global _CONFIG
    _CONFIG = config
