"""Sensor platform for Daikin aircon."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTemperature
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .aircon import DaikinAircon
from .const import DOMAIN, MANUFACTURER

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DaikinSensorEntityDescription(SensorEntityDescription):
    """Describes Daikin sensor entity."""

    value_fn: Callable[[DaikinAircon], float | None]


def _indoor_temperature(aircon: DaikinAircon) -> float | None:
    value = aircon.current_temperature
    if value is None or math.isnan(value):
        return None
    return value


SENSOR_DESCRIPTIONS: tuple[DaikinSensorEntityDescription, ...] = (
    DaikinSensorEntityDescription(
        key="indoor_temperature",
        translation_key="indoor_temperature",
        name="Indoor Temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        value_fn=_indoor_temperature,
    ),
    DaikinSensorEntityDescription(
        key="target_temperature",
        translation_key="target_temperature",
        name="Target Temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        value_fn=lambda a: a.target_temperature or None,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up Daikin sensor entities from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator = data["coordinator"]
    aircon = data["aircon"]

    async_add_entities(
        DaikinSensorEntity(coordinator, aircon, entry, description)
        for description in SENSOR_DESCRIPTIONS
    )


class DaikinSensorEntity(CoordinatorEntity, SensorEntity):
    """Daikin sensor entity."""

    _attr_has_entity_name = True
    entity_description: DaikinSensorEntityDescription

    def __init__(
        self,
        coordinator,
        aircon: DaikinAircon,
        entry: ConfigEntry,
        description: DaikinSensorEntityDescription,
    ) -> None:
        """Initialize the sensor entity."""
        super().__init__(coordinator)
        self._aircon = aircon
        self._entry = entry
        self.entity_description = description

        unique_id = entry.unique_id or entry.entry_id
        self._attr_unique_id = f"{unique_id}_{description.key}"
        self._attr_device_info = {
            "identifiers": {(DOMAIN, unique_id)},
            "name": aircon.name,
            "manufacturer": MANUFACTURER,
            "configuration_url": aircon.host,
        }

    @property
    def native_value(self) -> float | None:
        """Return the sensor value."""
        return self.entity_description.value_fn(self._aircon)

    @property
    def available(self) -> bool:
        """Return if entity is available."""
        return super().available and self._aircon.available

    @callback
    def _handle_coordinator_update(self) -> None:
        """Handle updated data from the coordinator."""
        self.async_write_ha_state()
