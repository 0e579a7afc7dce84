"""Climate platform for Daikin aircon."""
from __future__ import annotations

import logging
import math
from typing import Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .aircon import AirconError, DaikinAircon, run_accessor
from .const import DOMAIN, MANUFACTURER, PowerMode

_LOGGER = logging.getLogger(__name__)

SUPPORT_FLAGS = (
    ClimateEntityFeature.TARGET_TEMPERATURE
    | ClimateEntityFeature.TURN_ON
    | ClimateEntityFeature.TURN_OFF
)

HVAC_MODES = [HVACMode.OFF, HVACMode.HEAT, HVACMode.COOL, HVACMode.AUTO]

POWER_MODE_TO_HVAC = {
    PowerMode.OFF: HVACMode.OFF,
    PowerMode.HEAT: HVACMode.HEAT,
    PowerMode.COOL: HVACMode.COOL,
    PowerMode.AUTO: HVACMode.AUTO,
}
HVAC_TO_POWER_MODE = {hvac: mode for mode, hvac in POWER_MODE_TO_HVAC.items()}


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Daikin climate entity from a config entry."""
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator = data["coordinator"]
    aircon = data["aircon"]

    async_add_entities([DaikinClimateEntity(coordinator, aircon, entry)])


class DaikinClimateEntity(CoordinatorEntity, ClimateEntity):
    """Daikin climate entity."""

    _attr_has_entity_name = True
    _attr_name = None
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.5
    _attr_supported_features = SUPPORT_FLAGS
    _attr_hvac_modes = HVAC_MODES

    def __init__(
        self,
        coordinator,
        aircon: DaikinAircon,
        entry: ConfigEntry,
    ) -> None:
        """Initialize the climate entity."""
        super().__init__(coordinator)
        self._aircon = aircon
        self._entry = entry
        # Mode restored by turn_on
        self._last_on_mode = PowerMode.AUTO

        unique_id = entry.unique_id or entry.entry_id
        self._attr_unique_id = f"{unique_id}_climate"
        self._attr_device_info = {
            "identifiers": {(DOMAIN, unique_id)},
            "name": aircon.name,
            "manufacturer": MANUFACTURER,
            "configuration_url": aircon.host,
        }

    @property
    def available(self) -> bool:
        """Return if the aircon answered the last request."""
        return super().available and self._aircon.available

    @property
    def current_temperature(self) -> float | None:
        """Return the indoor temperature."""
        value = self._aircon.current_temperature
        if value is None or math.isnan(value):
            return None
        return value

    @property
    def target_temperature(self) -> float | None:
        """Return the target temperature."""
        # 0 means the unit did not report a usable setpoint
        return self._aircon.target_temperature or None

    @property
    def hvac_mode(self) -> HVACMode:
        """Return the target HVAC mode."""
        mode = run_accessor(self._aircon.get_target_heater_cooler_state)
        return POWER_MODE_TO_HVAC[mode]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return extra state attributes."""
        observed = self._aircon.observed_mode
        return {
            "host": self._aircon.host,
            "observed_mode": observed.name.lower() if observed is not None else None,
        }

    async def _async_call(self, accessor, *args: Any) -> None:
        """Run a setter in the executor and surface its error."""
        try:
            await self.hass.async_add_executor_job(run_accessor, accessor, *args)
        except AirconError as err:
            raise HomeAssistantError(f"{self._aircon.name}: {err}") from err
        finally:
            await self.coordinator.async_request_refresh()

    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Set new target temperature."""
        if (temperature := kwargs.get(ATTR_TEMPERATURE)) is None:
            return

        await self._async_call(self._aircon.set_target_temperature, temperature)

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set new HVAC mode."""
        mode = HVAC_TO_POWER_MODE.get(hvac_mode)
        if mode is None:
            raise HomeAssistantError(f"Unsupported HVAC mode: {hvac_mode}")
        if mode != PowerMode.OFF:
            self._last_on_mode = mode

        await self._async_call(self._aircon.set_target_heater_cooler_state, mode)

    async def async_turn_on(self) -> None:
        """Turn on in the last used mode."""
        await self.async_set_hvac_mode(POWER_MODE_TO_HVAC[self._last_on_mode])

    async def async_turn_off(self) -> None:
        """Turn off the aircon."""
        await self.async_set_hvac_mode(HVACMode.OFF)

    @callback
    def _handle_coordinator_update(self) -> None:
        """Handle updated data from the coordinator."""
        mode = self._aircon.target_heater_cooler_state
        if mode != PowerMode.OFF:
            self._last_on_mode = mode
        self.async_write_ha_state()
