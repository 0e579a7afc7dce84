"""The Daikin aircon integration."""
from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_HOST, CONF_NAME, Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .aircon import DaikinAircon
from .const import (
    DOMAIN,
    CONF_SCAN_INTERVAL,
    CONF_TIMEOUT,
    DEFAULT_NAME,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_TIMEOUT,
)
from .requester import Requester

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.CLIMATE,
    Platform.SENSOR,
]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up a Daikin aircon from a config entry."""
    hass.data.setdefault(DOMAIN, {})

    requester = Requester(
        entry.data[CONF_HOST],
        timeout=entry.options.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
    )
    aircon = DaikinAircon(
        name=entry.data.get(CONF_NAME, DEFAULT_NAME),
        requester=requester,
    )

    scan_interval = entry.options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL)

    async def async_update_data():
        """Fetch data from the adapter."""
        try:
            success = await hass.async_add_executor_job(aircon.update)
        except Exception as err:
            raise UpdateFailed(f"Error communicating with aircon: {err}") from err
        if not success:
            raise UpdateFailed(f"{aircon.host} is unreachable")
        return aircon

    coordinator = DataUpdateCoordinator(
        hass,
        _LOGGER,
        name=f"Daikin {aircon.name}",
        update_method=async_update_data,
        update_interval=timedelta(seconds=scan_interval),
    )

    await coordinator.async_config_entry_first_refresh()

    hass.data[DOMAIN][entry.entry_id] = {
        "coordinator": coordinator,
        "aircon": aircon,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        hass.data[DOMAIN].pop(entry.entry_id)

    return unload_ok
