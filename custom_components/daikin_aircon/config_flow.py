"""Config flow for Daikin aircon integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
import requests

from homeassistant import config_entries
from homeassistant.const import CONF_HOST, CONF_NAME
from homeassistant.core import HomeAssistant, callback
from homeassistant.data_entry_flow import FlowResult

from .aircon import parse_response
from .const import (
    DOMAIN,
    CONF_SCAN_INTERVAL,
    CONF_TIMEOUT,
    DEFAULT_NAME,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_TIMEOUT,
    KEY_RESULT,
    PATH_GET_CONTROL_INFO,
    RET_OK,
)
from .requester import normalize_host

_LOGGER = logging.getLogger(__name__)


async def validate_connection(hass: HomeAssistant, data: dict[str, Any]) -> dict[str, Any]:
    """Validate the user input allows us to connect."""
    base_url = normalize_host(data[CONF_HOST])

    try:
        response = await hass.async_add_executor_job(
            lambda: requests.get(
                f"{base_url}{PATH_GET_CONTROL_INFO}", timeout=DEFAULT_TIMEOUT
            )
        )
        if response.status_code != 200:
            raise CannotConnect("Cannot connect to device")
    except requests.RequestException as err:
        _LOGGER.error("Connection error: %s", err)
        raise CannotConnect("Cannot connect to device") from err

    values = parse_response(response.text)
    if values.get(KEY_RESULT) != RET_OK:
        _LOGGER.error("Unexpected control info from %s: %s", base_url, values)
        raise CannotConnect("Invalid device response")

    return {
        "host": base_url,
        "title": data.get(CONF_NAME) or DEFAULT_NAME,
    }


class CannotConnect(Exception):
    """Error to indicate we cannot connect."""


class DaikinConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Daikin aircon."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            try:
                info = await validate_connection(self.hass, user_input)
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Unexpected exception")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(info["host"])
                self._abort_if_unique_id_configured()

                return self.async_create_entry(
                    title=info["title"],
                    data={
                        CONF_HOST: info["host"],
                        CONF_NAME: info["title"],
                    },
                )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_HOST): str,
                    vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
                }
            ),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> config_entries.OptionsFlow:
        """Create the options flow."""
        return DaikinOptionsFlowHandler()


class DaikinOptionsFlowHandler(config_entries.OptionsFlow):
    """Handle options flow for Daikin aircon."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Manage the options."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        return self.async_show_form(
            step_id="init",
            data_schema=options_schema(self.config_entry.options),
        )


def options_schema(options: dict[str, Any]) -> vol.Schema:
    """Build the options schema with the current values as defaults."""
    return vol.Schema(
        {
            vol.Optional(
                CONF_SCAN_INTERVAL,
                default=options.get(CONF_SCAN_INTERVAL, DEFAULT_SCAN_INTERVAL),
            ): vol.All(vol.Coerce(int), vol.Range(min=10, max=300)),
            vol.Optional(
                CONF_TIMEOUT,
                default=options.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
            ): vol.All(vol.Coerce(int), vol.Range(min=3, max=120)),
        }
    )
