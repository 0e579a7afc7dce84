"""Tests for the Daikin sensor entities."""
from unittest.mock import MagicMock

from custom_components.daikin_aircon.sensor import SENSOR_DESCRIPTIONS, DaikinSensorEntity


def _sensors(aircon):
    entry = MagicMock()
    entry.unique_id = "http://aircon.local"
    return {
        d.key: DaikinSensorEntity(MagicMock(), aircon, entry, d)
        for d in SENSOR_DESCRIPTIONS
    }


def test_sensor_values(make_aircon):
    aircon, _ = make_aircon(
        {
            "/aircon/get_control_info": "ret=OK,pow=1,mode=4,stemp=22",
            "/aircon/get_sensor_info": "ret=OK,htemp=19.5",
        }
    )
    aircon.update()
    sensors = _sensors(aircon)

    assert sensors["indoor_temperature"].native_value == 19.5
    assert sensors["target_temperature"].native_value == 22.0
    assert sensors["indoor_temperature"].unique_id == "http://aircon.local_indoor_temperature"


def test_sensor_values_when_unreadable(make_aircon):
    aircon, requester = make_aircon()
    requester.available = False
    aircon.update()
    sensors = _sensors(aircon)

    assert sensors["indoor_temperature"].native_value is None
    assert sensors["target_temperature"].native_value is None
    assert sensors["indoor_temperature"].available is False
