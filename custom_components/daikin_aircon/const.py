"""Constants for Daikin aircon integration."""
from enum import IntEnum

DOMAIN = "daikin_aircon"
MANUFACTURER = "Daikin"

# Default values
DEFAULT_HOST = "http://localhost"
DEFAULT_NAME = "Daikin Aircon"
DEFAULT_SCAN_INTERVAL = 30
DEFAULT_TIMEOUT = 5

# Option keys
CONF_SCAN_INTERVAL = "scan_interval"
CONF_TIMEOUT = "timeout"

# Adapter endpoints
PATH_GET_CONTROL_INFO = "/aircon/get_control_info"
PATH_GET_SENSOR_INFO = "/aircon/get_sensor_info"
PATH_SET_CONTROL_INFO = "/aircon/set_control_info"

# Wire record keys
KEY_POWER = "pow"
KEY_MODE = "mode"
KEY_TARGET_TEMP = "stemp"
KEY_INDOOR_TEMP = "htemp"
KEY_RESULT = "ret"

RET_OK = "OK"


class PowerMode(IntEnum):
    """Heating/cooling state as exposed to the host."""
    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


# PowerMode -> value of the "mode" field on the wire
MODE_TO_WIRE = {
    PowerMode.AUTO: "1",
    PowerMode.COOL: "3",
    PowerMode.HEAT: "4",
}

# Unknown wire modes (dry, fan, ...) are reported as AUTO
WIRE_TO_MODE = {
    "3": PowerMode.COOL,
    "4": PowerMode.HEAT,
}
