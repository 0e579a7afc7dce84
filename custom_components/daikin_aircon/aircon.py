"""Daikin aircon state adapter."""
import logging
import math
import re
import threading
from collections import deque
from typing import Any, Callable

from .const import (
    DEFAULT_NAME,
    KEY_INDOOR_TEMP,
    KEY_MODE,
    KEY_POWER,
    KEY_RESULT,
    KEY_TARGET_TEMP,
    MODE_TO_WIRE,
    PATH_GET_CONTROL_INFO,
    PATH_GET_SENSOR_INFO,
    PATH_SET_CONTROL_INFO,
    RET_OK,
    WIRE_TO_MODE,
    PowerMode,
)
from .requester import Requester

_LOGGER = logging.getLogger(__name__)

# Leading number or Infinity, as parseFloat reads it; the rest is ignored
_FLOAT_PREFIX = re.compile(r"\s*[-+]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_TARGET_TEMP = re.compile(r"(?:\d+\.?\d*|\.\d+)")

WireRecord = dict[str, str | None]
AccessorCallback = Callable[..., None]


class AirconError(Exception):
    """Base error reported through an accessor callback."""


class WriteRejectedError(AirconError):
    """The adapter answered a set request with something other than OK."""

    def __init__(self, ret: str | None):
        self.ret = ret
        super().__init__(ret if ret is not None else "no response")


class ControlInfoUnavailableError(AirconError):
    """The control record needed to build a write could not be read."""


WriteApply = Callable[[WireRecord], None]
WriteFinish = Callable[[AirconError | None], None]


def parse_response(response: str | None) -> WireRecord:
    """Convert a comma separated key=value body into a dict."""
    values: WireRecord = {}
    if not response:
        return values
    for item in response.split(","):
        key, sep, value = item.partition("=")
        values[key] = value if sep else None
    return values


def build_query(record: WireRecord) -> str:
    """Serialize a record as an &-joined query string, keeping field order."""
    return "&".join(
        key if value is None else f"{key}={value}"
        for key, value in record.items()
    )


def parse_float(value: str | None) -> float:
    """Read the leading number of ``value``, or nan when there is none."""
    if value is None:
        return math.nan
    match = _FLOAT_PREFIX.match(value)
    if match is None:
        return math.nan
    return float(match.group(0))


def format_temperature(value: float) -> str:
    """Format a temperature for the wire, dropping a trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def mode_from_record(record: WireRecord) -> PowerMode:
    """Derive the power mode from the pow and mode fields."""
    if record.get(KEY_POWER) != "1":
        return PowerMode.OFF
    return WIRE_TO_MODE.get(record.get(KEY_MODE), PowerMode.AUTO)


def run_accessor(accessor: Callable[..., None], *args: Any) -> Any:
    """Invoke a callback-style accessor and return its value.

    The error handed to the callback, if any, is raised.
    """
    result: dict[str, Any] = {}

    def _done(error: Exception | None, value: Any = None) -> None:
        result["error"] = error
        result["value"] = value

    accessor(*args, _done)
    if "error" not in result:
        raise AirconError(f"{accessor.__name__} did not complete")
    if result["error"] is not None:
        raise result["error"]
    return result["value"]


class DaikinAircon:
    """
    Translates between the adapter's key=value protocol and a power mode and
    temperature model.

    Every accessor reports through ``callback(error, value)`` once the
    requester has answered. Target mode writes are optimistic: the requested
    mode is visible through the target getter while the write is in flight
    and is dropped again if the adapter rejects it. Writes are queued and run
    one read-modify-write chain at a time, in call order.

    Parameters
    ----------
    log : callable, optional
        Sink for diagnostic lines; defaults to the module logger.
    host : str, optional
        Hostname, IP address or base URL of the adapter.
    name : str, optional
        Display name of the unit.
    requester : Requester, optional
        HTTP collaborator; built from ``host`` when omitted.
    """

    def __init__(
        self,
        log: Callable[[str], None] | None = None,
        host: str | None = None,
        name: str = DEFAULT_NAME,
        requester: Requester | None = None,
    ):
        """Initialize the adapter."""
        self.log = log or _LOGGER.info
        self.name = name
        self._requester = requester or Requester(host)
        self.host = self._requester.base_url

        # Guards mode bookkeeping and the write queue
        self._lock = threading.Lock()
        self._writes: deque[tuple[WriteApply, WriteFinish]] = deque()
        self._writing = False

        self._observed_mode: PowerMode | None = None
        self._confirmed_mode = PowerMode.OFF
        self._pending_mode: PowerMode | None = None
        self._pending_seq = 0

        # Last values seen by update()
        self.current_temperature: float | None = None
        self.target_temperature: float | None = None

    @property
    def available(self) -> bool:
        """Return if the adapter answered the last request."""
        return self._requester.available

    @property
    def observed_mode(self) -> PowerMode | None:
        """Mode reported by the last current-state read."""
        return self._observed_mode

    @property
    def target_heater_cooler_state(self) -> PowerMode:
        """Mode of the latest in-flight write if any, else the last confirmed mode."""
        pending = self._pending_mode
        if pending is not None:
            return pending
        return self._confirmed_mode

    # Accessors

    def get_heater_cooler_state(self, callback: AccessorCallback) -> None:
        """Read the current power mode."""

        def _on_body(body: str) -> None:
            mode = mode_from_record(parse_response(body))
            with self._lock:
                self._observed_mode = mode
                self._confirmed_mode = mode
            self.log(f"{self.name} got heater cooler state {mode.name}")
            callback(None, mode)

        self._requester.get(PATH_GET_CONTROL_INFO, _on_body)

    def get_target_heater_cooler_state(self, callback: AccessorCallback) -> None:
        """Return the target power mode without touching the network."""
        callback(None, self.target_heater_cooler_state)

    def set_target_heater_cooler_state(
        self, state: PowerMode, callback: AccessorCallback
    ) -> None:
        """Switch the unit off or into AUTO, COOL or HEAT."""
        state = PowerMode(state)
        with self._lock:
            self._pending_seq += 1
            seq = self._pending_seq
            self._pending_mode = state

        def _finish(error: AirconError | None) -> None:
            with self._lock:
                if error is None:
                    self._confirmed_mode = state
                # A later request keeps its own pending mode
                if self._pending_seq == seq:
                    self._pending_mode = None
            callback(error)

        self._queue_write(lambda record: self._apply_mode(record, state), _finish)

    def get_current_temperature(self, callback: AccessorCallback) -> None:
        """Read the indoor temperature; malformed values come back as nan."""

        def _on_body(body: str) -> None:
            values = parse_response(body)
            htemp = parse_float(values.get(KEY_INDOOR_TEMP))
            self.log(f"{self.name} got current temperature {htemp}")
            callback(None, htemp)

        self._requester.get(PATH_GET_SENSOR_INFO, _on_body)

    def get_target_temperature(self, callback: AccessorCallback) -> None:
        """Read the target temperature; missing or invalid values read as 0."""

        def _on_body(body: str) -> None:
            values = parse_response(body)
            stemp = values.get(KEY_TARGET_TEMP)
            if stemp and _TARGET_TEMP.fullmatch(stemp):
                self.log(f"{self.name} got target temperature {stemp}")
                callback(None, float(stemp))
            else:
                self.log(f"{self.name} could not get target temperature")
                self.log(str(values))
                callback(None, 0)

        self._requester.get(PATH_GET_CONTROL_INFO, _on_body)

    def set_target_temperature(
        self, temp: float, callback: AccessorCallback
    ) -> None:
        """Set the target temperature, keeping every other control field."""

        def _apply(record: WireRecord) -> None:
            record[KEY_TARGET_TEMP] = format_temperature(temp)

        self._queue_write(_apply, callback)

    def update(self) -> bool:
        """Refresh state and temperatures from the adapter.

        Returns False if any of the reads failed to reach the adapter.
        """
        run_accessor(self.get_heater_cooler_state)
        reachable = self.available
        self.current_temperature = run_accessor(self.get_current_temperature)
        reachable = reachable and self.available
        self.target_temperature = run_accessor(self.get_target_temperature)
        return reachable and self.available

    # Helpers

    @staticmethod
    def _apply_mode(record: WireRecord, state: PowerMode) -> None:
        if state == PowerMode.OFF:
            record[KEY_POWER] = "0"
            return
        record[KEY_POWER] = "1"
        record[KEY_MODE] = MODE_TO_WIRE[state]

    def _queue_write(self, apply: WriteApply, finish: WriteFinish) -> None:
        """Queue a control write; starts it now if no write is running."""
        with self._lock:
            self._writes.append((apply, finish))
            if self._writing:
                return
            self._writing = True
        self._start_next_write()

    def _start_next_write(self) -> None:
        """Read the full control record, let ``apply`` change it, write it back.

        The adapter only accepts complete parameter sets, so every write
        starts from the current record. ``finish`` gets the outcome once the
        write response arrives, then the next queued write starts.
        """
        with self._lock:
            if not self._writes:
                self._writing = False
                return
            apply, finish = self._writes.popleft()

        def _done(error: AirconError | None) -> None:
            try:
                finish(error)
            finally:
                self._start_next_write()

        def _on_write(response: str) -> None:
            ret = parse_response(response).get(KEY_RESULT)
            if ret == RET_OK:
                _done(None)
            else:
                _LOGGER.warning("%s rejected control write: %s", self.name, ret)
                _done(WriteRejectedError(ret))

        def _on_read(body: str) -> None:
            record = parse_response(body)
            if not record:
                _done(ControlInfoUnavailableError(
                    f"{self.name} returned no control info"
                ))
                return
            apply(record)
            self._requester.get(
                f"{PATH_SET_CONTROL_INFO}?{build_query(record)}",
                _on_write,
                False,
            )

        self._requester.get(PATH_GET_CONTROL_INFO, _on_read)
