"""Pytest configuration for Daikin aircon tests."""
import pytest

from custom_components.daikin_aircon.aircon import DaikinAircon

CONTROL_INFO = (
    "ret=OK,pow=0,mode=1,adv=,stemp=25.0,shum=0,dt1=25.0,dt2=M,"
    "dt3=25.0,dt4=25.0,dt5=25.0,dt7=25.0,dh1=AUTO,f_rate=A,f_dir=0"
)
SENSOR_INFO = "ret=OK,htemp=24.5,hhum=-,otemp=18.0,err=0,cmpfreq=0"


class FakeRequester:
    """Requester that replays canned bodies and records issued paths.

    ``responses`` maps a path prefix to either a body or a list of bodies
    served in order.
    """

    def __init__(self, responses=None, base_url="http://aircon.local"):
        self.responses = dict(responses or {})
        self.base_url = base_url
        self.available = True
        self.calls = []

    def get(self, path, callback, idempotent=True):
        self.calls.append((path, idempotent))
        for prefix, body in self.responses.items():
            if path.startswith(prefix):
                if isinstance(body, list):
                    body = body.pop(0) if body else ""
                callback(body)
                return
        callback("")

    @property
    def paths(self):
        return [path for path, _ in self.calls]

    def write_query(self):
        """Return the query of the last set_control_info call."""
        writes = [p for p in self.paths if p.startswith("/aircon/set_control_info")]
        assert writes, "no write issued"
        return writes[-1].split("?", 1)[1]


@pytest.fixture
def log_lines():
    return []


@pytest.fixture
def make_aircon(log_lines):
    """Build a DaikinAircon backed by a FakeRequester."""

    def _make(responses=None):
        requester = FakeRequester(responses)
        aircon = DaikinAircon(log=log_lines.append, name="living", requester=requester)
        return aircon, requester

    return _make
