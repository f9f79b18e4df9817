"""Pacing of device reads and display refreshes."""

_TIMINGS = {
    "off": (0.005, 1.0),
    "low": (0.020, 1.0),
    "mid": (0.040, 1.0),
    "normal": (0.050, 1.0),
    "high": (0.080, 3.0),
    "max": (0.100, 3.0),
    "extreme": (0.200, 5.0),
}
_DEFAULT = (0.035, 1.0)


def eco_timings(mode):
    """Return (sleep between steps, display refresh interval) in seconds for ``mode``."""
    return _TIMINGS.get(mode, _DEFAULT)