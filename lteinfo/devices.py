"""AT command batches for supported modem models."""

from dataclasses import dataclass

_FILLER = ("x",) * 8


@dataclass(frozen=True)
class CommandSet:
    """Nine-step AT command batches for each polling phase.

    A step of "x" or "" is skipped, "w" waits one second and "W" two.
    """

    update: tuple
    device_clean: tuple
    device_init: tuple
    device_setup: tuple
    sim: tuple
    slow: tuple
    real_slow: tuple
    sms_init: tuple
    sms_get: tuple


def _huawei_e3372():
    return CommandSet(
        update=("w",) + _FILLER,
        device_clean=("^CURC=0",) + _FILLER,
        device_init=("I", "W", "W", "^VERSION?", "W", "W", "x", "x", "x"),
        device_setup=("^CURC=1", "^CREG=1", "x", "x", "x", "x", "x", "x", "x"),
        sim=("^SPN=1", "w", "^ICCID?", "w", "+CPIN?", "W", "^CARDLOCK?", "w", "+CSMS?"),
        slow=("^HFREQINFO?", "+CREG?", "^DHCP?", "w", "^NWTIME?", "w", "^CHIPTEMP?", "w", "+COPS?"),
        real_slow=("w", "^lteCAT?", "W", "^NDISSTATQRY?", "W", "+COPS=?", "W", "W", ""),
        sms_init=("+CMGF=1",) + _FILLER,
        sms_get=("+CMGR=",) + _FILLER,
    )


def _generic():
    idle = ("x",) * 9
    return CommandSet(
        update=idle,
        device_clean=idle,
        device_init=("I", "W", "W", "I", "W", "W", "^VERSION?", "W", "^VERSION?"),
        device_setup=idle,
        sim=("x", "x", "x", "w", "x", "x", "x", "x", "x"),
        slow=idle,
        real_slow=idle,
        sms_init=("+CMGF=1",) + _FILLER,
        sms_get=("+CMGR=",) + _FILLER,
    )


def command_set(model):
    """Command batches for ``model``; unknown models get a minimal generic set."""
    if model == "HUAWEI_E3372":
        return _huawei_e3372()
    return _generic()