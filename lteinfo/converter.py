"""Conversions from raw modem values to display text."""

import base64
import hashlib
import string

from .ui import ALERT, ALERT_BANNER, ALERT_GREEN, CYAN, GREEN, OFF

_PREFIXES = "kMGTPE"
_UINT64_MAX = 2**64 - 1
_HEX_DIGITS = frozenset(string.hexdigits)


def hru(value, unit, suffix):
    """Render an unsigned integer in human readable units of base ``unit``."""
    if unit < 2:
        raise ValueError(f"unit must be at least 2, got {unit}")
    if value < 0 or value > _UINT64_MAX:
        raise ValueError(f"value out of unsigned 64-bit range: {value}")
    if value < unit:
        return f"{value} {suffix}"
    divisor, exponent = unit, 0
    remaining = value // unit
    while remaining >= unit:
        divisor *= unit
        exponent += 1
        remaining //= unit
    scaled = float(value) / float(divisor)
    prefix = _PREFIXES[exponent]
    if suffix == "":
        return f"{scaled:.3f} {prefix}"
    if suffix == "bit":
        return f"{scaled:.0f} {prefix}{suffix}"
    if suffix in ("bytes", "bytes/sec"):
        return f"{scaled:.1f} {prefix}{suffix}"
    return f"{scaled:.3f} {prefix}{suffix}"


def hru_iec(value, suffix):
    """Human readable units with a base of 1024."""
    return hru(value, 1024, suffix)


def hru_si(value, suffix):
    """Human readable units with a base of 1000."""
    return hru(value, 1000, suffix)


def _octet(pair):
    if len(pair) == 2 and all(ch in _HEX_DIGITS for ch in pair):
        return int(pair, 16)
    return 0


def hex_to_ipv4(hex_string):
    """Turn a little-endian hex address such as the modem reports into dotted notation.

    Pairs that are not valid hex count as zero.
    """
    if len(hex_string) < 8:
        raise ValueError(f"need at least 8 hex digits, got {hex_string!r}")
    octets = [_octet(hex_string[pos:pos + 2]) for pos in range(0, 8, 2)]
    return ".".join(str(octet) for octet in reversed(octets))


def flag_text(value):
    """Render "0" or "1" as a coloured boolean."""
    if value == "0":
        return ALERT + "false" + OFF
    if value == "1":
        return GREEN + "true" + OFF
    raise ValueError("bool can only 0 = false  / 1 = true")


def status_text(value):
    """Render "0" as "n/a", anything else unchanged."""
    return "n/a" if value == "0" else value


def netlock_text(code):
    """Describe a network lock status code."""
    if code == "1":
        return ALERT_BANNER + ALERT + "NETLOCK ACTIVE]" + OFF
    if code == "2":
        return GREEN + "[NETLOCK DEACTIVATED]" + OFF
    if code == "3":
        return ALERT_BANNER + ALERT + "[PERSISTENT NETLOCK ACTIVE]" + OFF
    return ALERT + "unknow / unclear status code" + OFF


_AIR_INTERFACES = {
    "0": "GSM",
    "1": "GSM Compact",
    "2": "UTRAN UMTS",
    "3": "GSM GPRS",
    "4": "UTRAN HSDPA",
    "5": "UTRAN HSUPA",
    "6": "UTRAN HSDAP & HSUPA",
    "7": "E-UTRAN LTE",
}


def air_interface(code):
    """Name of the radio access technology for an access-technology code."""
    return _AIR_INTERFACES.get(code, "ERROR - unknow air interface")


_PROVIDER_STATUS = {
    "0": (ALERT_BANNER + ALERT + "[MT not registered] [Not Searching!]" + OFF, False),
    "1": (GREEN + "[MT registered] [complete] [home network]" + OFF, False),
    "2": (ALERT + "[MT not registered] [Searching ...]" + OFF, False),
    "3": (ALERT + "[MT access denied]" + OFF, False),
    "5": (GREEN + "[MT registered] [complete] [roaming]" + OFF, True),
}


def provider_status(code):
    """Return the registration text and whether the modem is roaming."""
    return _PROVIDER_STATUS.get(code, (ALERT + "[MT status unknow]" + OFF, False))


def temperature_color(value, alert):
    """Colour for a temperature compared with its alert threshold."""
    if value == alert:
        return CYAN
    if value > alert:
        return ALERT
    return GREEN


def bar_indicator(value, alert, indicator):
    """Bar graph of ``value // 2`` indicators, red below ``alert``."""
    colour = ALERT if value < alert else ALERT_GREEN
    return colour + indicator * (value // 2) + OFF


def fingerprint(text):
    """Short base32 fingerprint of the SHA-512/224 digest of ``text``."""
    digest = hashlib.new("sha512_224", text.encode()).digest()
    encoded = base64.b32encode(digest).decode("ascii")
    return f"{encoded[:4]}-{encoded[4:6]}-{encoded[6:8]}-{encoded[8:12]}"