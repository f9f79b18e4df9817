"""Decoding of unsolicited and answered modem sentences into display updates."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .converter import (
    air_interface,
    bar_indicator,
    fingerprint,
    flag_text,
    hex_to_ipv4,
    hru_iec,
    hru_si,
    netlock_text,
    provider_status,
    status_text,
    temperature_color,
)
from .state import DeviceInfo, NetworkInfo, NicInfo, SessionInfo, SimInfo, StatusInfo
from .ui import (
    ALERT,
    ALERT_BANNER,
    ALERT_GREEN,
    BLUE,
    CYAN,
    DEFAULTS,
    DEFAULTS_SHORT,
    GREEN,
    GREY,
    OFF,
    OK,
    RED,
    WHITE,
)

_UINT64 = 2**64
_MAX_DURATION_NS = 2**63 - 1
_TIME_DIFF_OK = timedelta(milliseconds=2650)
_NW_TIME_LAYOUT = "%y/%m/%d,%H:%M:%S"
_DIGITS = {10: re.compile(r"[0-9]+"), 16: re.compile(r"[0-9A-Fa-f]+")}


@dataclass(frozen=True)
class DisplayMessage:
    """New text for one line of the status display."""

    line: int
    text: str


def _uint(text, base=10, bits=64):
    """Parse an unsigned integer; invalid input gives 0, overflow the maximum."""
    if not _DIGITS[base].fullmatch(text):
        return 0
    value = int(text, base)
    return min(value, 2**bits - 1)


def _wrap(value):
    return value % _UINT64


def _fraction(value, digits):
    text = f"{value:0{digits}d}".rstrip("0")
    return "." + text if text else ""


def _go_duration(ns):
    """Format nanoseconds the way durations are conventionally printed: 1h2m3.5s."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{ns // 1_000}{_fraction(ns % 1_000, 3)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{ns // 1_000_000}{_fraction(ns % 1_000_000, 6)}ms"
    total_seconds, frac = divmod(ns, 1_000_000_000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    secs = f"{seconds}{_fraction(frac, 9)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if minutes:
        return f"{sign}{minutes}m{secs}"
    return f"{sign}{secs}"


def _rfc3339(moment):
    text = moment.isoformat(timespec="seconds")
    return text[:-6] + "Z" if text.endswith("+00:00") else text


def _header(title, status):
    return f"{WHITE}### {title}{OFF} [{GREY}{status}{OFF}]"


@dataclass
class SentenceParser:
    """Keeps modem state and turns each received sentence into display updates."""

    device_port: str
    device_known_list: str = ""
    simcard_known_list: str = ""
    device: DeviceInfo = field(init=False)
    sim: SimInfo = field(init=False)
    net: NetworkInfo = field(init=False)
    nic: NicInfo = field(init=False)
    status: StatusInfo = field(init=False)
    session: SessionInfo = field(init=False)

    def __post_init__(self):
        self.device = DeviceInfo(port=self.device_port)
        self.sim = SimInfo()
        self.net = NetworkInfo()
        self.nic = NicInfo()
        self.status = StatusInfo()
        self.session = SessionInfo()

    def fingerprint_done(self):
        """Whether the device identity has been fully collected."""
        return self.device.fingerprint_done

    def feed(self, line, now=None):
        """Parse one sentence and return the display updates it causes."""
        if now is None:
            now = datetime.now(timezone.utc).astimezone()
        out = []
        self._parse_status(line, now, out)
        if not self.device.fingerprint_done:
            self._parse_identity(line, out)
        return out

    # -- status sentences -------------------------------------------------

    def _parse_status(self, line, now, out):
        if line.startswith("^D"):
            if line.startswith("^DSFLOWRPT:"):
                self._dsflowrpt(line[11:], out)
            elif line.startswith("^DHCP: "):
                self._dhcp(line[7:], out)
        elif line.startswith("^H"):
            if line.startswith("^HCSQ:"):
                self._hcsq(line[6:], out)
            elif line.startswith("^HFREQINFO:"):
                self._hfreqinfo(line[11:], out)
        elif line.startswith("^RSSI:"):
            self._rssi(line[6:], out)
        elif line.startswith("^N"):
            if line.startswith("^NWTIME:"):
                self._nwtime(line[8:], now, out)
            elif line.startswith("^NDISSTATQRY:"):
                parts = line[13:].replace('"', "").split(",")
                if len(parts) == 4:
                    self.nic.stack = "[" + parts[3] + "]"
                    out.append(DisplayMessage(43, f"+ Supported Network Stack(s): {GREEN}{self.nic.stack}"))
        elif line.startswith("^LTECAT:"):
            self.net.lte_cat = "[" + line[8:] + "]"
            out.append(DisplayMessage(
                27,
                f"  + LTE Category: {BLUE}{self.net.lte_cat}{OFF} Frequency Band {BLUE}{self.net.lte_band}",
            ))
        elif line.startswith("^CARDLOCK: "):
            parts = line[11:].split(",")
            if len(parts) > 2:
                self.device.netlock = (
                    f"{netlock_text(parts[0])} {GREY}[ATTEMPTS OPEN {parts[1]}] "
                    f"[OPERATORCODE {status_text(parts[2])}]{OFF}"
                )
                out.append(DisplayMessage(14, f"  + Operator Lock: {self.device.netlock}"))
        elif line.startswith("^ICCID:"):
            if len(line) == 28:
                self._iccid(line[7:], out)
        elif line.startswith("^SPN:"):
            self._spn(line[5:], out)
        elif line.startswith("+"):
            if line.startswith("+COPS:"):
                self._cops(line, out)
            elif line.startswith("+CREG:"):
                parts = line[6:].split(",")
                if len(parts) == 2:
                    self.net.provider_status, self.net.provider_roaming = provider_status(parts[1])
                    out.append(DisplayMessage(23, f"+ Status: {BLUE}{self.net.provider_status}"))
            elif line.startswith("+CPIN: "):
                if line[7:] == "READY":
                    self.sim.card_status = GREEN + "[UNLOCKED]" + OFF
                else:
                    self.sim.card_status = ALERT + "[LOCKED]" + OFF
                out.append(DisplayMessage(18, f"+ State [PIN] : {self.sim.card_status}"))
            elif line.startswith("+CSMS: "):
                parts = line[7:].split(",")
                if len(parts) == 4:
                    gsm, send, receive, broadcast = (flag_text(p) for p in parts)
                    self.net.sms = (
                        f"[GSM {gsm}] [Send {send}] [Receive {receive}] [Cell Broadcast {broadcast}]"
                    )
                    out.append(DisplayMessage(33, f"  + Cell SMS Infra: {self.net.sms}"))
        elif line.startswith("^CHIPTEMP: "):
            parts = line[11:].split(",")
            if len(parts) == 5:
                cpu = _uint(parts[0]) // 10
                psu = _uint(parts[1]) // 10
                case = _uint(parts[3])
                self.device.temp = (
                    f"CPU {temperature_color(cpu, 42)}{cpu}{OFF}C "
                    f"PSU {temperature_color(psu, 42)}{psu}{OFF}C "
                    f"CASE {temperature_color(case, 39)}{parts[3]}{OFF}C"
                )
                out.append(DisplayMessage(11, f"  + Temperature:   {self.device.temp}"))

    def _dsflowrpt(self, raw, out):
        self.status.dsflowrpt = raw
        out.append(DisplayMessage(62, f"+ DSFLOWRPT: {GREY}{raw}"))
        parts = raw.split(",")
        if len(parts) != 7:
            return
        session = self.session
        seconds = _uint(parts[0], 16)
        session.uptime = _go_duration(min(seconds * 1_000_000_000, _MAX_DURATION_NS))
        out.append(DisplayMessage(50, f"+ Uptime: {GREEN}{session.uptime}"))
        session.tx_speed = hru_iec(_uint(parts[1], 16), "bytes/sec")
        out.append(DisplayMessage(51, f"  + Tx speed: {CYAN}{session.tx_speed}"))
        session.rx_speed = hru_iec(_uint(parts[2], 16), "bytes/sec")
        out.append(DisplayMessage(52, f"  + Rx speed: {CYAN}{session.rx_speed}"))
        session.tx_total = hru_iec(_uint(parts[3], 16), "bytes")
        out.append(DisplayMessage(53, f"  + Tx total: {CYAN}{session.tx_total}"))
        session.rx_total = hru_iec(_uint(parts[4], 16), "bytes")
        out.append(DisplayMessage(54, f"  + Rx total: {CYAN}{session.rx_total}"))
        session.status = "active"
        out.append(DisplayMessage(49, _header("CURRENT SESSION", session.status)))

    def _dhcp(self, raw, out):
        nic = self.nic
        nic.dhcp = raw
        out.append(DisplayMessage(60, f"+ DHCP:      {GREY}{raw}"))
        parts = raw.split(",")
        if len(parts) != 8:
            return
        nic.uplink = hru_si(_uint(parts[6]), "bit")
        out.append(DisplayMessage(
            55,
            f"+ Bandwidth:  [Uplink Channel {BLUE}{nic.uplink}{OFF}] "
            f"[Downlink Channel {BLUE}{nic.downlink}{OFF}]",
        ))
        nic.downlink = hru_si(_uint(parts[7]), "bit")
        nic.ip4 = hex_to_ipv4(parts[0])
        if nic.ip4.startswith("192") or nic.ip4.startswith("10"):
            nic.ip4_rfc1918 = True
            nic.ip4_nat = f"{BLUE}[Provider NAT] [RFC1918 true]{OFF}"
        else:
            nic.ip4_rfc1918 = False
            nic.ip4_nat = f"{BLUE}[direct]{OFF}"
        out.append(DisplayMessage(44, f"  + IPv4 Mode   : {nic.ip4_nat}"))
        nic.ip4_netmask = hex_to_ipv4(parts[1])
        nic.ip4_gateway = hex_to_ipv4(parts[2])
        nic.ip4_dns1 = hex_to_ipv4(parts[4])
        nic.ip4_dns2 = hex_to_ipv4(parts[5])
        nic.ip4_gateway_display = f"[{nic.ip4_gateway}]"
        out.append(DisplayMessage(46, f"  + IPv4 Gateway: {BLUE}{nic.ip4_gateway_display}"))
        nic.ip4_display = f"[{nic.ip4}] [MASK {nic.ip4_netmask}]"
        out.append(DisplayMessage(45, f"  + IPv4 Address: {BLUE}{nic.ip4_display}"))
        nic.ip4_dns_display = f"[{nic.ip4_dns1}] [{nic.ip4_dns2}]"
        out.append(DisplayMessage(47, f"  + IPv4 DNS SRV: {BLUE}{nic.ip4_dns_display}"))
        nic.status = "active"
        out.append(DisplayMessage(42, _header("INTERFACE NDIS/DHCP", nic.status)))

    def _system_mode_message(self):
        net = self.net
        return DisplayMessage(
            26,
            f"+ System Mode: {BLUE}{net.system_mode}{OFF} "
            f"[RAN AirInterface {BLUE}{net.provider_interface}{OFF}]",
        )

    def _hcsq(self, raw, out):
        net = self.net
        self.status.hcsq = raw.replace('"', "")
        out.append(DisplayMessage(59, f"+ HCSQ:      {GREY}{self.status.hcsq}"))
        parts = self.status.hcsq.split(",")
        net.system_mode = "[" + parts[0] + "]"
        out.append(self._system_mode_message())
        if len(parts) == 5:
            rssi = _wrap(120 - _uint(parts[1]))
            net.lte_rssi = f"{bar_indicator(rssi, 60, '|')} {CYAN}[-{rssi} dBm]{OFF}"
            out.append(DisplayMessage(30, f"    + Rx Signal Strength [RSSI]: {BLUE}{net.lte_rssi}{OFF}"))
            rsrp = _wrap(140 - _uint(parts[2]))
            net.lte_rsrp = f"{bar_indicator(rsrp, 60, '|')} {CYAN}[-{rsrp} dBm]{OFF}"
            out.append(DisplayMessage(31, f"    + Rx Signal Power    [RSRP]: {BLUE}{net.lte_rsrp}{OFF}"))
            sinr = _wrap(20 - _uint(parts[4]) // 2)
            net.lte_sinr = f"{bar_indicator(sinr, 10, '|||')} {CYAN}[-{sinr} dB]{OFF}"
            out.append(DisplayMessage(32, f"    + Rx Signal to Noise [SINR]: {BLUE}{net.lte_sinr}{OFF}"))
        net.status = "active"
        out.append(DisplayMessage(22, _header("CONNECTED CELLTOWER", net.status)))

    def _hfreqinfo(self, raw, out):
        net = self.net
        self.status.hfreqinfo = raw
        out.append(DisplayMessage(61, f"+ HFREQINFO: {GREY}{raw}{OFF}"))
        parts = raw.split(",")
        if len(parts) != 9 or parts[1] != "6":
            return
        net.system_mode = "[LTE]"
        out.append(self._system_mode_message())
        net.lte_band = "[" + parts[2] + "]"
        out.append(DisplayMessage(
            27,
            f"  + LTE Category: {BLUE}{net.lte_cat}{OFF} Frequency Band {BLUE}{net.lte_band}{OFF}",
        ))
        net.dl_fc = parts[3]
        net.dl_cf = hru_si(_wrap(_uint(parts[4]) * 100000), "Hz")
        net.dl_bw = hru_si(_wrap(_uint(parts[5]) * 1000), "Hz")
        out.append(DisplayMessage(
            29,
            f"    + Downlink: [Carrier {BLUE}{net.dl_cf}{OFF}] [Bandwidth {BLUE}{net.dl_bw}{OFF}] "
            f"[EARFCN {BLUE}{net.dl_fc}{OFF}]",
        ))
        net.ul_fc = parts[6]
        net.ul_cf = hru_si(_wrap(_uint(parts[7]) * 100000), "Hz")
        net.ul_bw = hru_si(_wrap(_uint(parts[8]) * 1000), "Hz")
        out.append(DisplayMessage(
            28,
            f"    + Uplink:   [Carrier {BLUE}{net.ul_cf}{OFF}] [Bandwidth {BLUE}{net.ul_bw}{OFF}] "
            f"[EARFCN {BLUE}{net.ul_fc}{OFF}]",
        ))

    def _rssi(self, raw, out):
        self.status.rssi = raw
        out.append(DisplayMessage(58, f"+ RSSI:      {GREY}{raw}"))
        value = _uint(raw, 10, 8)
        bar = bar_indicator(_wrap(140 - value // 2), 60, "|")
        self.net.link_quality = f"{bar} {CYAN}[-{_wrap(140 - value)} dB]{OFF}"
        out.append(DisplayMessage(35, f"  + LinkQuality:    {self.net.link_quality}"))

    def _nwtime(self, raw, now, out):
        stamp = raw.split("+")[0]
        try:
            tower = datetime.strptime(stamp, _NW_TIME_LAYOUT).replace(tzinfo=timezone.utc)
            diff = now - tower
            diff_ns = min((diff // timedelta(microseconds=1)) * 1000, _MAX_DURATION_NS)
        except ValueError:
            diff = timedelta.max
            diff_ns = _MAX_DURATION_NS
        if diff < _TIME_DIFF_OK:
            self.net.dts_match = f"{OK} [Celltower vs. Reference: {BLUE}{_rfc3339(now)}{OFF}]"
        else:
            self.net.dts_match = f"{ALERT_BANNER} {ALERT}DIFF {_go_duration(diff_ns)}"
        out.append(DisplayMessage(34, f"  + TimeStamp:      {self.net.dts_match}"))

    def _iccid(self, ccid, out):
        self.sim.ccid = (
            f"MajorID {BLUE}{ccid[0:3]}{OFF} CountryCode {BLUE}{ccid[3:5]}{OFF} "
            f"IssuerID {BLUE}{ccid[5:7]}{OFF} AccountID {BLUE}{ccid[7:19]}{OFF} CD {BLUE}{ccid[19:]}{OFF}"
        )
        out.append(DisplayMessage(20, f"  + CCID      : {self.sim.ccid}"))
        self.sim.fingerprint = fingerprint(ccid)
        if self.sim.fingerprint in self.simcard_known_list:
            text = f"{WHITE}### SIM CARD {ALERT_GREEN}[OK]{GREY} [{self.sim.fingerprint}]"
        else:
            text = f"{WHITE}### SIM CARD {RED}UNLISTED [{self.sim.fingerprint}]"
        out.append(DisplayMessage(17, text))

    def _spn(self, raw, out):
        sim, net = self.sim, self.net
        parts = raw.replace('"', "").split(",")
        if len(parts) < 3:
            raise ValueError(f"malformed SPN sentence: {raw!r}")
        if parts[2].startswith("FF"):
            sim.spn = "n/a"
            sim.issuer = ALERT + "[" + sim.spn + "]" + OFF
        else:
            sim.spn = parts[2]
            sim.issuer = BLUE + "[" + sim.spn + "]" + OFF
        out.append(DisplayMessage(19, f"+ Issuer      : {sim.issuer}"))
        if sim.spn == net.provider_name:
            net.auth = f"[ESP] [Network Operator SPN {sim.spn}]"
        elif net.provider_roaming:
            net.auth = f"[ESP/MVNO] [Roaming Access via SPN {sim.spn}]"
        else:
            net.auth = f"[MVNO] [Virtual Operator via SPN {sim.spn}]"
        roaming = str(net.provider_roaming).lower()
        out.append(DisplayMessage(
            25, f"+ Authentication: {BLUE}{net.auth}{OFF} [Roaming {BLUE}{roaming}{OFF}]"
        ))

    def _cops(self, line, out):
        net = self.net
        parts = line[6:].replace('"', "").split(",")
        if len(parts) == 4:
            net.provider_name = CYAN + "[" + parts[2] + "]" + OFF
            out.append(DisplayMessage(24, f"+ Network Operator: {net.provider_name}"))
            net.provider_interface = air_interface(parts[3])
            return
        gsm, umts, lte = [], [], []
        cleaned = line.removeprefix("+COPS: ").replace('"', "").replace("(", "")
        for entry in cleaned.split("),"):
            fields = entry.split(",")
            if len(fields) == 5:
                target = {"0": gsm, "2": umts, "7": lte}.get(fields[4])
                if target is not None:
                    target.append("[" + fields[1] + "] ")
            net.around = "active"
            out.append(DisplayMessage(37, _header("OTHER VISIBLE CELL INTERFACES", net.around)))
        net.provider_lte = "".join(lte) or DEFAULTS_SHORT
        out.append(DisplayMessage(40, f"+ E-UTRAN LTE: {CYAN}{net.provider_lte}"))
        net.provider_gsm = "".join(gsm) or DEFAULTS_SHORT
        out.append(DisplayMessage(38, f"+ GSM:         {CYAN}{net.provider_gsm}"))
        net.provider_umts = "".join(umts) or DEFAULTS_SHORT
        out.append(DisplayMessage(39, f"+ UTRAN UMTS:  {CYAN}{net.provider_umts}"))

    # -- identity sentences -----------------------------------------------

    _VERSION_FIELDS = (
        ("^VERSION:CFG:", "cfg", 8, "  + Config:        "),
        ("^VERSION:BDT:", "build", 5, "  + Build Date:    "),
        ("^VERSION:EXTU:", "model", 4, "+ Model:           "),
        ("^VERSION:EXTH:", "hwver", 10, "  + Hardware:      "),
        ("^VERSION:EXTD:", "iso", 7, "  + Image:         "),
        ("^VERSION:EXTS:", "revision", 6, "  + Software:      "),
    )

    def _parse_identity(self, line, out):
        device = self.device
        if line.startswith("^V"):
            if line.startswith("^VERSION:INI:"):
                ini = line[13:]
                if ini == "":
                    device.ini = f"{GREEN}[OK]{OFF} [NONE]"
                else:
                    device.ini = f"{ALERT_BANNER} {ALERT}{ini}{OFF}"
                out.append(DisplayMessage(9, f"  + Custom Init:   {BLUE}{device.ini}"))
            for prefix, attr, index, label in self._VERSION_FIELDS:
                if line.startswith(prefix) and len(line) > len(prefix):
                    setattr(device, attr, line[len(prefix):])
                    out.append(DisplayMessage(index, f"{label}{BLUE}{getattr(device, attr)}"))
                    break
        elif line.startswith("IMEI:"):
            imei = line[5:]
            if len(imei) > 14:
                device.imei = (
                    f"TAC {BLUE}{imei[0:2]}-{imei[2:8]}{OFF} SNR {BLUE}{imei[8:14]}{OFF} CD {BLUE}{imei[14:]}{OFF}"
                )
                out.append(DisplayMessage(12, f"  + IMEI:          {device.imei}"))
        elif line.startswith("+GCAP: "):
            device.capabilities = line[7:].replace("+", "")
            out.append(DisplayMessage(13, f"  + Capabilities:  {BLUE}{device.capabilities}"))
        if len(line) > 14 and line.startswith("Manufacturer: "):
            device.manufacturer = line[14:].upper()
            device.status = "active"
            out.append(DisplayMessage(2, _header("DEVICE", device.status)))
            out.append(DisplayMessage(3, f"+ Manufacturer:    {BLUE}{device.manufacturer}"))
        parts = (
            device.manufacturer, device.model, device.build, device.revision, device.iso,
            device.cfg, device.hwver, device.imei, device.capabilities, device.ini,
        )
        if all(part != DEFAULTS for part in parts):
            device.fingerprint = fingerprint("".join(parts))
            if device.fingerprint in self.device_known_list:
                text = f"{WHITE}### DEVICE {ALERT_GREEN}[OK]{GREY} [{device.fingerprint}]"
            else:
                text = f"{WHITE}### DEVICE {RED}UNLISTED [{device.fingerprint}]"
            out.append(DisplayMessage(2, text))
            device.fingerprint_done = True