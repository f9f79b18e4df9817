"""Collected modem state and the initial display layout."""

from dataclasses import dataclass

from .ui import (
    BLUE,
    CYAN,
    DEFAULTS,
    DEFAULTS_SHORT,
    GREEN,
    GREY,
    OFF,
    SECTION_LINE,
    WHITE,
)

DISPLAY_LINES = 64


@dataclass
class DeviceInfo:
    """Hardware and firmware identity of the modem."""

    port: str = ""
    manufacturer: str = DEFAULTS
    model: str = DEFAULTS
    build: str = DEFAULTS
    revision: str = DEFAULTS
    hwver: str = DEFAULTS
    iso: str = DEFAULTS
    cfg: str = DEFAULTS
    imei: str = DEFAULTS
    ini: str = DEFAULTS
    temp: str = DEFAULTS
    capabilities: str = DEFAULTS
    netlock: str = DEFAULTS
    status: str = "waiting for device"
    fingerprint: str = DEFAULTS
    fingerprint_done: bool = False
    done: bool = False


@dataclass
class StatusInfo:
    """Raw status sentences as last received."""

    rssi: str = DEFAULTS
    hcsq: str = DEFAULTS
    dsflowrpt: str = DEFAULTS
    hfreqinfo: str = DEFAULTS
    status: str = "active"


@dataclass
class SessionInfo:
    """Current data session counters."""

    uptime: str = DEFAULTS
    tx_speed: str = DEFAULTS
    rx_speed: str = DEFAULTS
    tx_total: str = DEFAULTS
    rx_total: str = DEFAULTS
    status: str = "waiting for connection request"


@dataclass
class NetworkInfo:
    """Cell tower, radio and operator information."""

    system_mode: str = DEFAULTS_SHORT
    rssi: str = " 0dBm "
    lte_band: str = DEFAULTS_SHORT
    lte_rssi: str = DEFAULTS
    lte_rsrp: str = DEFAULTS
    lte_sinr: str = DEFAULTS
    lte_rsrq: str = DEFAULTS
    ul_fc: str = DEFAULTS_SHORT
    ul_bw: str = DEFAULTS_SHORT
    ul_cf: str = DEFAULTS_SHORT
    dl_fc: str = DEFAULTS_SHORT
    dl_bw: str = DEFAULTS_SHORT
    dl_cf: str = DEFAULTS_SHORT
    lte_cat: str = DEFAULTS_SHORT
    dts_match: str = DEFAULTS
    dhcp_speed: str = ""
    provider_name: str = DEFAULTS
    provider_interface: str = DEFAULTS_SHORT
    provider_status: str = DEFAULTS
    provider_roaming: bool = False
    provider_gsm: str = DEFAULTS
    provider_umts: str = DEFAULTS
    provider_lte: str = DEFAULTS
    auth: str = DEFAULTS
    sms: str = DEFAULTS
    around: str = "waiting for cell tower interface answer"
    link_quality: str = DEFAULTS
    status: str = "waiting for cell tower interface answer"


@dataclass
class NicInfo:
    """Network interface and DHCP lease information."""

    uplink: str = DEFAULTS_SHORT
    downlink: str = DEFAULTS_SHORT
    stack: str = DEFAULTS
    dhcp: str = DEFAULTS
    ip4: str = ""
    ip4_display: str = DEFAULTS
    ip4_netmask: str = ""
    ip4_gateway: str = ""
    ip4_gateway_display: str = DEFAULTS
    ip4_dns1: str = ""
    ip4_dns2: str = ""
    ip4_dns_display: str = DEFAULTS
    ip4_nat: str = DEFAULTS
    ip4_rfc1918: bool = False
    status: str = "waiting for device"


@dataclass
class SimInfo:
    """SIM card information."""

    spn: str = ""
    ccid: str = DEFAULTS
    issuer: str = DEFAULTS
    card_status: str = DEFAULTS
    fingerprint: str = ""
    status: str = "waiting for simcard answer"


def _header(title, status):
    return f"{WHITE}### {title}{OFF} [{GREY}{status}{OFF}]"


def initial_display(port):
    """The 64 display lines shown before the modem has reported anything."""
    nic = NicInfo()
    net = NetworkInfo()
    sim = SimInfo()
    status = StatusInfo()
    session = SessionInfo()
    device = DeviceInfo(port=port)
    roaming = str(net.provider_roaming).lower()
    return [
        "\n" * 8,
        SECTION_LINE,
        _header("DEVICE", device.status),
        f"+ Manufacturer:    {BLUE}{device.manufacturer}",
        f"+ Model:           {BLUE}{device.model}",
        f"  + Build Date:    {BLUE}{device.build}",
        f"  + Software:      {BLUE}{device.revision}",
        f"  + Image:         {BLUE}{device.iso}",
        f"  + Config:        {BLUE}{device.cfg}",
        f"  + Custom Init:   {BLUE}{device.ini}",
        f"  + Hardware:      {BLUE}{device.hwver}",
        f"  + Temperature:   {device.temp}",
        f"  + IMEI:          {device.imei}",
        f"  + Capabilities:  {BLUE}{device.capabilities}",
        f"  + Operator Lock: {device.netlock}",
        f"  + Command Port:  {BLUE}{device.port}",
        SECTION_LINE,
        _header("SIM CARD", sim.status),
        f"+ State [PIN] : {sim.card_status}",
        f"+ Issuer      : {sim.issuer}",
        f"  + CCID      : {sim.ccid}",
        SECTION_LINE,
        _header("CONNECTED CELLTOWER", net.status),
        f"+ Status: {BLUE}{net.provider_status}",
        f"+ Network Operator: {net.provider_name}",
        f"+ Authentication: {BLUE}{net.auth}{OFF} [Roaming {BLUE}{roaming}{OFF}]",
        f"+ System Mode: {BLUE}{net.system_mode}{OFF} [RAN AirInterface {BLUE}{net.provider_interface}{OFF}]",
        f"  + LTE Category: {BLUE}{net.lte_cat}{OFF} Frequency Band {BLUE}{net.lte_band}",
        f"    + Uplink:   [Carrier {BLUE}{net.ul_cf}{OFF}] [Bandwidth {BLUE}{net.ul_bw}{OFF}] "
        f"[EARFCN {BLUE}{net.ul_fc}{OFF}]",
        f"    + Downlink: [Carrier {BLUE}{net.dl_cf}{OFF}] [Bandwidth {BLUE}{net.dl_bw}{OFF}] "
        f"[EARFCN {BLUE}{net.dl_fc}{OFF}]",
        f"    + Rx Signal Strength [RSSI]: {BLUE}{net.lte_rssi}",
        f"    + Rx Signal Power    [RSRP]: {BLUE}{net.lte_rsrp}",
        f"    + Rx Signal to Noise [SINR]: {BLUE}{net.lte_sinr}",
        f"  + Cell SMS Infra: {net.sms}",
        f"  + TimeStamp:      {net.dts_match}",
        f"  + LinkQuality:    {net.link_quality}",
        SECTION_LINE,
        _header("OTHER VISIBLE CELL INTERFACES", net.around),
        f"+ GSM:         {CYAN}{net.provider_gsm}",
        f"+ UTRAN UMTS:  {CYAN}{net.provider_umts}",
        f"+ E-UTRAN LTE: {CYAN}{net.provider_lte}",
        SECTION_LINE,
        _header("INTERFACE NDIS/DHCP", nic.status),
        f"+ Supported Network Stack(s): {GREEN}{nic.stack}",
        f"  + IPv4 Mode   : {nic.ip4_nat}",
        f"  + IPv4 Address: {BLUE}{nic.ip4_display}",
        f"  + IPv4 Gateway: {BLUE}{nic.ip4_gateway_display}",
        f"  + IPv4 DNS SRV: {BLUE}{nic.ip4_dns_display}",
        SECTION_LINE,
        _header("CURRENT SESSION", session.status),
        f"+ Uptime: {GREEN}{session.uptime}",
        f"  + Tx speed: {CYAN}{session.tx_speed}",
        f"  + Rx speed: {CYAN}{session.rx_speed}",
        f"  + Tx total: {CYAN}{session.tx_total}",
        f"  + Rx total: {CYAN}{session.rx_total}",
        f"+ Bandwidth:  [Uplink Channel {BLUE}{nic.uplink}{OFF}] [Downlink Channel {BLUE}{nic.downlink}{OFF}]",
        SECTION_LINE,
        _header("RAW SENTENCE", status.status),
        f"+ RSSI:      {GREY}{status.rssi}",
        f"+ HCSQ:      {GREY}{status.hcsq}",
        f"+ DHCP:      {GREY}{nic.dhcp}",
        f"+ HFREQINFO: {GREY}{status.hfreqinfo}",
        f"+ DSFLOWRPT: {GREY}{status.dsflowrpt}",
        SECTION_LINE,
    ]