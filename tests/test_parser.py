from datetime import datetime, timezone

import pytest

from lteinfo.converter import air_interface, fingerprint, hru_iec
from lteinfo.parser import DisplayMessage, SentenceParser
from lteinfo.ui import ALERT, DEFAULTS_SHORT, GREEN, OFF


@pytest.fixture
def parser():
    return SentenceParser("/dev/lte0", "", "")


def test_dsflowrpt_updates_session(parser):
    msgs = parser.feed("^DSFLOWRPT:0000003C,00000000,00000000,0,0,0,0")
    assert {m.line for m in msgs} == {62, 50, 51, 52, 53, 54, 49}
    assert parser.session.uptime == "1m0s"
    assert parser.session.tx_speed == hru_iec(0, "bytes/sec")
    assert parser.session.status == "active"


def test_dhcp_private_address(parser):
    line = "^DHCP: 0100000A,00FFFFFF,FE00000A,FE00000A,08080808,04040808,1000,2000"
    msgs = parser.feed(line)
    assert parser.nic.ip4 == "10.0.0.1"
    assert parser.nic.ip4_rfc1918 is True
    assert parser.nic.status == "active"
    assert msgs[0] == DisplayMessage(60, parser.feed(line)[0].text)


def test_cpin_ready_and_locked(parser):
    parser.feed("+CPIN: READY")
    assert parser.sim.card_status == GREEN + "[UNLOCKED]" + OFF
    parser.feed("+CPIN: SIM PIN")
    assert parser.sim.card_status == ALERT + "[LOCKED]" + OFF


def test_csms_rejects_non_boolean(parser):
    with pytest.raises(ValueError):
        parser.feed("+CSMS: 2,1,1,1")


def test_iccid_known_sim():
    ccid = "000000000000000000001"
    known = fingerprint(ccid)
    p = SentenceParser("/dev/lte0", "", known)
    msgs = p.feed("^ICCID:" + ccid)
    assert p.sim.fingerprint == known
    sim_msg = [m for m in msgs if m.line == 17][0]
    assert "[OK]" in sim_msg.text


def test_cops_current_operator(parser):
    parser.feed('+COPS: 0,0,"Example Net",7')
    assert parser.net.provider_interface == air_interface("7")
    assert "Example Net" in parser.net.provider_name


def test_cops_scan_lists(parser):
    parser.feed('+COPS: (2,"Alpha","A","26201",7),(1,"Beta","B","26202",0),,(0,1,2,3,4)')
    assert parser.net.provider_lte == "[Alpha] "
    assert parser.net.provider_gsm == "[Beta] "
    assert parser.net.provider_umts == DEFAULTS_SHORT


def test_creg_roaming(parser):
    parser.feed("+CREG: 1,5")
    assert parser.net.provider_roaming is True


def test_nwtime_in_sync(parser):
    now = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    msgs = parser.feed("^NWTIME:24/05/06,07:08:09+8,0", now)
    assert "2024-05-06T07:08:09Z" in msgs[0].text


def test_device_fingerprint_completes(parser):
    lines = [
        "Manufacturer: huawei",
        "^VERSION:EXTU:E3372",
        "^VERSION:BDT:Jan 1 2020",
        "^VERSION:EXTS:21.0",
        "^VERSION:EXTD:WEBUI",
        "^VERSION:CFG:1004",
        "^VERSION:EXTH:CL2E",
        "IMEI:350000000000009",
        "+GCAP: +CGSM",
    ]
    for line in lines:
        parser.feed(line)
    assert parser.fingerprint_done() is False
    assert parser.device.manufacturer == "HUAWEI"
    msgs = parser.feed("^VERSION:INI:")
    assert parser.fingerprint_done() is True
    assert msgs[-1].line == 2
    assert parser.device.fingerprint in msgs[-1].text