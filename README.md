# lteinfo

A live terminal dashboard for LTE USB modems that expose an AT command port
(for example a HUAWEI E3372 in NCM mode).

`lteinfo` opens the modem's device file, sends periodic AT queries, parses
the solicited and unsolicited response lines, and repaints a colour status
screen with:

- device details (manufacturer, model, firmware, IMEI, temperatures, operator lock)
- SIM card state, issuer and CCID
- the connected cell tower: registration, operator, band, carrier frequencies,
  RSSI / RSRP / SINR bar graphs, a check of the network time against the local clock
- other visible GSM, UMTS and LTE operators
- the NDIS/DHCP interface: IPv4 address, gateway, DNS servers, NAT detection
- the current data session: uptime, link speeds and transfer totals

Device and SIM card fingerprints (a short base32 form of a SHA-512/224 digest
of their reported identity) are looked up in known lists; one that is not
found is shown as `UNLISTED`.

## Installation

```
pip install .
```

No third-party libraries are needed.

## Usage

```
lteinfo
```

The command uses `lteinfo.cli.default_config()`: it reads and writes
`/dev/lte0`, treats the device as a `HUAWEI_E3372` and runs in the `normal`
eco mode. Its known-device and known-SIM lists hold only made-up
fingerprints, so real hardware shows as `UNLISTED`; pass your own lists
through the Python interface below.

The command waits until the device can be opened, then keeps refreshing the
screen. It exits with status 130 on Ctrl-C, and with status 1 (after printing
the error) if writing a command to the device fails. It takes no options
besides `--help`.

## Using it from Python

```python
from lteinfo.monitor import Config

config = Config(
    device_port="/dev/lte0",
    device_model="HUAWEI_E3372",
    device_known_list="",
    simcard_known_list="",
    eco_mode="high",
)
config.stats()
```

`Config.stats()` runs until the device stops accepting commands and then
raises the `OSError` the write failed with.

Models other than `HUAWEI_E3372` get a minimal generic command set
(`lteinfo.devices.command_set`) that only queries identity information.

Eco modes (`off`, `low`, `mid`, `normal`, `high`, `max`, `extreme`) trade
responsiveness for lower load; `lteinfo.ecomode.eco_timings(mode)` returns
the pause between processed lines and the screen refresh interval, in
seconds. Unknown modes get 0.035 s and 1 s.

The pieces can be used on their own:

- `lteinfo.parser.SentenceParser(device_port, device_known_list, simcard_known_list)`
  keeps the modem state; `feed(line, now=None)` returns a list of
  `DisplayMessage(line, text)` updates for one response line, and
  `fingerprint_done()` tells whether the device identity is complete.
- `lteinfo.monitor.FrameBuilder(port)` holds the 64 display lines;
  `update(message)` applies a `DisplayMessage` and `render()` returns the
  next numbered frame as terminal text.
- `lteinfo.monitor.CommandScheduler(commands)` yields the command batches to
  send, and `lteinfo.monitor.command_lines(batch)` turns a batch into
  `AT...\r\n` lines and waits.
- `lteinfo.monitor.filter_sentences(lines)` keeps only lines of 12 to 128
  characters that contain a colon.
- `lteinfo.converter` holds the value formatting helpers (human readable
  units, little-endian hex to IPv4, status code texts, fingerprints).

## What it does not do

There is no SMS support. If the `SMS` environment variable is set, the
`lteinfo` command exits with status 0 without opening the device or reading
any messages. The SMS command batches in `CommandSet` (`sms_init`, `sms_get`)
are defined but never sent.

## Tests

```
pip install .[test]
pytest
```