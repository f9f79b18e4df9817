"""Command line entry point for the modem status monitor."""

import argparse
import os
import sys

from .monitor import Config


def default_config():
    """Settings used when the monitor is started from the command line."""
    return Config(
        device_port="/dev/lte0",
        device_model="HUAWEI_E3372",
        device_known_list="AAAA-AA-AA-AAAA,BBBB-BB-BB-BBBB,CCCC-CC-CC-CCCC",
        simcard_known_list="DDDD-DD-DD-DDDD,EEEE-EE-EE-EEEE,FFFF-FF-FF-FFFF",
        eco_mode="normal",
    )


def main(argv=None):
    """Run the status display; with SMS set in the environment, do no monitoring."""
    parser = argparse.ArgumentParser(
        prog="lteinfo",
        description="Show live status of an LTE modem on its AT command port.",
    )
    parser.parse_args(argv)
    config = default_config()
    if "SMS" in os.environ:
        return 0
    try:
        config.stats()
    except KeyboardInterrupt:
        return 130
    except OSError as exc:
        print(f"lteinfo: {exc}", file=sys.stderr)
        return 1
    return 0