"""Live status monitor: device I/O, command pacing and display frames."""

import queue
import sys
import threading
import time
from dataclasses import dataclass

from .devices import command_set
from .ecomode import eco_timings
from .parser import SentenceParser
from .state import initial_display
from .ui import CLEAN_NEWLINE, GREY, OFF

_MIN_SENTENCE = 12
_MAX_SENTENCE = 128
_STEP_DELAY = 1.0
_WAIT_STEPS = {"w": 1.0, "W": 2.0}
_SKIP_STEPS = ("", "x")
_REOPEN_DELAY = 5.0
_CYCLE_PAUSE = 2.0
_POLL_INTERVAL = 0.5


def filter_sentences(lines):
    """Yield only lines of 12 to 128 characters that contain a colon."""
    for line in lines:
        if _MIN_SENTENCE <= len(line) <= _MAX_SENTENCE and ":" in line:
            yield line


class FrameBuilder:
    """Holds the current display lines and renders numbered frames."""

    def __init__(self, port):
        self.lines = initial_display(port)
        self.frame = 0

    def update(self, message):
        """Replace one display line with the text of ``message``."""
        if not 0 <= message.line < len(self.lines):
            raise IndexError(f"display line {message.line} out of range")
        self.lines[message.line] = message.text

    def render(self):
        """Return the next full frame as terminal text."""
        self.frame += 1
        body = "".join(line + CLEAN_NEWLINE for line in self.lines)
        return f"{body}{GREY}[Frame {self.frame}] "


class CommandScheduler:
    """Decides which command batches are sent to the modem and when."""

    def __init__(self, commands):
        self.commands = commands
        self._slow_updates = 10
        self._real_slow_updates = 10
        self._catch_all = 0
        self._fingerprint_done = False

    def startup(self):
        """Batches sent once when monitoring starts."""
        c = self.commands
        return [c.device_clean, c.device_init, c.sim, c.device_setup]

    def cycle(self, fingerprint_done):
        """Yield ``(batch, pause_after)`` pairs for one polling cycle.

        ``fingerprint_done`` is called after the identity batches have been
        handed out; it may block until the device is identified and returns
        whether it was.
        """
        c = self.commands
        yield c.update, 0.0
        self._slow_updates += 1
        if self._slow_updates <= 3:
            return
        yield c.slow, 0.0
        self._slow_updates = 0
        self._real_slow_updates += 1
        if self._real_slow_updates <= 6:
            return
        yield c.real_slow, 0.0
        self._real_slow_updates = 0
        self._catch_all += 1
        if self._catch_all <= 8:
            return
        if not self._fingerprint_done:
            yield c.device_clean, 2.0
            yield c.device_init, 0.0
            self._fingerprint_done = bool(fingerprint_done())
        yield c.sim, 2.0
        yield c.device_setup, 2.0
        self._catch_all = 0


def command_lines(batch):
    """Yield ``(command, delay)`` for a batch; ``command`` is None for a pure wait."""
    for step in batch:
        if step in _SKIP_STEPS:
            continue
        if step in _WAIT_STEPS:
            yield None, _WAIT_STEPS[step]
            continue
        yield f"AT{step}\r\n", _STEP_DELAY


def _emit(text):
    sys.stdout.write(text)
    sys.stdout.flush()


def _open_device(port, mode, buffering=-1):
    while True:
        try:
            return open(port, mode, buffering=buffering)
        except OSError:
            print(f"### DEVICE ERROR: lte device -> {port} not ready! Waiting for device ... ")
            time.sleep(_REOPEN_DELAY)


def _strip_line_end(raw):
    return raw.decode(errors="replace").removesuffix("\n").removesuffix("\r")


class _Monitor:
    def __init__(self, config):
        self.config = config
        self.eco_sleep, self.refresh = eco_timings(config.eco_mode)
        self.sentences = queue.Queue(maxsize=100)
        self.display = queue.Queue(maxsize=200)
        self.batches = queue.Queue(maxsize=1)
        self.frames = queue.Queue(maxsize=10)
        self.fingerprint = threading.Event()
        self.failed = threading.Event()
        self.failure = None

    def run(self):
        workers = (self._read, self._pace, self._schedule, self._build_frames, self._write_frames)
        for target in workers:
            threading.Thread(target=target, daemon=True).start()
        parser = SentenceParser(
            self.config.device_port,
            self.config.device_known_list,
            self.config.simcard_known_list,
        )
        while True:
            if self.failed.is_set():
                raise self.failure
            try:
                line = self.sentences.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            was_done = parser.fingerprint_done()
            for message in parser.feed(line):
                self.display.put(message)
            if not was_done and parser.fingerprint_done():
                self.fingerprint.set()
            if was_done:
                time.sleep(self.eco_sleep)

    def _read(self):
        with _open_device(self.config.device_port, "rb") as device:
            for line in filter_sentences(_strip_line_end(raw) for raw in device):
                self.sentences.put(line)
                _emit(f"{GREY}#{OFF}")
                time.sleep(self.eco_sleep)

    def _pace(self):
        extra = 0.0
        with _open_device(self.config.device_port, "r+b", buffering=0) as device:
            while True:
                batch = self.batches.get()
                for command, delay in command_lines(batch):
                    if command is not None:
                        shown = command.rstrip("\r\n")
                        _emit(f"{GREY}# {shown} #{OFF}")
                        try:
                            device.write(command.encode())
                        except OSError as exc:
                            print(f"\n****** ERROR: command [{shown}] -> [{exc}] ********")
                            print("############ LTE DEVICE GONE!  ################")
                            print("############     [EXIT]        ################\n")
                            self.failure = exc
                            self.failed.set()
                            return
                    time.sleep(delay)
                time.sleep(_STEP_DELAY + extra)
                extra += self.eco_sleep * 3

    def _await_fingerprint(self):
        self.fingerprint.wait()
        return True

    def _schedule(self):
        scheduler = CommandScheduler(command_set(self.config.device_model))
        for batch in scheduler.startup():
            self.batches.put(batch)
        while not self.failed.is_set():
            for batch, pause in scheduler.cycle(self._await_fingerprint):
                self.batches.put(batch)
                if pause:
                    time.sleep(pause)
            time.sleep(_CYCLE_PAUSE)

    def _build_frames(self):
        builder = FrameBuilder(self.config.device_port)
        last = time.time()
        while True:
            builder.update(self.display.get())
            now = time.time()
            if int(now) > int(last + self.refresh):
                self.frames.put(builder.render())
                last = now
            time.sleep(self.eco_sleep)

    def _write_frames(self):
        while True:
            _emit(self.frames.get())


@dataclass
class Config:
    """Settings for one monitored modem."""

    device_port: str = ""
    device_model: str = ""
    device_known_list: str = ""
    simcard_known_list: str = ""
    eco_mode: str = ""

    def stats(self):
        """Poll the modem and keep redrawing the status display.

        Runs until the device stops accepting commands, then raises the
        OSError that the write failed with.
        """
        _Monitor(self).run()