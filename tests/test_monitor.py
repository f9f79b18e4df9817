import pytest

from lteinfo.devices import command_set
from lteinfo.monitor import (
    CommandScheduler,
    Config,
    FrameBuilder,
    command_lines,
    filter_sentences,
)
from lteinfo.parser import DisplayMessage
from lteinfo.state import initial_display
from lteinfo.ui import CLEAN_NEWLINE, GREY


def test_filter_sentences_keeps_only_valid_lengths_with_colon():
    shortest = "x" * 11 + ":"
    longest = "a:" + "b" * 126
    lines = ["^RSSI:1", shortest, "no colon in this line", longest, longest + "c"]
    assert list(filter_sentences(lines)) == [shortest, longest]


def test_filter_sentences_is_lazy_and_handles_empty():
    assert list(filter_sentences(iter([]))) == []


def test_command_lines_skips_and_waits():
    batch = ("I", "w", "W", "x", "", "^VERSION?", "x", "x", "x")
    assert list(command_lines(batch)) == [
        ("ATI\r\n", 1.0),
        (None, 1.0),
        (None, 2.0),
        ("AT^VERSION?\r\n", 1.0),
    ]


def test_command_lines_idle_batch_is_empty():
    assert list(command_lines(("x",) * 9)) == []


def test_scheduler_startup_order():
    commands = command_set("HUAWEI_E3372")
    scheduler = CommandScheduler(commands)
    assert scheduler.startup() == [
        commands.device_clean,
        commands.device_init,
        commands.sim,
        commands.device_setup,
    ]


def test_scheduler_first_cycles():
    commands = command_set("HUAWEI_E3372")
    scheduler = CommandScheduler(commands)
    first = [batch for batch, _ in scheduler.cycle(lambda: True)]
    assert first == [commands.update, commands.slow, commands.real_slow]
    for _ in range(3):
        assert [b for b, _ in scheduler.cycle(lambda: True)] == [commands.update]
    assert [b for b, _ in scheduler.cycle(lambda: True)] == [commands.update, commands.slow]


def _run_cycles(scheduler, count, answer):
    calls = []

    def done():
        calls.append(True)
        return answer

    cycles = [list(scheduler.cycle(done)) for _ in range(count)]
    return cycles, calls


def test_scheduler_catch_all_requests_identity_once_identified():
    commands = command_set("HUAWEI_E3372")
    scheduler = CommandScheduler(commands)
    cycles, calls = _run_cycles(scheduler, 500, True)
    batches = [[b for b, _ in cycle] for cycle in cycles]
    with_sim = [i for i, cycle in enumerate(batches) if commands.sim in cycle]
    assert len(with_sim) >= 2
    first = batches[with_sim[0]]
    assert first.index(commands.device_clean) < first.index(commands.device_init) < first.index(commands.sim)
    assert first[-1] == commands.device_setup
    real_slow_before = sum(commands.real_slow in cycle for cycle in batches[: with_sim[0]])
    assert real_slow_before == 8
    second = batches[with_sim[1]]
    assert commands.device_clean not in second
    assert commands.device_init not in second
    assert len(calls) == 1


def test_scheduler_retries_identity_until_identified():
    commands = command_set("HUAWEI_E3372")
    scheduler = CommandScheduler(commands)
    cycles, calls = _run_cycles(scheduler, 500, False)
    batches = [[b for b, _ in cycle] for cycle in cycles]
    identity = [cycle for cycle in batches if commands.device_init in cycle]
    assert len(identity) >= 2
    assert len(calls) == len(identity)


def test_scheduler_pauses_after_catch_all_batches():
    commands = command_set("HUAWEI_E3372")
    scheduler = CommandScheduler(commands)
    cycles, _ = _run_cycles(scheduler, 300, True)
    catch_all = next(cycle for cycle in cycles if any(b == commands.sim for b, _ in cycle))
    pauses = dict((id(b), p) for b, p in catch_all)
    assert pauses[id(commands.device_clean)] == 2.0
    assert pauses[id(commands.sim)] == 2.0
    assert pauses[id(commands.device_setup)] == 2.0


def test_frame_builder_renders_initial_display():
    builder = FrameBuilder("/dev/lte0")
    text = builder.render()
    assert text.endswith(f"{GREY}[Frame 1] ")
    assert text.count(CLEAN_NEWLINE) == 64
    for line in initial_display("/dev/lte0"):
        assert line + CLEAN_NEWLINE in text


def test_frame_builder_counts_frames():
    builder = FrameBuilder("/dev/lte0")
    builder.render()
    assert builder.render().endswith(f"{GREY}[Frame 2] ")
    assert builder.frame == 2


def test_frame_builder_update_replaces_line():
    builder = FrameBuilder("/dev/lte0")
    original = initial_display("/dev/lte0")[3]
    builder.update(DisplayMessage(3, "replacement text"))
    text = builder.render()
    assert "replacement text" + CLEAN_NEWLINE in text
    assert original not in text
    assert builder.lines[3] == "replacement text"


@pytest.mark.parametrize("line", [-1, 64, 100])
def test_frame_builder_rejects_out_of_range(line):
    builder = FrameBuilder("/dev/lte0")
    with pytest.raises(IndexError):
        builder.update(DisplayMessage(line, "text"))


def test_config_holds_settings():
    config = Config(device_port="/dev/lte0", device_model="HUAWEI_E3372", eco_mode="normal")
    assert config.device_port == "/dev/lte0"
    assert config.device_model == "HUAWEI_E3372"
    assert config.device_known_list == ""