import dataclasses

import pytest

from lteinfo.devices import CommandSet, command_set


@pytest.mark.parametrize("model", ["HUAWEI_E3372", "SOMETHING_ELSE"])
def test_every_batch_has_nine_steps(model):
    commands = command_set(model)
    for field in dataclasses.fields(CommandSet):
        assert len(getattr(commands, field.name)) == 9


def test_huawei_batches():
    commands = command_set("HUAWEI_E3372")
    assert commands.device_clean[0] == "^CURC=0"
    assert commands.device_setup[:2] == ("^CURC=1", "^CREG=1")
    assert commands.sim[-1] == "+CSMS?"
    assert commands.slow[0] == "^HFREQINFO?"
    assert commands.update[0] == "w"


def test_huawei_real_slow_ends_with_empty_step():
    assert command_set("HUAWEI_E3372").real_slow[-1] == ""
    assert "+COPS=?" in command_set("HUAWEI_E3372").real_slow


def test_generic_model_only_identifies():
    commands = command_set("SOMETHING_ELSE")
    assert commands.device_init[-1] == "^VERSION?"
    assert set(commands.slow) == {"x"}
    assert set(commands.update) == {"x"}


def test_sms_batches_shared():
    for model in ("HUAWEI_E3372", "OTHER"):
        commands = command_set(model)
        assert commands.sms_init[0] == "+CMGF=1"
        assert commands.sms_get[0] == "+CMGR="


def test_command_set_is_frozen():
    commands = command_set("HUAWEI_E3372")
    original = commands.update
    with pytest.raises(dataclasses.FrozenInstanceError):
        commands.update = ()
    assert commands.update == original
    assert commands.update[0] == "w"