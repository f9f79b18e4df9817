import pytest

from lteinfo.cli import default_config, main


def test_default_config_matches_device():
    config = default_config()
    assert config.device_port == "/dev/lte0"
    assert config.device_model == "HUAWEI_E3372"
    assert config.eco_mode == "normal"


def test_default_config_known_lists_are_comma_separated_fingerprints():
    config = default_config()
    for known in (config.device_known_list, config.simcard_known_list):
        entries = known.split(",")
        assert len(entries) == 3
        for entry in entries:
            assert [len(part) for part in entry.split("-")] == [4, 2, 2, 4]


def test_main_in_sms_mode_returns_without_monitoring(monkeypatch):
    monkeypatch.setenv("SMS", "")
    assert main([]) == 0


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2


def test_main_help(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "lteinfo" in capsys.readouterr().out