import pytest

from lteinfo.ecomode import eco_timings

_ORDER = ["off", "low", "mid", "normal", "high", "max", "extreme"]


def test_off_mode():
    assert eco_timings("off") == (0.005, 1.0)


def test_extreme_mode():
    assert eco_timings("extreme") == (0.2, 5.0)


def test_unknown_mode_uses_default():
    assert eco_timings("bogus") == (0.035, 1.0)
    assert eco_timings("") == eco_timings("bogus")


def test_modes_get_slower():
    sleeps = [eco_timings(mode)[0] for mode in _ORDER]
    refreshes = [eco_timings(mode)[1] for mode in _ORDER]
    assert sleeps == sorted(sleeps)
    assert refreshes == sorted(refreshes)
    assert len(set(sleeps)) == len(sleeps)


@pytest.mark.parametrize("mode", _ORDER)
def test_sleep_shorter_than_refresh(mode):
    sleep, refresh = eco_timings(mode)
    assert 0 < sleep < refresh