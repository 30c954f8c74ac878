import pytest

from soullink_app.services.level_caps import BADGES, level_cap, over_cap


def test_caps_by_progress():
    assert level_cap(0) == 14
    assert level_cap(len(BADGES) - 1) == 43
    assert level_cap(8) == 50
    assert level_cap(9) == 54


@pytest.mark.parametrize("badges", [-1, 10])
def test_progress_out_of_range(badges):
    with pytest.raises(ValueError):
        level_cap(badges)


def test_over_cap(make_mon):
    ok = make_mon(species="Tepig", level=14)
    over = make_mon(species="Pignite", level=17)
    assert over_cap([ok, over], 0) == [over]
    assert over_cap([ok, over], 1) == []
