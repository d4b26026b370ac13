import pytest

from drasov_notice_scraper.config import DEFAULT_NOTICE_BOARD_URL, get_settings


def test_get_settings_defaults():
    settings = get_settings()

    assert settings.days == 30
    assert settings.notice_board_url == DEFAULT_NOTICE_BOARD_URL
    assert settings.notice_board_url == "https://www.drasov.cz/uredni-deska"
    assert "www.drasov.cz" in settings.allowed_domains
    assert "drasov.cz" in settings.allowed_domains


def test_get_settings_accepts_numeric_strings():
    assert get_settings("7").days == 7


@pytest.mark.parametrize("days", [-1, "abc", None, 7.9, True])
def test_get_settings_rejects_invalid_days(days):
    with pytest.raises(ValueError):
        get_settings(days)
