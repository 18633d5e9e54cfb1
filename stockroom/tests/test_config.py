import stockroom.config as config_module
from stockroom.config import AppConfig, get_config, set_config_for_test


def test_defaults():
    config = AppConfig(_env_file=None)
    assert config.page_size == 5
    assert config.page_radius == 2
    assert config.recent_products_limit == 5
    assert config.identity_headers == ["X-Forwarded-Email", "X-Forwarded-User"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PAGE_SIZE", "20")
    monkeypatch.setenv("DEFAULT_USER_ID", "dev@example.com")
    config = AppConfig(_env_file=None)
    assert config.page_size == 20
    assert config.default_user_id == "dev@example.com"


def test_singleton(monkeypatch):
    monkeypatch.setattr(config_module, "_config", None)
    assert get_config() is get_config()


def test_override_for_test():
    set_config_for_test(page_size=9)
    assert get_config().page_size == 9
