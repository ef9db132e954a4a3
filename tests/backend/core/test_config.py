import pytest

from backend.core import config


def test_validate_runtime_config_rejects_default_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'Production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'change-me')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_accepts_custom_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'a-real-secret')

    config.validate_runtime_config()


def test_validate_runtime_config_allows_default_secret_in_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'development')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'change-me')

    config.validate_runtime_config()


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [
        (None, ['http://localhost:3000']),
        ('http://a.test, http://b.test', ['http://a.test', 'http://b.test']),
        (' , ', []),
    ],
)
def test_get_list_splits_comma_separated_values(raw, expected) -> None:
    assert config._get_list(raw, default=['http://localhost:3000']) == expected
