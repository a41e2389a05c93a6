import pytest
from pydantic import ValidationError

from days.core.config import Settings


def test_defaults_allow_any_origin_and_hs256():
    settings = Settings(_env_file=None)
    assert settings.cors_allow_origins == ["*"]
    assert settings.jwt_algorithm == "HS256"
    assert settings.max_body_bytes == 1024 * 1024
    assert settings.api_prefix == "/api"


def test_cors_origins_accept_comma_and_json_lists():
    comma = Settings(_env_file=None, cors_allow_origins="https://a.example/, https://b.example")
    assert comma.cors_allow_origins == ["https://a.example", "https://b.example"]

    as_json = Settings(_env_file=None, cors_allow_origins='["https://a.example", "https://a.example"]')
    assert as_json.cors_allow_origins == ["https://a.example"]


@pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
def test_non_hmac_jwt_algorithm_is_rejected(algorithm):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, jwt_algorithm=algorithm)


def test_prod_requires_real_jwt_secret():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, env="prod", jwt_secret="change-me")
    assert Settings(_env_file=None, env="prod", jwt_secret="a-long-random-secret").env == "prod"


def test_argon2_memory_must_cover_parallelism():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, argon2_memory_cost_kib=16, argon2_parallelism=4)
