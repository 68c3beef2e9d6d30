from pydantic import SecretStr

from wordguard.config.models import ModerationConfig, OpenAIConfig
from wordguard.containers.providers import create_ai_provider


def test_ai_client_timeout_is_clamped_to_provider_timeout():
    config = OpenAIConfig(api_key=SecretStr("sk-test"), request_timeout=30)

    assert create_ai_provider(config, max_timeout=10).timeout == 10
    assert create_ai_provider(config).timeout == 30


def test_default_ai_timeout_fits_provider_timeout():
    provider_timeout = ModerationConfig().provider_timeout_seconds
    provider = create_ai_provider(OpenAIConfig(), max_timeout=provider_timeout)

    assert OpenAIConfig().request_timeout <= provider_timeout
    assert provider.timeout == OpenAIConfig().request_timeout
