import pytest

from voicebot.config.constants import DEFAULT_OPENAI_API_VERSION
from voicebot.config.settings import REQUIRED_VARIABLES, ConfigurationError, load_settings

FULL_ENV = {
    "AZURE_COG_SERVICES_KEY": "cog-key",
    "AZURE_COG_SERVICES_ENDPOINT": "https://cog.example.com/",
    "ACS_CONNECTION_STRING": "endpoint=https://acs.example.com/;accesskey=abc",
    "ACS_PHONE_NUMBER": "+18005550100",
    "OPENAI_ENDPOINT": "https://aoai.example.com/",
    "OPENAI_KEY": "aoai-key",
    "OPENAI_DEPLOYMENT_NAME": "gpt-35-turbo",
    "HOST_NAME": "https://bot.example.com/",
}


class TestLoadSettings:

    def test_loads_all_required_values(self):
        settings = load_settings(FULL_ENV)

        assert settings.cognitive_services_key == "cog-key"
        assert settings.acs_phone_number == "+18005550100"
        assert settings.openai_deployment_name == "gpt-35-turbo"
        assert settings.openai_api_version == DEFAULT_OPENAI_API_VERSION

    def test_host_name_trailing_slash_removed(self):
        settings = load_settings(FULL_ENV)
        assert settings.host_name == "https://bot.example.com"

    def test_api_version_override(self):
        settings = load_settings({**FULL_ENV, "OPENAI_API_VERSION": "2024-06-01"})
        assert settings.openai_api_version == "2024-06-01"

    @pytest.mark.parametrize("variable", sorted(REQUIRED_VARIABLES))
    def test_missing_variable_fails(self, variable):
        env = dict(FULL_ENV)
        del env[variable]

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(env)

        assert exc_info.value.missing == [variable]
        assert variable in str(exc_info.value)

    def test_blank_variable_counts_as_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({**FULL_ENV, "HOST_NAME": "   "})
        assert exc_info.value.missing == ["HOST_NAME"]

    def test_reports_every_missing_variable(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings({})
        assert set(exc_info.value.missing) == set(REQUIRED_VARIABLES)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_settings_are_immutable(self):
        settings = load_settings(FULL_ENV)
        with pytest.raises(Exception):
            settings.host_name = "https://other.example.com"
