from typing import Any, Iterable

import jsonschema

from watcha_client.api.errors import ConfigurationError


class Config:
    """A configuration section, read from the parsed root config mapping.

    Subclasses set `section` and implement `read_config` and
    `generate_config_section`.
    """

    section = None

    def read_config(self, config: dict, **kwargs):
        raise NotImplementedError()

    def generate_config_section(self, **kwargs) -> str:
        raise NotImplementedError()

    @classmethod
    def from_dict(cls, config: dict, **kwargs) -> "Config":
        instance = cls()
        instance.read_config(config, **kwargs)
        return instance


def validate_config(schema: dict, config: Any, config_path: Iterable[str]) -> None:
    """Validates a config setting against a jsonschema definition

    Args:
        schema: the jsonschema definition
        config: the configuration value to be validated
        config_path: the path within the config file of the value being validated

    Raises:
        ConfigurationError: if validation fails.
    """
    try:
        jsonschema.validate(config, schema)
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in (*config_path, *e.absolute_path))
        raise ConfigurationError(
            "Unable to parse configuration: %s at %s" % (e.message, path)
        ) from e
