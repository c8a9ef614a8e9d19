from urllib.parse import urljoin

from watcha_client.api.errors import ConfigurationError
from watcha_client.logging.utils import build_log_message

from ._base import Config, validate_config

WATCHA_CLIENT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "description": "Watcha client configuration schema",
    "type": "object",
    "properties": {
        "base_url": {"type": "string", "minLength": 1},
        "access_token": {"type": ["string", "null"]},
        "local_timeout_ms": {"type": ["integer", "null"], "minimum": 0},
        "query_params": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "use_authorization_header": {"type": "boolean"},
        "is_partner": {"type": ["boolean", "null"]},
    },
    "additionalProperties": False,
}


class WatchaClientConfig(Config):

    section = "watcha_client"

    def __init__(self):
        self.base_url = None
        self.access_token = None
        self.local_timeout_ms = None
        self.query_params = {}
        self.use_authorization_header = False
        self.is_partner = None

    def read_config(self, config, **kwargs):
        watcha_client_config = config.get(self.section)
        if watcha_client_config is None:
            watcha_client_config = {}

        validate_config(WATCHA_CLIENT_SCHEMA, watcha_client_config, (self.section,))

        base_url = watcha_client_config.get("base_url")
        if base_url is None:
            client_base_url = (config.get("email") or {}).get("client_base_url")
            if client_base_url is None:
                raise ConfigurationError(
                    build_log_message(
                        action="get `client_base_url` from config",
                        log_vars={"client_base_url": client_base_url},
                    )
                )
            base_url = urljoin(client_base_url, "/")
        self.base_url = base_url.rstrip("/")

        self.access_token = watcha_client_config.get("access_token")
        self.local_timeout_ms = watcha_client_config.get("local_timeout_ms")
        self.query_params = dict(watcha_client_config.get("query_params", {}))

        use_authorization_header = watcha_client_config.get("use_authorization_header")
        if isinstance(use_authorization_header, bool):
            self.use_authorization_header = use_authorization_header

        self.is_partner = watcha_client_config.get("is_partner")

    def generate_config_section(self, **kwargs):
        return """\
        # Configuration for the Watcha client APIs
        #
        watcha_client:
          # The base URL of the homeserver client-server API.
          # Optional, defaults to the origin of email.client_base_url.
          #
          #base_url: "https://example.com"

          # The access token of the user.
          #
          #access_token: <access_token>

          # The maximum time to wait for a response, in milliseconds.
          # Optional, no timeout if not set.
          #
          #local_timeout_ms: 30000

          # Extra query parameters appended to all requests.
          # Optional, useful for application services which require ?user_id=
          #
          #query_params:
          #  user_id: "@bot:example.com"

          # Whether to send the access token in an Authorization header
          # instead of a query parameter.
          # Optional, defaults to false.
          #
          #use_authorization_header: true

          # Whether the user is a partner account.
          # Optional, unset by default.
          #
          #is_partner: false
        """
