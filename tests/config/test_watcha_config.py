from watcha_client.api.errors import ConfigurationError
from watcha_client.config.watcha import WatchaClientConfig

from tests import unittest


class WatchaClientConfigTestCase(unittest.TestCase):
    def test_read_config(self):
        config = WatchaClientConfig.from_dict(
            {
                "watcha_client": {
                    "base_url": "https://example.com/",
                    "access_token": "token",
                    "local_timeout_ms": 30000,
                    "query_params": {"user_id": "@bot:example.com"},
                    "use_authorization_header": True,
                    "is_partner": False,
                }
            }
        )

        self.assertEqual(config.base_url, "https://example.com")
        self.assertEqual(config.access_token, "token")
        self.assertEqual(config.local_timeout_ms, 30000)
        self.assertEqual(config.query_params, {"user_id": "@bot:example.com"})
        self.assertTrue(config.use_authorization_header)
        self.assertFalse(config.is_partner)

    def test_default_values(self):
        config = WatchaClientConfig.from_dict(
            {"watcha_client": {"base_url": "https://example.com"}}
        )

        self.assertIsNone(config.access_token)
        self.assertIsNone(config.local_timeout_ms)
        self.assertEqual(config.query_params, {})
        self.assertFalse(config.use_authorization_header)
        self.assertIsNone(config.is_partner)

    def test_base_url_from_client_base_url(self):
        config = WatchaClientConfig.from_dict(
            {
                "watcha_client": {"access_token": "token"},
                "email": {"client_base_url": "https://example.com/app/"},
            }
        )

        self.assertEqual(config.base_url, "https://example.com")

    def test_without_base_url(self):
        with self.assertRaises(ConfigurationError):
            WatchaClientConfig.from_dict({"watcha_client": {"access_token": "token"}})

    def test_without_base_url_and_empty_email_section(self):
        with self.assertRaises(ConfigurationError):
            WatchaClientConfig.from_dict({"watcha_client": {}, "email": None})

    def test_without_section(self):
        with self.assertRaises(ConfigurationError):
            WatchaClientConfig.from_dict({})

    def test_invalid_timeout(self):
        with self.assertRaises(ConfigurationError) as cm:
            WatchaClientConfig.from_dict(
                {
                    "watcha_client": {
                        "base_url": "https://example.com",
                        "local_timeout_ms": -1,
                    }
                }
            )

        self.assertIn("watcha_client.local_timeout_ms", str(cm.exception))

    def test_invalid_query_params(self):
        with self.assertRaises(ConfigurationError):
            WatchaClientConfig.from_dict(
                {
                    "watcha_client": {
                        "base_url": "https://example.com",
                        "query_params": {"user_id": 1},
                    }
                }
            )

    def test_unknown_key(self):
        with self.assertRaises(ConfigurationError):
            WatchaClientConfig.from_dict(
                {
                    "watcha_client": {
                        "base_url": "https://example.com",
                        "useAuthorizationHeader": True,
                    }
                }
            )

    def test_generate_config_section(self):
        section = WatchaClientConfig().generate_config_section()

        self.assertIn("watcha_client:", section)
        self.assertIn("#use_authorization_header: true", section)
