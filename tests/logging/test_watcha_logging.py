from watcha_client.logging.utils import REDACTED, ActionStatus, build_log_message, redact

from tests import unittest

LOG_PREFIX = "[watcha]"


class LogMessageTestCase(unittest.TestCase):
    def test_build_log_message(self):
        log_message = build_log_message()
        self.assertEqual(
            log_message,
            f"{LOG_PREFIX} test build log message - {ActionStatus.FAILED.value}",
        )

    def test_build_log_message_with_action(self):
        action = "get calendar"
        log_message = build_log_message(action=action)
        self.assertEqual(
            log_message, f"{LOG_PREFIX} {action} - {ActionStatus.FAILED.value}"
        )

    def test_build_log_message_with_status(self):
        status = ActionStatus.SUCCESS
        log_message = build_log_message(status=status)
        self.assertEqual(
            log_message,
            f"{LOG_PREFIX} test build log message with status - {status.value}",
        )

    def test_build_log_message_with_log_vars(self):
        log_vars = {"room_id": "!room:test", "calendar_id": "1"}
        action = "link room calendar"
        log_message = build_log_message(action=action, log_vars=log_vars)
        self.assertEqual(
            log_message,
            f"{LOG_PREFIX} {action} - {ActionStatus.FAILED.value} {log_vars}",
        )

    def test_build_log_message_redacts_access_token(self):
        log_message = build_log_message(
            action="send request",
            log_vars={"query_params": {"access_token": "secret", "user_id": "@a:test"}},
        )
        self.assertNotIn("secret", log_message)
        self.assertIn("@a:test", log_message)


class RedactTestCase(unittest.TestCase):
    def test_redact(self):
        log_vars = {
            "headers": {"Authorization": "Bearer secret"},
            "items": [{"password": "secret"}, "value"],
            "path": "/calendars",
        }
        self.assertEqual(
            redact(log_vars),
            {
                "headers": {"Authorization": REDACTED},
                "items": [{"password": REDACTED}, "value"],
                "path": "/calendars",
            },
        )

    def test_redact_does_not_modify_input(self):
        log_vars = {"access_token": "secret"}
        redact(log_vars)
        self.assertEqual(log_vars, {"access_token": "secret"})
