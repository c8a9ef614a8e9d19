from enum import Enum
from inspect import stack
from typing import Any, Dict


LOG_PREFIX = "[watcha]"

# values of these keys are never rendered in log messages
SENSITIVE_KEYS = frozenset(("access_token", "authorization", "password"))
REDACTED = "<redacted>"


class ActionStatus(Enum):
    """Enum to define the status of a logged action"""

    FAILED = "failed"
    SUCCESS = "success"


def redact(log_vars: Any) -> Any:
    """Return a copy of `log_vars` where the values of sensitive keys are masked.

    Nested dicts, lists and tuples are walked; other values are returned as is.
    """
    if isinstance(log_vars, dict):
        return {
            key: REDACTED
            if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
            else redact(value)
            for key, value in log_vars.items()
        }
    if isinstance(log_vars, (list, tuple)):
        return type(log_vars)(redact(value) for value in log_vars)
    return log_vars


def build_log_message(
    action: str = None,
    status: ActionStatus = ActionStatus.FAILED,
    log_vars: Dict = None,
) -> str:
    """Build log message to correspond with Watcha format : "[prefix] <action to log> - <status of action> - <collection of variables to logs>"

    Args:
        action: action to log, if it not specified, correspond to caller function name
        status: status of the logged action
        log_vars: collection of variables to log, sensitive values are redacted
    """
    if action is None:
        action = _get_action_from_caller_function()

    message = f"{LOG_PREFIX} {action} - {status.value}"
    return message if log_vars is None else f"{message} {redact(log_vars)}"


def _get_action_from_caller_function() -> str:
    """Get human readable action name from the function calling build_log_message"""
    FUNCTION_NAME_INDEX = 3
    CALLER_FUNCTION_INDEX = 2

    function_name = stack()[CALLER_FUNCTION_INDEX][FUNCTION_NAME_INDEX]
    return " ".join(function_name.split("_")).strip()
