# Copyright 2021 Watcha
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Contains exceptions and error codes."""

import json
from typing import Any, Optional


class WatchaClientError(Exception):
    """Base class for all the errors raised by this package."""


class ConfigurationError(WatchaClientError):
    """The client was constructed with missing or invalid options.

    Raised synchronously, when the client is built.
    """


class RemoteApiError(WatchaClientError):
    """The remote server answered with a non-success status.

    Attributes:
        code: the HTTP status code
        msg: a human readable description of the error
        body: the response body, as returned by the dispatcher
        errcode: the Matrix error code found in the body, if any
        error: the Matrix error message found in the body, if any
    """

    def __init__(self, code: int, msg: str, body: Any = None):
        super().__init__("%d: %s" % (code, msg))
        self.code = code
        self.msg = msg
        self.body = body

        content = _as_json_dict(body)
        self.errcode = content.get("errcode")
        self.error = content.get("error")


class TransportError(WatchaClientError):
    """The request could not be dispatched (network, DNS, timeout...)."""

    def __init__(self, msg: str, cause: Optional[BaseException] = None):
        super().__init__(msg)
        self.msg = msg
        self.cause = cause


def _as_json_dict(body: Any) -> dict:
    if isinstance(body, dict):
        return body

    if isinstance(body, (bytes, str)):
        try:
            content = json.loads(body)
        except ValueError:
            return {}
        if isinstance(content, dict):
            return content

    return {}
