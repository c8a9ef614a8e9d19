import inspect
import json
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional
from urllib.parse import quote

from twisted.internet import defer
from twisted.internet.error import ConnectError, DNSLookupError
from twisted.internet.error import TimeoutError as ConnectTimeoutError

from watcha_client.api.constants import PREFIX_NEXTCLOUD, PREFIX_WATCHA
from watcha_client.api.errors import (
    ConfigurationError,
    RemoteApiError,
    TransportError,
)
from watcha_client.logging.utils import ActionStatus, build_log_message

logger = logging.getLogger(__name__)

# Errors raised by a dispatcher which could not reach the remote server
TRANSPORT_ERRORS = (
    OSError,
    ConnectError,
    DNSLookupError,
    ConnectTimeoutError,
    defer.TimeoutError,
    defer.CancelledError,
)


class HttpResponse(NamedTuple):
    """Transport envelope returned by a dispatch function"""

    code: int
    body: Any = None
    headers: Mapping[str, Any] = MappingProxyType({})


class ClientConfig(NamedTuple):
    base_url: str
    dispatch_fn: Callable
    access_token: Optional[str] = None
    prefix: str = PREFIX_WATCHA + PREFIX_NEXTCLOUD
    local_timeout_ms: Optional[int] = None
    query_params: Mapping[str, str] = MappingProxyType({})
    use_authorization_header: bool = False
    only_data: bool = True


def encode_uri(path_template: str, variables: Dict[str, str]) -> str:
    """Replace each `$name` placeholder of `path_template` with its percent-encoded value.

    Every character outside the unreserved set is escaped, so a value can never
    add, remove or alter a path segment.
    """
    for name, value in variables.items():
        path_template = path_template.replace(name, quote(str(value), safe=""))
    return path_template


class PrefixedRestClient:
    """Send authenticated requests below a fixed URI prefix.

    The HTTP requests themselves are issued by `dispatch_fn`, supplied by the host
    client, which is called as:

        dispatch_fn(options, method, path, query_params, body, extra_opts)

    and must return (or resolve to) an `HttpResponse`-like object exposing `code`
    and `body`. It may return a plain value, a coroutine or a Deferred.
    """

    def __init__(
        self,
        base_url: str,
        dispatch_fn: Callable,
        access_token: Optional[str] = None,
        prefix: str = PREFIX_WATCHA + PREFIX_NEXTCLOUD,
        local_timeout_ms: Optional[int] = None,
        query_params: Optional[Mapping[str, str]] = None,
        use_authorization_header: bool = False,
        only_data: bool = True,
    ):
        missing = [
            key
            for key, value in (("base_url", base_url), ("dispatch_fn", dispatch_fn))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                build_log_message(
                    action="build prefixed REST client",
                    log_vars={"missing_keys": missing},
                )
            )
        if not isinstance(base_url, str) or not callable(dispatch_fn):
            raise ConfigurationError(
                build_log_message(
                    action="build prefixed REST client",
                    log_vars={"base_url": base_url, "dispatch_fn": dispatch_fn},
                )
            )

        self._config = ClientConfig(
            base_url=base_url.rstrip("/"),
            dispatch_fn=dispatch_fn,
            access_token=access_token,
            prefix=prefix,
            local_timeout_ms=local_timeout_ms,
            query_params=MappingProxyType(dict(query_params or {})),
            use_authorization_header=use_authorization_header,
            only_data=only_data,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "PrefixedRestClient":
        return cls(**config._asdict())

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def prefix(self) -> str:
        return self._config.prefix

    async def authed_request(
        self,
        body: Any,
        method: str,
        path: str,
        query_params: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Send an authenticated request to `prefix + path`.

        Args:
            body: the request body, or None
            method: the HTTP method, e.g. "GET"
            path: the path relative to the prefix, already encoded
            query_params: extra query parameters for this request only

        Returns:
            the parsed response body if the client is configured with `only_data`,
            the `HttpResponse` returned by the dispatcher otherwise.

        Raises:
            RemoteApiError: the server answered with a non-success status
            TransportError: the request could not be dispatched
        """
        config = self._config
        full_path = config.prefix + path

        params = dict(config.query_params)
        params.update(query_params or {})
        headers = {}

        if config.access_token:
            if config.use_authorization_header:
                headers["Authorization"] = "Bearer " + config.access_token
            else:
                params["access_token"] = config.access_token

        options = {"base_url": config.base_url, "prefix": config.prefix}
        extra_opts = {
            "headers": headers,
            "local_timeout_ms": config.local_timeout_ms,
            "uri": config.base_url + full_path,
        }

        log_vars = {"method": method, "path": full_path, "query_params": params}

        try:
            response = config.dispatch_fn(
                options, method, full_path, params, body, extra_opts
            )
            if inspect.isawaitable(response):
                response = await response
        except TRANSPORT_ERRORS as error:
            logger.warning(
                build_log_message(
                    action="send request", log_vars={**log_vars, "error": error}
                )
            )
            raise TransportError(
                "Failed to send %s request to %s: %r" % (method, full_path, error),
                error,
            ) from error

        result = self._handle_response(method, full_path, response)
        logger.debug(
            build_log_message(
                action="send request",
                status=ActionStatus.SUCCESS,
                log_vars={**log_vars, "code": response.code},
            )
        )
        return result

    def _handle_response(self, method: str, path: str, response: Any) -> Any:
        code = response.code
        if code < 200 or code >= 300:
            logger.warning(
                build_log_message(
                    action="send request",
                    log_vars={"method": method, "path": path, "code": code},
                )
            )
            raise RemoteApiError(code, _describe_error(response.body), response.body)

        if not self._config.only_data:
            return response

        try:
            return _parse_body(response.body)
        except ValueError as error:
            raise RemoteApiError(
                code, "Invalid JSON in response body: %s" % (error,), response.body
            ) from error


def _parse_body(body: Any) -> Any:
    if body is None:
        return {}
    if isinstance(body, (bytes, str)):
        if not body.strip():
            return {}
        return json.loads(body)
    return body


def _describe_error(body: Any) -> str:
    try:
        content = _parse_body(body)
    except ValueError:
        return "Unparseable response body"
    if isinstance(content, dict) and "error" in content:
        return str(content["error"])
    return "Request failed"
