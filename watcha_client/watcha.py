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

from typing import Any, Callable, Mapping, Optional

from watcha_client.config.watcha import WatchaClientConfig
from watcha_client.http.client import PrefixedRestClient
from watcha_client.http.watcha_nextcloud_api import NextcloudApis


class WatchaApis:
    """Low-level wrappers for the Watcha APIs

    Usage:
        apis = WatchaApis(
            base_url="https://example.com",
            request=matrix_client.dispatch,
            send_state_event=matrix_client.send_state_event,
            access_token="foobar",
        )
        calendars = await apis.list_own_calendars()
        await apis.link_room_calendar("!room:example.com", calendars[0]["id"])

    Args:
        base_url: the base URL of the client-server HTTP API.
        request: the function to invoke for HTTP requests, see `PrefixedRestClient`.
        send_state_event: the function of the host client sending a state event.
        access_token: the access token of this user.
        local_timeout_ms: the maximum time to wait for a response. No timeout if
            not set.
        query_params: extra query parameters appended to all requests.
        use_authorization_header: send the access token in an Authorization header
            instead of a query parameter.
        is_partner: whether this client is configured for a partner account.
    """

    def __init__(
        self,
        base_url: str,
        request: Callable,
        send_state_event: Callable,
        access_token: Optional[str] = None,
        local_timeout_ms: Optional[int] = None,
        query_params: Optional[Mapping[str, str]] = None,
        use_authorization_header: bool = False,
        is_partner: Optional[bool] = None,
    ):
        http_client = PrefixedRestClient(
            base_url=base_url,
            dispatch_fn=request,
            access_token=access_token,
            local_timeout_ms=local_timeout_ms,
            query_params=query_params,
            use_authorization_header=use_authorization_header,
            only_data=True,
        )
        self.nextcloud = NextcloudApis(http_client, send_state_event)
        self._is_partner = is_partner

    @classmethod
    def from_config(
        cls,
        config: WatchaClientConfig,
        request: Callable,
        send_state_event: Callable,
    ) -> "WatchaApis":
        return cls(
            base_url=config.base_url,
            request=request,
            send_state_event=send_state_event,
            access_token=config.access_token,
            local_timeout_ms=config.local_timeout_ms,
            query_params=config.query_params,
            use_authorization_header=config.use_authorization_header,
            is_partner=config.is_partner,
        )

    def is_partner(self) -> Optional[bool]:
        """Return whether the client is configured for a partner account."""
        return self._is_partner

    def set_partner(self, is_partner: Optional[bool]):
        """Set whether this client is a partner account."""
        self._is_partner = is_partner

    async def list_own_calendars(self) -> Any:
        return await self.nextcloud.list_own_calendars()

    async def get_calendar(self, calendar_id: str) -> Any:
        return await self.nextcloud.get_calendar(calendar_id)

    async def reorder_calendar(self, calendar_id: str) -> Any:
        return await self.nextcloud.reorder_calendar(calendar_id)

    async def link_room_calendar(
        self, room_id: str, calendar_id: Optional[str] = None
    ) -> Any:
        return await self.nextcloud.link_room_calendar(room_id, calendar_id)

    async def unlink_room_calendar(self, room_id: str, state_key: str) -> Any:
        return await self.nextcloud.unlink_room_calendar(room_id, state_key)

    # names used by the Watcha web client
    get_own_calendars = list_own_calendars
    reorder_calendars = reorder_calendar
    set_room_calendar = link_room_calendar
    unset_room_calendar = unlink_room_calendar
