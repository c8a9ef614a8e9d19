import inspect
import logging
from typing import Any, Callable, Optional

from watcha_client.api.constants import EventTypes
from watcha_client.http.client import PrefixedRestClient, encode_uri
from watcha_client.logging.utils import ActionStatus, build_log_message

logger = logging.getLogger(__name__)


class NextcloudApis:
    """Low-level wrappers for the Nextcloud calendar APIs exposed by the Watcha server.

    Calendars are read and reordered through `/_watcha/nextcloud/...` endpoints;
    linking a calendar to a room is a `watcha.room.nextcloud_calendar` state event,
    sent with the capability of the host Matrix client:

        send_state_event(room_id, event_type, content, state_key)

    Responses are returned as sent by the server, without any validation.
    """

    def __init__(
        self,
        http_client: PrefixedRestClient,
        send_state_event: Callable,
    ):
        self._http_client = http_client
        self._send_state_event = send_state_event

    async def list_own_calendars(self) -> Any:
        """List the calendars owned by the current user.

        Returns:
            the calendars, each with an `id` and a `displayname`.
        """
        return await self._http_client.authed_request(None, "GET", "/calendars")

    async def get_calendar(self, calendar_id: str) -> Any:
        """Get the properties of a calendar from the perspective of the current user.

        Args:
            calendar_id: the Nextcloud id of the calendar
        """
        _check_identifier("calendar_id", calendar_id)
        path = encode_uri("/calendars/$calendarId", {"$calendarId": calendar_id})
        return await self._http_client.authed_request(None, "GET", path)

    async def reorder_calendar(self, calendar_id: str) -> Any:
        """Move a calendar at the top of the list of the current user.

        Args:
            calendar_id: the Nextcloud id of the calendar
        """
        _check_identifier("calendar_id", calendar_id)
        path = encode_uri("/calendars/$calendarId/top", {"$calendarId": calendar_id})
        return await self._http_client.authed_request(None, "PUT", path)

    async def link_room_calendar(
        self, room_id: str, calendar_id: Optional[str] = None
    ) -> Any:
        """Share a calendar with the members of a room.

        Without `calendar_id` the event is still sent, with a null id.

        Args:
            room_id: the room to link the calendar with
            calendar_id: the Nextcloud id of the calendar
        """
        _check_identifier("room_id", room_id)
        result = await self._send(room_id, {"id": calendar_id}, "")
        logger.info(
            build_log_message(
                status=ActionStatus.SUCCESS,
                log_vars={"room_id": room_id, "calendar_id": calendar_id},
            )
        )
        return result

    async def unlink_room_calendar(self, room_id: str, state_key: str) -> Any:
        """Stop sharing the calendar linked to a room under `state_key`.

        The state event is overwritten with an empty content.

        Args:
            room_id: the room the calendar is linked with
            state_key: the state key of the calendar event to reset
        """
        _check_identifier("room_id", room_id)
        _check_identifier("state_key", state_key)
        result = await self._send(room_id, {}, state_key)
        logger.info(
            build_log_message(
                status=ActionStatus.SUCCESS,
                log_vars={"room_id": room_id, "state_key": state_key},
            )
        )
        return result

    async def _send(self, room_id: str, content: dict, state_key: str) -> Any:
        return await _maybe_await(
            self._send_state_event(
                room_id, EventTypes.NextcloudCalendar, content, state_key
            )
        )


def _check_identifier(name: str, value: Optional[str]):
    if not value:
        raise ValueError(
            build_log_message(action=f"check `{name}`", log_vars={name: value})
        )


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
