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

"""Contains constants from the Watcha APIs."""

# URI path for the Watcha API
PREFIX_WATCHA = "/_watcha"

# URI path for the Nextcloud API, relative to PREFIX_WATCHA
PREFIX_NEXTCLOUD = "/nextcloud"


class EventTypes:
    NextcloudCalendar = "watcha.room.nextcloud_calendar"

