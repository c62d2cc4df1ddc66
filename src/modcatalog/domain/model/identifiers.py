"""Identifier ranges and helpers for mods, groups and authors.

Workshop items carry real Steam IDs, which are always larger than
``HIGHEST_FAKE_ID``. Everything below that is an ID the catalog hands out
itself: builtin mods, groups and local mods each own a fixed range.
"""

from __future__ import annotations

from logging import getLogger
from typing import Final

log = getLogger(__name__)

LOWEST_BUILTIN_MOD_ID: Final[int] = 1
HIGHEST_BUILTIN_MOD_ID: Final[int] = 999
LOWEST_GROUP_ID: Final[int] = 1001
HIGHEST_GROUP_ID: Final[int] = 9999
LOWEST_LOCAL_MOD_ID: Final[int] = 10001
HIGHEST_LOCAL_MOD_ID: Final[int] = 99999
HIGHEST_FAKE_ID: Final[int] = 999999

BUILTIN_MODS: Final[dict[str, int]] = {
    "Hard Mode": 1,
    "Unlimited Money": 2,
    "Unlimited Oil And Ore": 3,
    "Unlimited Soil": 4,
    "Unlock All": 5,
}

WORKSHOP_MOD_URL: Final[str] = "https://steamcommunity.com/sharedfiles/filedetails/?id={steam_id}"
WORKSHOP_PROFILE_URL: Final[str] = "https://steamcommunity.com/profiles/{steam_id}/myworkshopfiles/"
WORKSHOP_CUSTOM_URL: Final[str] = "https://steamcommunity.com/id/{custom_url}/myworkshopfiles/"


def is_builtin_id(steam_id: int) -> bool:
    return LOWEST_BUILTIN_MOD_ID <= steam_id <= HIGHEST_BUILTIN_MOD_ID


def is_group_id(steam_id: int) -> bool:
    return LOWEST_GROUP_ID <= steam_id <= HIGHEST_GROUP_ID


def is_local_id(steam_id: int) -> bool:
    return LOWEST_LOCAL_MOD_ID <= steam_id <= HIGHEST_LOCAL_MOD_ID


def is_workshop_id(steam_id: int) -> bool:
    return steam_id > HIGHEST_FAKE_ID


def workshop_url(steam_id: int) -> str:
    if not is_workshop_id(steam_id):
        return ""
    return WORKSHOP_MOD_URL.format(steam_id=steam_id)


def author_workshop_url(steam_id: int, custom_url: str) -> str:
    if steam_id:
        return WORKSHOP_PROFILE_URL.format(steam_id=steam_id)
    if custom_url:
        return WORKSHOP_CUSTOM_URL.format(custom_url=custom_url)
    return ""


def coerce_id(value: object, *, operation: str) -> int | None:
    """Parse a discovered identifier, logging and returning ``None`` when malformed.

    Collectors hand over whatever they scraped or read; a bad value must only
    drop that single fact, never the run.
    """

    if isinstance(value, bool):
        log.warning("%s: skipping fact with non-numeric identifier %r", operation, value)
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isdecimal():
        parsed = int(value.strip())
    else:
        log.warning("%s: skipping fact with unparseable identifier %r", operation, value)
        return None
    if parsed <= 0:
        log.warning("%s: skipping fact with non-positive identifier %r", operation, value)
        return None
    return parsed
