"""MongoDB settings store for the hCaptcha plugin.

Two collections mirror the host's key/value tables:

- ``config``: global settings, one document per item
  ``{item, value, description, type, category, allowempty}``
- ``subscribepage_data``: per subscribe page rows ``{id, name, data}``

Page options are written with replace semantics: saving a page rewrites all
four hCaptcha rows for it.
"""

from __future__ import annotations

from typing import Any

from pymongo import ASCENDING, ReplaceOne
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from schemas.models.captcha import (
    INCLUDE_OPTION,
    NOT_ASUBSCRIBE_OPTION,
    SECRET_KEY_SETTING,
    SITE_KEY_SETTING,
    SIZE_OPTION,
    THEME_OPTION,
    PageOptions,
    PluginCredentials,
)
from shared.logging import get_logger

log = get_logger(__name__)

CONFIG_COLLECTION = "config"
PAGE_DATA_COLLECTION = "subscribepage_data"

PAGE_OPTION_NAMES = (INCLUDE_OPTION, NOT_ASUBSCRIBE_OPTION, THEME_OPTION, SIZE_OPTION)


class SettingsRepository:
    def __init__(self, db: AsyncDatabase) -> None:
        self._config: AsyncCollection = db[CONFIG_COLLECTION]
        self._page_data: AsyncCollection = db[PAGE_DATA_COLLECTION]

    async def ensure_indexes(self) -> None:
        await self._config.create_index([("item", ASCENDING)], unique=True)
        await self._page_data.create_index(
            [("id", ASCENDING), ("name", ASCENDING)], unique=True
        )

    # ── Global settings ─────────────────────────────────────────────────────

    async def register_setting(self, item: str, **definition: Any) -> bool:
        """Create a global setting unless it already exists.

        ``definition`` holds value/description/type/... and is only written on
        insert, so an administrator's saved value is never reset.
        Returns True when the setting was created.
        """
        result = await self._config.update_one(
            {"item": item},
            {"$setOnInsert": {"item": item, **definition}},
            upsert=True,
        )
        return result.upserted_id is not None

    async def get_setting(self, item: str, default: str = "") -> str:
        doc = await self._config.find_one({"item": item})
        if doc is None or doc.get("value") is None:
            return default
        return str(doc["value"])

    async def set_setting(self, item: str, value: str) -> None:
        await self._config.update_one(
            {"item": item}, {"$set": {"value": value}}, upsert=True
        )

    async def get_credentials(self) -> PluginCredentials:
        return PluginCredentials(
            site_key=await self.get_setting(SITE_KEY_SETTING),
            secret_key=await self.get_setting(SECRET_KEY_SETTING),
        )

    # ── Subscribe page options ──────────────────────────────────────────────

    async def get_page_rows(self, page_id: int) -> dict[str, str]:
        cursor = self._page_data.find(
            {"id": page_id, "name": {"$in": list(PAGE_OPTION_NAMES)}}
        )
        docs = await cursor.to_list(None)
        return {doc["name"]: doc.get("data") or "" for doc in docs}

    async def get_page_options(self, page_id: int) -> PageOptions:
        return PageOptions.from_rows(await self.get_page_rows(page_id))

    async def replace_page_options(self, page_id: int, options: PageOptions) -> None:
        requests = [
            ReplaceOne(
                {"id": page_id, "name": name},
                {"id": page_id, "name": name, "data": data},
                upsert=True,
            )
            for name, data in options.to_rows().items()
        ]
        await self._page_data.bulk_write(requests, ordered=True)
        log.info(
            "hcaptcha_page_options_saved",
            page_id=page_id,
            include=options.include,
            theme=options.theme,
            size=options.size,
        )
