"""HTTP client for the home settings admin API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from httpx import AsyncClient

from .home_form import FormLimits, HomeSubmission
from .home_models import HomeSettings

HOME_SETTINGS_PATH = "/api/home-settings"
UPLOAD_LIMITS_PATH = f"{HOME_SETTINGS_PATH}/limits"


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def settings_from_payload(data: dict[str, Any]) -> HomeSettings:
    return HomeSettings(
        id=data.get("id"),
        hero_headline=data.get("hero_headline", ""),
        hero_subheadline=data.get("hero_subheadline", ""),
        hero_images=list(data.get("hero_images") or []),
        show_products_section=bool(data.get("show_products_section", True)),
        version=int(data.get("version") or 0),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


@dataclass(slots=True)
class HomeSettingsClient:
    """Wrapper around :class:`httpx.AsyncClient`; pass :meth:`save` as the form's submit handler."""

    http: AsyncClient
    token: str | None = None

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def fetch(self) -> HomeSettings:
        response = await self.http.get(HOME_SETTINGS_PATH, headers=self._headers())
        response.raise_for_status()
        return settings_from_payload(response.json())

    async def fetch_limits(self) -> FormLimits:
        response = await self.http.get(UPLOAD_LIMITS_PATH, headers=self._headers())
        response.raise_for_status()
        data = response.json()
        return FormLimits(
            max_upload_bytes=int(data["max_upload_bytes"]),
            allowed_content_types=tuple(data["allowed_content_types"]),
        )

    async def save(self, submission: HomeSubmission) -> dict[str, Any]:
        files = [
            (
                "new_images",
                (upload.filename, upload.data, upload.content_type or "application/octet-stream"),
            )
            for upload in submission.files
        ]
        response = await self.http.post(
            HOME_SETTINGS_PATH,
            data=submission.form_fields(),
            files=files or None,
            headers=self._headers(),
        )
        response.raise_for_status()
        return response.json()
