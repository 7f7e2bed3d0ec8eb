"""Admin API routes for home page settings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..auth.auth_dependencies import require_admin_user
from ..config import UploadLimits
from ..exceptions import InvalidLayoutError, RepositoryError, VersionConflictError
from .home_layout import parse_layout, parse_url_list
from .home_models import HomeSettingsUpdate, PendingUpload
from .home_schemas import HomeSettingsResponse, HomeSettingsSaveResponse, UploadLimitsResponse
from .home_service import HomeSettingsService

router = APIRouter(
    prefix="/api/home-settings",
    tags=["home-settings"],
    dependencies=[Depends(require_admin_user)],
)

_CHECKBOX_ON = {"on", "true", "1", "yes"}


def get_home_service(request: Request) -> HomeSettingsService:
    try:
        return request.app.state.home_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("HomeSettingsService is not configured") from exc


def get_upload_limits(request: Request) -> UploadLimits:
    try:
        return request.app.state.upload_limits  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("Upload limits are not configured") from exc


def _error(status_code: int, reason: str, details: str | None = None) -> HTTPException:
    detail: dict[str, str] = {"status": "error", "failure_reason": reason}
    if details:
        detail["details"] = details
    return HTTPException(status_code=status_code, detail=detail)


def _checkbox(value: str | None) -> bool | None:
    """``None`` when the field was not sent, so the stored flag is kept."""
    if value is None:
        return None
    return value.strip().lower() in _CHECKBOX_ON


async def _read_uploads(files: list[UploadFile] | None) -> list[PendingUpload]:
    uploads: list[PendingUpload] = []
    for upload in files or []:
        try:
            data = await upload.read()
        finally:
            await upload.close()
        uploads.append(
            PendingUpload(
                filename=upload.filename or "upload",
                data=data,
                content_type=upload.content_type,
            )
        )
    return uploads


@router.get("", response_model=HomeSettingsResponse)
def read_home_settings(
    service: HomeSettingsService = Depends(get_home_service),
) -> HomeSettingsResponse:
    return HomeSettingsResponse.from_domain(service.load())


@router.get("/limits", response_model=UploadLimitsResponse)
def read_upload_limits(
    limits: UploadLimits = Depends(get_upload_limits),
) -> UploadLimitsResponse:
    """Limits the admin form applies before attaching a file."""
    return UploadLimitsResponse(
        max_upload_bytes=limits.max_upload_bytes,
        allowed_content_types=list(limits.allowed_content_types),
    )


@router.post("", response_model=HomeSettingsSaveResponse)
async def update_home_settings(
    hero_headline: str = Form(""),
    hero_subheadline: str = Form(""),
    image_layout: str | None = Form(None),
    current_images: str | None = Form(None),
    show_products_section: str | None = Form(None),
    expected_version: int | None = Form(None),
    new_images: list[UploadFile] | None = File(None),
    admin: dict = Depends(require_admin_user),
    service: HomeSettingsService = Depends(get_home_service),
) -> HomeSettingsSaveResponse:
    try:
        layout = parse_layout(image_layout) if image_layout else None
        fallback_images = parse_url_list(current_images) if layout is None else []
    except InvalidLayoutError as exc:
        raise _error(status.HTTP_400_BAD_REQUEST, "invalid_layout", str(exc)) from exc

    update = HomeSettingsUpdate(
        hero_headline=hero_headline,
        hero_subheadline=hero_subheadline,
        show_products_section=_checkbox(show_products_section),
        layout=layout,
        current_images=fallback_images,
        new_images=await _read_uploads(new_images),
        expected_version=expected_version,
    )
    try:
        outcome = await run_in_threadpool(service.update, update, actor=admin.get("sub"))
    except VersionConflictError as exc:
        raise _error(status.HTTP_409_CONFLICT, "version_conflict", str(exc)) from exc
    except RepositoryError as exc:
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "settings_write_failed", str(exc)
        ) from exc

    return HomeSettingsSaveResponse(
        created=outcome.created,
        dropped_images=outcome.dropped_images,
        settings=HomeSettingsResponse.from_domain(outcome.settings),
    )
