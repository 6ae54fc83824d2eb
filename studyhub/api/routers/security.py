"""Security API endpoints.

Routes:
- POST /security/activity - Record user activity (or a fresh login)
- GET /security/session - Inactivity state and queued notices
- POST /security/logout - Stop inactivity tracking
- POST /security/failed-auth - Record a failed sign-in attempt
- POST /security/file-upload-failure - Record a failed upload
- POST /security/validate-upload - Validate an upload against type and size limits

Dependencies: studyhub.core.security
System role: Security monitoring HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status

from studyhub.api.deps import (
    collect_notifications,
    get_current_user,
    get_notifier,
    get_security_monitor,
    get_service_cache,
    get_settings_dependency,
    require_passive_user,
    require_user,
)
from studyhub.configs import Settings
from studyhub.core.exceptions import ValidationError
from studyhub.core.notifier import NotificationCollector
from studyhub.core.security.monitor import SecurityMonitor
from studyhub.core.security.validators import validate_file_upload, validate_text_upload
from studyhub.models.security import (
    FailedAuthRequest,
    FileUploadFailureRequest,
    SessionStatusResponse,
    UploadValidationResponse,
)
from studyhub.models.user import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/security", tags=["security"])


def _session_status(user: CurrentUser, notifier: NotificationCollector) -> SessionStatusResponse:
    registry = get_service_cache().session_registry
    monitor = registry.monitor_for(user.user_id)
    return SessionStatusResponse(
        state=registry.state(user.user_id).value,
        last_activity=monitor.last_activity if monitor else None,
        notifications=collect_notifications(user, notifier),
    )


@router.post("/activity", response_model=SessionStatusResponse)
async def record_activity(
    user: CurrentUser = Depends(require_user),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SessionStatusResponse:
    """Record activity.

    Activity itself is recorded while resolving the caller; send
    ``X-Session-Start: true`` after a login to start a fresh window.
    """
    return _session_status(user, notifier)


@router.get("/session", response_model=SessionStatusResponse)
async def get_session_status(
    user: CurrentUser = Depends(require_passive_user),
    notifier: NotificationCollector = Depends(get_notifier),
) -> SessionStatusResponse:
    """Inactivity state and any queued warning or expiry notices.

    Polling this endpoint is not activity and does not reset the idle timer.
    """
    return _session_status(user, notifier)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(user: CurrentUser = Depends(require_user)) -> None:
    """Stop inactivity tracking and drop the chat transcript."""
    cache = get_service_cache()
    cache.session_registry.end(user.user_id)
    cache.conversation_store.clear(user.user_id)
    logger.info(f"{__name__}:logout - user_id={user.user_id}")


@router.post("/failed-auth", status_code=status.HTTP_202_ACCEPTED)
async def report_failed_auth(
    request: FailedAuthRequest,
    monitor: SecurityMonitor = Depends(get_security_monitor),
) -> dict:
    """Record a failed sign-in attempt."""
    await monitor.monitor_failed_auth(request.error)
    return {"status": "recorded"}


@router.post("/file-upload-failure", status_code=status.HTTP_202_ACCEPTED)
async def report_file_upload_failure(
    request: FileUploadFailureRequest,
    monitor: SecurityMonitor = Depends(get_security_monitor),
) -> dict:
    """Record a failed upload."""
    await monitor.monitor_file_upload(request.file_name, request.error)
    return {"status": "recorded"}


@router.post("/validate-upload", response_model=UploadValidationResponse)
async def validate_upload(
    file: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
    notifier: NotificationCollector = Depends(get_notifier),
    monitor: SecurityMonitor = Depends(get_security_monitor),
    settings: Settings = Depends(get_settings_dependency),
) -> UploadValidationResponse:
    """Validate an upload.

    Text files are also decoded and checked against the character limit.
    Rejections are recorded as file_upload_failure events and reported as
    notices.
    """
    file_name = file.filename or "upload"
    characters = None
    try:
        validate_file_upload(file, max_bytes=settings.security.upload_max_bytes)
        if file.content_type == "text/plain":
            raw = await file.read()
            content = validate_text_upload(
                raw.decode("utf-8", errors="replace"),
                max_chars=settings.security.text_upload_max_chars,
            )
            characters = len(content)
    except ValidationError as e:
        await monitor.monitor_file_upload(file_name, e.message)
        notifier.notify("Upload Failed", e.message, variant="destructive")
        return UploadValidationResponse(
            accepted=False,
            file_name=file_name,
            notifications=collect_notifications(user, notifier),
        )

    return UploadValidationResponse(
        accepted=True,
        file_name=file_name,
        characters=characters,
        notifications=collect_notifications(user, notifier),
    )
