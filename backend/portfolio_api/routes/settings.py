"""
Portfolio API Backend: Settings Route Handlers
==============================================

What:  Read-all and upsert endpoints for the key-value settings store.
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends

from portfolio_api.models.setting import SettingEntry
from portfolio_api.schemas.common import ErrorResponse, MessageResponse
from portfolio_api.services.settings_service import SettingsService, get_settings_service

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get(
    "",
    response_model=Dict[str, Optional[str]],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="All settings as one {key: value} mapping",
)
async def read_settings(
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Optional[str]]:
    return await service.read_all()


@router.post(
    "",
    response_model=MessageResponse,
    responses={400: {"description": "Invalid body or write failed", "model": ErrorResponse}},
    summary="Create or overwrite one setting",
)
async def write_setting(
    entry: SettingEntry,
    service: SettingsService = Depends(get_settings_service),
) -> MessageResponse:
    await service.write(entry)
    return MessageResponse(message="Settings updated")
