"""Resolution of the theatre owner a scheduling session acts for."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from showplanner.config import settings
from showplanner.errors import OwnerResolutionError
from showplanner.services.booking_api import BookingApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnerContext:
    """Theatre owner identity, resolved once and passed to the coordinator."""

    owner_id: str
    source: str  # "profile", "cached_owner" or "cached_user"


def _record_id(record: Any) -> str | None:
    if not isinstance(record, dict):
        return None
    value = record.get("_id") or record.get("id")
    return str(value) if value else None


def load_cached_record(path: str | Path) -> dict[str, Any] | None:
    """
    Read a cached identity record from a JSON file.

    Returns None if the file is missing or not a JSON object.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable cached record {path}: {e}")
        return None
    return record if isinstance(record, dict) else None


async def resolve_owner_context(
    client: BookingApiClient,
    cached_owner: dict[str, Any] | None = None,
    cached_user: dict[str, Any] | None = None,
) -> OwnerContext:
    """
    Resolve the owner id through an explicit fallback chain.

    Order:
    1. Authenticated profile from the booking API
    2. Cached theatre owner record
    3. Cached user record

    Raises:
        OwnerResolutionError: if no step yields an id
    """
    profile = await client.get_theatre_owner_profile()
    owner_id = _record_id(profile.data) if profile.success else None
    if owner_id:
        return OwnerContext(owner_id=owner_id, source="profile")
    logger.info(f"Owner profile unavailable ({profile.error or 'no id'}), trying cached records")

    owner_id = _record_id(cached_owner)
    if owner_id:
        return OwnerContext(owner_id=owner_id, source="cached_owner")

    owner_id = _record_id(cached_user)
    if owner_id:
        return OwnerContext(owner_id=owner_id, source="cached_user")

    raise OwnerResolutionError("Could not determine the theatre owner for this session")


async def resolve_owner_context_from_settings(client: BookingApiClient) -> OwnerContext:
    """Resolve using the cached records configured in settings."""
    return await resolve_owner_context(
        client,
        cached_owner=load_cached_record(settings.owner_cache_path),
        cached_user=load_cached_record(settings.user_cache_path),
    )
