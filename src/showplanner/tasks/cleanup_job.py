"""Scheduled job that removes past shows from every screen of the owner."""

import logging

from showplanner.errors import OwnerResolutionError
from showplanner.services.booking_api import BookingApiClient
from showplanner.services.owner_context import resolve_owner_context_from_settings

logger = logging.getLogger(__name__)


async def run_cleanup_past_shows(client: BookingApiClient | None = None) -> int:
    """Ask the booking API to delete past shows on each of the owner's screens.

    Creates its own client so it can be called from the scheduler without a
    request context.

    Returns:
        Total number of shows deleted
    """
    client = client or BookingApiClient()
    try:
        owner = await resolve_owner_context_from_settings(client)
    except OwnerResolutionError as e:
        logger.warning(f"Skipping past-show cleanup: {e}")
        return 0

    screens_res = await client.get_owner_screens(owner.owner_id)
    if not screens_res.success:
        logger.warning(f"Skipping past-show cleanup, could not load screens: {screens_res.error}")
        return 0

    total_deleted = 0
    failures = 0
    for screen in screens_res.data:
        try:
            res = await client.cleanup_past_screen_shows(screen.screen_id)
        except Exception as e:
            logger.error(f"Error cleaning up screen {screen.screen_id}: {e}", exc_info=True)
            failures += 1
            continue

        if not res.success:
            logger.warning(f"Cleanup failed for screen {screen.screen_id}: {res.error}")
            failures += 1
            continue

        deleted = 0
        if isinstance(res.data, dict):
            deleted = int(res.data.get("deletedCount") or 0)
        total_deleted += deleted
        logger.info(f"Screen {screen.screen_id}: removed {deleted} past shows")

    logger.info(
        f"Past-show cleanup complete: {len(screens_res.data)} screens, "
        f"{failures} failed, {total_deleted} shows removed"
    )
    return total_deleted
