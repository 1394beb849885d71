"""Validate-then-save workflows for assigning movies to screens."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from showplanner.errors import (
    DurationUnavailableError,
    MissingSelectionError,
    PartialMoveError,
    PersistenceError,
    ShowtimeFormatError,
)
from showplanner.scheduling.booking_window import clamp_max_advance_days, validate_booking_date
from showplanner.scheduling.conflicts import ConflictDetector
from showplanner.scheduling.models import ShowPlan
from showplanner.schemas.movie import Movie
from showplanner.schemas.owner import OwnerCatalog
from showplanner.schemas.show import ScheduleRequest, ShowAssignment
from showplanner.services.booking_api import BookingApiClient
from showplanner.services.owner_context import OwnerContext
from showplanner.utils.clock import parse_and_validate_showtimes
from showplanner.utils.duration import parse_duration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleResult:
    """A saved plan and the target screen's shows as re-fetched after saving."""

    plan: ShowPlan
    shows: list[ShowAssignment]


class ScheduleCoordinator:
    """
    Orchestrates scheduling for one theatre owner.

    Every workflow re-fetches the target screen's shows immediately before
    checking conflicts, and never calls save/delete once a check has failed.
    There is no locking: two sessions editing the same screen can still race
    between the fetch and the save.

    Check order (first failure wins):
    selection -> duration -> showtime format -> internal overlap ->
    cross-show overlap -> exact duplicate -> booking window
    """

    def __init__(
        self,
        client: BookingApiClient,
        owner: OwnerContext,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        Initialize coordinator.

        Args:
            client: Booking API client
            owner: Resolved theatre owner
            today: Provider of the local date
        """
        self.client = client
        self.owner = owner
        self.today = today

    async def load_catalog(self, strict: bool = False) -> OwnerCatalog:
        """
        Fetch the owner's movies and screens concurrently.

        Args:
            strict: Raise instead of returning an empty movie list when the
                movies cannot be loaded

        Raises:
            PersistenceError: if strict and the movie fetch failed
        """
        movies_res, screens_res = await asyncio.gather(
            self.client.get_theatre_owner_movies(self.owner.owner_id),
            self.client.get_owner_screens(self.owner.owner_id),
        )
        if not movies_res.success and strict:
            raise PersistenceError(
                f"Could not load movies for owner {self.owner.owner_id}: {movies_res.error or 'unknown error'}"
            )
        if not movies_res.success:
            logger.warning(f"Could not load movies for owner {self.owner.owner_id}: {movies_res.error}")
        if not screens_res.success:
            logger.warning(f"Could not load screens for owner {self.owner.owner_id}: {screens_res.error}")

        return OwnerCatalog(
            owner_id=self.owner.owner_id,
            movies=movies_res.data if movies_res.success else [],
            screens=screens_res.data if screens_res.success else [],
        )

    async def list_shows(self, screen_id: str) -> list[ShowAssignment]:
        """
        Fetch every show on a screen.

        Raises:
            PersistenceError: if the booking API cannot be reached
        """
        response = await self.client.get_screen_shows(screen_id)
        if not response.success:
            raise PersistenceError(
                f"Could not load shows for screen {screen_id}: {response.error or 'unknown error'}"
            )
        return list(response.data)

    async def validate(
        self,
        request: ScheduleRequest,
        catalog: OwnerCatalog | None = None,
        exclude_show_id: str | None = None,
        fallback_movie: Movie | None = None,
    ) -> ShowPlan:
        """
        Run every check for a request without saving anything.

        Args:
            request: Movie, screen, raw showtimes and booking date
            catalog: Owner catalogue (fetched if not provided)
            exclude_show_id: Show being edited
            fallback_movie: Movie to use when the catalogue lacks the selected one

        Returns:
            The validated plan

        Raises:
            SchedulingError: the first violation found
        """
        if not request.movie_id or not request.screen_id:
            raise MissingSelectionError("Please select both a movie and a screen.")

        catalog = catalog or await self.load_catalog(strict=True)
        movie = catalog.find_movie(request.movie_id)
        if movie is None and fallback_movie is not None and fallback_movie.id == str(request.movie_id):
            movie = fallback_movie

        duration = parse_duration(movie.raw_duration) if movie else None
        if duration is None:
            raise DurationUnavailableError(
                "Movie duration not available. Please enter duration or update the movie."
            )

        tokens = parse_and_validate_showtimes(request.showtimes)
        if not tokens:
            raise ShowtimeFormatError("Enter at least one showtime, e.g. 10:00 AM, 13:45.", token="")

        plan = ShowPlan(
            movie_id=str(request.movie_id),
            screen_id=str(request.screen_id),
            tokens=tuple(tokens),
            booking_date=request.booking_date or self.today(),
            max_advance_days=clamp_max_advance_days(request.max_advance_days),
            duration_minutes=duration,
        )

        existing = await self.list_shows(plan.screen_id)
        ConflictDetector(existing, exclude_show_id).check(plan.tokens, plan.duration_minutes)

        validate_booking_date(plan.booking_date, plan.max_advance_days, movie, today=self.today())

        logger.info(
            f"Validated {len(plan.tokens)} showtimes for movie {plan.movie_id} "
            f"on screen {plan.screen_id} ({plan.booking_date})"
        )
        return plan

    async def create(self, request: ScheduleRequest, catalog: OwnerCatalog | None = None) -> ScheduleResult:
        """
        Validate a new assignment and save it.

        Raises:
            SchedulingError: on any failed check (nothing is saved)
            PersistenceError: if the booking API rejects the save
        """
        plan = await self.validate(request, catalog)
        await self._save(plan)
        return ScheduleResult(plan=plan, shows=await self._refresh(plan.screen_id))

    async def edit(
        self,
        show: ShowAssignment,
        request: ScheduleRequest,
        catalog: OwnerCatalog | None = None,
    ) -> ScheduleResult:
        """
        Validate changes to an existing show and save them.

        Movie, screen, booking date and advance window default to the show's
        current values. The show's own id is excluded from the overlap and
        duplicate checks. When the movie or screen changes the old record is
        deleted before the new one is saved; the two calls are not atomic.

        Raises:
            SchedulingError: on any failed check (nothing is saved or deleted)
            PersistenceError: if the old record cannot be deleted or the save fails
            PartialMoveError: if the old record was deleted but the save failed
        """
        original_movie_id = show.movie_id
        original_screen_id = show.screen_id or request.screen_id
        edited = request.model_copy(
            update={
                "movie_id": request.movie_id or original_movie_id,
                "screen_id": request.screen_id or original_screen_id,
                "booking_date": request.booking_date or show.booking_date,
                "max_advance_days": (
                    request.max_advance_days
                    if request.max_advance_days is not None
                    else show.max_advance_days
                ),
            }
        )

        plan = await self.validate(
            edited,
            catalog,
            exclude_show_id=show.id,
            fallback_movie=show.movie,
        )

        moved = plan.movie_id != str(original_movie_id) or plan.screen_id != str(original_screen_id)
        if moved and show.id:
            logger.info(
                f"Moving show {show.id} from screen {original_screen_id}/movie {original_movie_id} "
                f"to screen {plan.screen_id}/movie {plan.movie_id}"
            )
            deleted = await self.client.delete_screen_show(str(original_screen_id), show.id)
            if not deleted.success:
                raise PersistenceError(
                    f"Could not remove the original show: {deleted.error or 'unknown error'}"
                )

        try:
            await self._save(plan)
        except PersistenceError as e:
            if moved and show.id:
                logger.error(f"Show {show.id} was deleted but its replacement was not saved: {e}")
                raise PartialMoveError(
                    f"The original show was removed but the updated show could not be saved: {e.message}",
                    deleted_show_id=show.id,
                ) from e
            raise

        return ScheduleResult(plan=plan, shows=await self._refresh(plan.screen_id))

    async def delete(self, screen_id: str, show_id: str) -> list[ShowAssignment]:
        """Delete a show and return the screen's remaining shows."""
        response = await self.client.delete_screen_show(screen_id, show_id)
        if not response.success:
            raise PersistenceError(f"Failed to delete show: {response.error or 'unknown error'}")
        logger.info(f"Deleted show {show_id} from screen {screen_id}")
        return await self._refresh(screen_id)

    async def set_advance_booking(self, movie_id: str, enabled: bool) -> None:
        response = await self.client.update_movie_advance_booking(movie_id, enabled)
        if not response.success:
            raise PersistenceError(
                f"Failed to update advance booking: {response.error or 'unknown error'}"
            )
        logger.info(f"Advance booking {'enabled' if enabled else 'disabled'} for movie {movie_id}")

    async def _save(self, plan: ShowPlan) -> None:
        response = await self.client.save_screen_shows(
            plan.screen_id,
            plan.movie_id,
            list(plan.tokens),
            plan.booking_date,
            plan.max_advance_days,
        )
        if not response.success:
            raise PersistenceError(response.error or "Failed to save shows")
        logger.info(f"Saved {len(plan.tokens)} showtimes for movie {plan.movie_id} on screen {plan.screen_id}")

    async def _refresh(self, screen_id: str) -> list[ShowAssignment]:
        # Already saved; a failed refresh only leaves the listing empty
        try:
            return await self.list_shows(screen_id)
        except PersistenceError as e:
            logger.warning(f"Saved, but could not refresh shows for screen {screen_id}: {e}")
            return []
