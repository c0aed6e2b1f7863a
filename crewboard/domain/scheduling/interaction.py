"""
Pointer gestures on booking blocks: drag-move, drag-resize and click-to-step.

The UI layer hit-tests and forwards an abstract pointer stream
(down / move / up / cancel). Each gesture is a small state machine whose
transition function is pure: (state, event) -> (state, effect). Only
the controller awaits anything, and only when a gesture ends in a drop.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ...config import DRAG_THRESHOLD_PX
from ...exceptions import CrewboardError, SchedulingRejected
from ...schemas import Booking
from .grid import SlotRef, booking_span
from .service import MOVE_CONFLICT, RESIZE_CONFLICT, BookingService
from .time_slots import TimeSlotModel
from .validator import fits_in_day

if TYPE_CHECKING:
    from .session import SchedulingSession

logger = logging.getLogger(__name__)

MOVE_FAILED = "Could not move booking."
RESIZE_FAILED = "Unable to update booking duration."
STEP_FAILED = "Unable to change duration."


class PointerKind(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"  # Escape key or pointercancel


@dataclass(frozen=True)
class BlockRect:
    """On-screen box of a booking block at the moment it was pressed"""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: float = 0.0
    y: float = 0.0
    slot: Optional[SlotRef] = None  # cell under the pointer, if any
    booking_id: Optional[str] = None  # block pressed (DOWN only)
    on_handle: bool = False  # DOWN landed on the resize handle
    block: Optional[BlockRect] = None


class EffectKind(str, Enum):
    NONE = "none"
    DRAG_STARTED = "drag-started"
    DRAG_TRACKED = "drag-tracked"
    CLICK = "click"
    RESIZE_STARTED = "resize-started"
    RESIZE_TRACKED = "resize-tracked"
    DROP = "drop"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Effect:
    """What the UI should do after a transition"""

    kind: EffectKind = EffectKind.NONE
    booking: Optional[Booking] = None
    candidate: Optional[Booking] = None  # set on DROP
    hover: Optional[SlotRef] = None
    proxy_x: Optional[float] = None
    proxy_y: Optional[float] = None
    proxy_height: Optional[float] = None


NO_EFFECT = Effect()


# Drag-move


class DragPhase(str, Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragState:
    phase: DragPhase = DragPhase.IDLE
    booking: Optional[Booking] = None
    start_x: float = 0.0
    start_y: float = 0.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    hover: Optional[SlotRef] = None

    @classmethod
    def pressed(cls, booking: Booking, event: PointerEvent) -> "DragState":
        """Capture the booking, the press point and the grab offset within the block"""
        block = event.block or BlockRect(event.x, event.y, 0, 0)
        return cls(
            phase=DragPhase.PRESSED,
            booking=booking,
            start_x=event.x,
            start_y=event.y,
            offset_x=event.x - block.left,
            offset_y=event.y - block.top,
        )

    @property
    def active(self) -> bool:
        return self.phase != DragPhase.IDLE


def drag_transition(
    state: DragState, event: PointerEvent, threshold: float = DRAG_THRESHOLD_PX
) -> tuple[DragState, Effect]:
    if state.phase == DragPhase.IDLE or event.kind == PointerKind.DOWN:
        return state, NO_EFFECT

    if event.kind == PointerKind.CANCEL:
        return DragState(), Effect(EffectKind.ABORTED, booking=state.booking)

    if state.phase == DragPhase.PRESSED:
        if event.kind == PointerKind.UP:
            # Released before the threshold: the caller opens the booking for editing
            return DragState(), Effect(EffectKind.CLICK, booking=state.booking)
        if abs(event.x - state.start_x) < threshold and abs(event.y - state.start_y) < threshold:
            return state, NO_EFFECT
        dragging = replace(state, phase=DragPhase.DRAGGING, hover=event.slot)
        return dragging, _track(EffectKind.DRAG_STARTED, dragging, event)

    # DRAGGING
    if event.kind == PointerKind.MOVE:
        dragging = replace(state, hover=event.slot)
        return dragging, _track(EffectKind.DRAG_TRACKED, dragging, event)

    if event.slot is None:
        return DragState(), Effect(EffectKind.ABORTED, booking=state.booking)
    candidate = state.booking.model_copy(
        update={"date": event.slot.date, "teamId": event.slot.teamId, "startTime": event.slot.startTime},
        deep=True,
    )
    return DragState(), Effect(EffectKind.DROP, booking=state.booking, candidate=candidate, hover=event.slot)


def _track(kind: EffectKind, state: DragState, event: PointerEvent) -> Effect:
    return Effect(
        kind,
        booking=state.booking,
        hover=state.hover,
        proxy_x=event.x - state.offset_x,
        proxy_y=event.y - state.offset_y,
    )


# Drag-resize


@dataclass(frozen=True)
class ResizeState:
    booking: Optional[Booking] = None
    start_index: int = 0
    original_span: int = 1
    new_span: int = 1
    slot_height: float = 0.0
    start_y: float = 0.0

    @property
    def active(self) -> bool:
        return self.booking is not None


def begin_resize(booking: Booking, event: PointerEvent, slots: TimeSlotModel) -> Optional[ResizeState]:
    """
    Enter resizing from a press on the block's handle.

    The slot height is the rendered block height over the span it shows.
    Returns None for a booking that is not on the grid.
    """
    start_index = slots.slot_index(booking.startTime)
    if start_index is None or event.block is None:
        return None
    span = min(booking_span(booking, slots), slots.slot_count() - start_index)
    slot_height = event.block.height / span
    if slot_height <= 0:
        return None
    return ResizeState(
        booking=booking,
        start_index=start_index,
        original_span=span,
        new_span=span,
        slot_height=slot_height,
        start_y=event.y,
    )


def resize_transition(
    state: ResizeState, event: PointerEvent, slots: TimeSlotModel
) -> tuple[ResizeState, Effect]:
    if not state.active or event.kind == PointerKind.DOWN:
        return state, NO_EFFECT

    if event.kind == PointerKind.CANCEL:
        return ResizeState(), Effect(EffectKind.ABORTED, booking=state.booking)

    if event.kind == PointerKind.MOVE:
        delta = math.floor((event.y - state.start_y) / state.slot_height + 0.5)
        new_span = max(1, state.original_span + delta)
        new_span = min(new_span, slots.slot_count() - state.start_index)
        resizing = replace(state, new_span=new_span)
        return resizing, Effect(
            EffectKind.RESIZE_TRACKED, booking=state.booking, proxy_height=new_span * state.slot_height
        )

    # UP
    if state.new_span == state.original_span:
        return ResizeState(), Effect(EffectKind.ABORTED, booking=state.booking)
    candidate = state.booking.model_copy(
        update={"durationHours": slots.hours_for_slots(state.new_span)}, deep=True
    )
    return ResizeState(), Effect(EffectKind.DROP, booking=state.booking, candidate=candidate)


# Controller


class CommitStatus(str, Enum):
    COMMITTED = "committed"
    REJECTED = "rejected"
    FAILED = "failed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class CommitOutcome:
    status: CommitStatus
    booking: Optional[Booking] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CommitStatus.COMMITTED


@dataclass(frozen=True)
class GestureResult:
    effect: Effect
    outcome: Optional[CommitOutcome] = None


class InteractionController:
    """
    Routes pointer events to the active gesture and commits drops.

    Gesture state is reset before a commit is awaited, so a new gesture
    can start while an earlier commit is still in flight. Bookings are
    looked up in, and validated against, the session's current snapshot.
    """

    def __init__(self, session: "SchedulingSession", service: BookingService, threshold: float = DRAG_THRESHOLD_PX):
        self.session = session
        self.service = service
        self.threshold = threshold
        self.drag = DragState()
        self.resize = ResizeState()

    @property
    def slots(self) -> TimeSlotModel:
        return self.service.slots

    @property
    def busy(self) -> bool:
        return self.drag.active or self.resize.active

    async def dispatch(self, event: PointerEvent) -> GestureResult:
        if event.kind == PointerKind.DOWN:
            return GestureResult(self._press(event))

        if self.resize.active:
            self.resize, effect = resize_transition(self.resize, event, self.slots)
            if effect.kind == EffectKind.DROP:
                outcome = await self._commit(effect.candidate, RESIZE_CONFLICT, RESIZE_FAILED)
                return GestureResult(effect, outcome)
            return GestureResult(effect)

        if self.drag.active:
            self.drag, effect = drag_transition(self.drag, event, self.threshold)
            if effect.kind == EffectKind.DROP:
                outcome = await self._commit(effect.candidate, MOVE_CONFLICT, MOVE_FAILED)
                return GestureResult(effect, outcome)
            return GestureResult(effect)

        return GestureResult(NO_EFFECT)

    def _press(self, event: PointerEvent) -> Effect:
        if self.busy:
            return NO_EFFECT
        booking = self.session.find_booking(event.booking_id)
        if booking is None:
            return NO_EFFECT

        if event.on_handle:
            state = begin_resize(booking, event, self.slots)
            if state is None:
                logger.debug(f"Resize ignored for booking {booking.id}: not on the grid")
                return NO_EFFECT
            self.resize = state
            return Effect(
                EffectKind.RESIZE_STARTED, booking=booking, proxy_height=state.original_span * state.slot_height
            )

        self.drag = DragState.pressed(booking, event)
        return NO_EFFECT

    def cancel(self) -> Effect:
        """Abandon whichever gesture is in progress"""
        if self.resize.active:
            self.resize, effect = resize_transition(self.resize, PointerEvent(PointerKind.CANCEL), self.slots)
            return effect
        if self.drag.active:
            self.drag, effect = drag_transition(self.drag, PointerEvent(PointerKind.CANCEL), self.threshold)
            return effect
        return NO_EFFECT

    async def step(self, booking_id: str, reverse: bool = False) -> CommitOutcome:
        """
        Click-to-step: lengthen by one step, or shorten with the modifier key.

        A step that would run past the end of the day is ignored without a
        message; an overlap is reported like any other rejection.
        """
        booking = self.session.find_booking(booking_id)
        if booking is None:
            return CommitOutcome(CommitStatus.FAILED, message=STEP_FAILED)
        candidate = self.service.stepped(booking, -1 if reverse else 1)
        if candidate.durationHours == booking.durationHours:
            return CommitOutcome(CommitStatus.UNCHANGED, booking=booking)
        if not fits_in_day(candidate, self.slots):
            return CommitOutcome(CommitStatus.UNCHANGED, booking=booking)
        return await self._commit(candidate, RESIZE_CONFLICT, STEP_FAILED)

    async def _commit(self, candidate: Booking, conflict_message: str, failure_message: str) -> CommitOutcome:
        try:
            saved = await self.service.commit(candidate, self.session.snapshot.bookings, conflict_message)
        except SchedulingRejected as e:
            logger.info(f"⚠️ Booking {candidate.id} change rejected: {e.message}")
            return CommitOutcome(CommitStatus.REJECTED, message=e.message)
        except CrewboardError as e:
            logger.error(f"❌ Booking {candidate.id} commit failed: {e.message}")
            return CommitOutcome(CommitStatus.FAILED, message=failure_message)
        except Exception as e:
            logger.exception(f"❌ Unexpected error committing booking {candidate.id}: {e}")
            return CommitOutcome(CommitStatus.FAILED, message=failure_message)
        return CommitOutcome(CommitStatus.COMMITTED, booking=saved)
