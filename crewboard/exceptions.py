"""Domain errors raised by the store and the booking service"""

from typing import Optional


class CrewboardError(Exception):
    """Base class for errors the board reports to the user"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CrewboardError):
    """Raised when a booking, team, person or product id does not exist"""

    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str]):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class SchedulingRejected(CrewboardError):
    """Raised when a candidate booking fails validation; nothing was written"""

    status_code = 409


class OutsideWorkingHoursError(SchedulingRejected):
    def __init__(self, message: str = "Outside working hours."):
        super().__init__(message)


class BookingConflictError(SchedulingRejected):
    def __init__(self, message: str = "This team already has a booking at that time."):
        super().__init__(message)


class StoreError(CrewboardError):
    """Raised when the backing store cannot complete a read or write"""

    status_code = 503


class IncompleteBookingError(CrewboardError):
    """Raised when a booking is written without a date, team, start time or duration"""

    status_code = 422

    def __init__(self, message: str = "A booking needs a date, team, start time and duration."):
        super().__init__(message)
