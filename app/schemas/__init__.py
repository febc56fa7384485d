from .auth import *
from .availability import *
from .block import *
from .catalog import *
from .common import *
from .reservation import *

__all__ = [
    # Auth
    "Token", "TokenData",

    # Availability
    "SlotVerdict", "SlotAvailability", "DayAvailabilityResponse",

    # Block
    "BlockCreate", "BlockResponse", "BlockCheckResponse",

    # Catalog
    "FieldInfo", "TimeSlotInfo", "FieldOwner", "CatalogResponse",

    # Common
    "OperationResult", "SweepResponse",

    # Reservation
    "ReservationBase", "ReservationReject", "ReservationResponse", "ApprovalResponse",
]
