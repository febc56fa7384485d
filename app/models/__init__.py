from .reservation import Reservation, ReservationStatus
from .block import Block

__all__ = [
    "Reservation", "ReservationStatus", "Block",
]
