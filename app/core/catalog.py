# app/core/catalog.py
# Closed sets of bookable fields and hourly slots shown by the booking wizard.

from typing import List, Optional, Tuple

WILDCARD = "all"

FIELDS = [
    {"id": "Etlik Halı Saha", "name": "Etlik Kampüsü Halı Saha", "price": "200₺/saat", "capacity": "10 vs 10"},
    {"id": "Esenboğa Halı Saha", "name": "Esenboğa Kampüsü Halı Saha", "price": "180₺/saat", "capacity": "8 vs 8"},
    {"id": "saha-3", "name": "Halı Saha 3", "price": "220₺/saat", "capacity": "11 vs 11"},
]

# Ordered; "<startHour>-<endHour>"
TIME_SLOTS = ["16-17", "17-18", "18-19", "19-20", "20-21", "21-22"]

# Static display value, payments go to a single account
FIELD_OWNER = {
    "name": "Ankara Yıldırım Beyazıt Üniversitesi",
    "surname": "SKS Birimi",
    "iban": "TR33 0006 1005 1978 6457 8413 26",
}


def field_ids() -> List[str]:
    return [f["id"] for f in FIELDS]


def field_name(field_id: str) -> str:
    if field_id == WILDCARD:
        return "Tüm Sahalar"
    for f in FIELDS:
        if f["id"] == field_id:
            return f["name"]
    return field_id


def parse_slot(time_slot: str) -> Optional[Tuple[int, int]]:
    """Returns (start_hour, end_hour) for a slot like "16-17", or None if malformed."""
    if not time_slot or "-" not in time_slot:
        return None
    start, _, end = time_slot.partition("-")
    try:
        start_hour, end_hour = int(start), int(end)
    except ValueError:
        return None
    if not (0 <= start_hour < end_hour <= 24):
        return None
    return start_hour, end_hour


def slot_label(time_slot: str) -> str:
    """ "16-17" -> "16:00 - 17:00" """
    parsed = parse_slot(time_slot)
    if parsed is None:
        return time_slot
    return f"{parsed[0]:02d}:00 - {parsed[1]:02d}:00"
