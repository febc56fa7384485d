from fastapi import APIRouter

from app.core import catalog
from app.schemas.catalog import CatalogResponse

router = APIRouter()

@router.get("/", response_model=CatalogResponse)
def get_catalog():
    """Fields, slots and the account payments are sent to"""
    return {
        "fields": catalog.FIELDS,
        "time_slots": [{"id": s, "label": catalog.slot_label(s)} for s in catalog.TIME_SLOTS],
        "field_owner": catalog.FIELD_OWNER,
    }
