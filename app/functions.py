# app/functions.py
# Single-endpoint variant of the API for the public booking form:
#   uvicorn app.functions:functions_app
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from app import models  # noqa: F401
from app.core.exceptions import ReservationError, ValidationError
from app.database import Base, engine, get_db
from app.schemas.reservation import ReservationResponse
from app.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# Each field may arrive under its English or its Turkish form name
FIELD_ALIASES = {
    "date": ("date", "tarih"),
    "field": ("field", "sahaAdi"),
    "time_slot": ("timeSlot", "time_slot", "saat"),
    "customer_name": ("customerName", "customer_name", "adSoyad"),
}
OPTIONAL_ALIASES = {
    "payment_proof_url": ("paymentProofUrl", "payment_proof_url"),
    "payment_proof_name": ("paymentProofName", "payment_proof_name"),
}

functions_app = FastAPI(title="rezervasyonAPI", docs_url=None, redoc_url=None)


def _reply(status_code: int, content=None) -> Response:
    if content is None:
        return Response(status_code=status_code, headers=PREFLIGHT_HEADERS)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=CORS_HEADERS)


def pick_fields(data: dict, aliases_by_name: dict = FIELD_ALIASES) -> dict:
    values = {}
    for name, aliases in aliases_by_name.items():
        values[name] = next((data[a] for a in aliases if data.get(a)), None)
    return values


@functions_app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)


@functions_app.api_route("/rezervasyonAPI", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def rezervasyon_api(request: Request, db: Session = Depends(get_db)):
    if request.method == "OPTIONS":
        return _reply(204)

    try:
        if request.method == "POST":
            try:
                data = await request.json()
            except ValueError:
                data = None
            if not isinstance(data, dict):
                return _reply(400, {"success": False, "message": "Request body must be a JSON object."})

            values = pick_fields(data)
            missing = [name for name, value in values.items() if not value]
            if missing:
                logger.warning(f"⚠️ Missing fields: {missing}")
                return _reply(400, {"success": False, "message": f"Missing fields: {', '.join(missing)}"})

            try:
                reservation = ReservationStore(db).create(**values, **pick_fields(data, OPTIONAL_ALIASES))
            except ValidationError as e:
                return _reply(400, {"success": False, "message": e.message})

            return _reply(201, {"success": True, "id": reservation.id, "message": "Reservation created."})

        if request.method == "GET":
            reservations = ReservationStore(db).list_all()
            data = [ReservationResponse.model_validate(r).model_dump(mode="json") for r in reservations]
            return _reply(200, {"success": True, "data": data})

        return _reply(405, {"success": False, "message": "Unsupported HTTP method. Only GET and POST are allowed."})

    except ReservationError as e:
        logger.error(f"❌ API error ({e.error_type}): {e.message}")
        return _reply(500, {"success": False, "message": "A server error occurred.", "error": e.message})
    except Exception as e:
        logger.exception("❌ Unknown API error")
        return _reply(500, {"success": False, "message": "An unknown server error occurred.", "error": str(e)})
