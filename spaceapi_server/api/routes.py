from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response

from ..domain.errors import SensorError
from ..services.assembler import StatusAssembler
from ..services.updater import SensorUpdater
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
RESPONSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Access-Control-Allow-Origin": "*",
}

STORE_FAILURE_REASON = "Updating values in datastore failed"


# --- Dependency getters ---
# Placeholders, the builder points them at the real objects via app.dependency_overrides.
def get_assembler() -> StatusAssembler:  # overridden in server
    raise RuntimeError("Assembler dependency not configured")

def get_updater() -> SensorUpdater:  # overridden in server
    raise RuntimeError("Updater dependency not configured")


def _log_request(request: Request) -> None:
    client = request.client.host if request.client else "unknown"
    logger.info("%s %s from %s", request.method, request.url.path, client)


def _error_response(status_code: int, reason: str) -> Response:
    body = ErrorResponse(reason=reason).model_dump_json()
    return Response(
        content=body,
        status_code=status_code,
        media_type=JSON_CONTENT_TYPE,
        headers=RESPONSE_HEADERS,
    )


@router.get("/")
async def read_status(request: Request, assembler: StatusAssembler = Depends(get_assembler)):
    _log_request(request)
    body = await assembler.render()
    return Response(content=body, media_type=JSON_CONTENT_TYPE, headers=RESPONSE_HEADERS)


@router.put("/sensors/{sensor}/", status_code=204)
async def update_sensor(
    sensor: str,
    request: Request,
    updater: SensorUpdater = Depends(get_updater),
):
    _log_request(request)
    form = await request.form()
    values = [v for v in form.getlist("value") if isinstance(v, str)]

    try:
        await updater.update(sensor, values)
    except SensorError as e:
        if not e.is_client_fault:
            return _error_response(500, STORE_FAILURE_REASON)
        logger.warning("Rejected update for sensor \"%s\": %s", sensor, e.reason)
        return _error_response(400, e.reason)

    return Response(status_code=204, media_type=JSON_CONTENT_TYPE, headers=RESPONSE_HEADERS)
