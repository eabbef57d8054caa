from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from pydantic import BaseModel, ValidationError

from telepark.exceptions import DuplicateMeterError, InvalidMeterStatusError, MeterNotFoundError
from telepark.schemas import (
    MeterCreateRequest,
    MeterListResponse,
    MeterMoveRequest,
    MeterResponse,
    MeterStatusRequest,
    NearestMeterRequest,
    NearestMeterResponse,
)
from telepark.services.meter_store import MeterStore, parse_status
from telepark.services.nearest import NearestMeterService
from telepark.services.types import NearestMeter

_meter_store: MeterStore | None = None
_nearest_service: NearestMeterService | None = None


def get_meter_store() -> MeterStore:
    global _meter_store
    if _meter_store is None:
        _meter_store = MeterStore()
    return _meter_store


def get_nearest_service() -> NearestMeterService:
    global _nearest_service
    if _nearest_service is None:
        _nearest_service = NearestMeterService(store=get_meter_store())
    return _nearest_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    counts = get_meter_store().counts()
    return JsonResponse(
        {
            "status": "ok",
            "meters": {"total": sum(counts.values()), **counts},
        }
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
def meters_view(request: HttpRequest) -> HttpResponse:
    store = get_meter_store()
    if request.method == "GET":
        status_param = request.GET.get("status")
        try:
            status = parse_status(status_param) if status_param else None
        except InvalidMeterStatusError as exc:
            return _error_response("invalid_status", str(exc), status=400)
        records = store.snapshot(status=status)
        response = MeterListResponse(meters=[MeterResponse.from_record(r) for r in records])
        return JsonResponse(response.model_dump(mode="json"), status=200)

    create_request = _validated(request, MeterCreateRequest)
    if isinstance(create_request, JsonResponse):
        return create_request

    try:
        record = store.add(create_request.to_record())
    except DuplicateMeterError as exc:
        return _error_response("duplicate_meter", str(exc), status=409)

    return JsonResponse(MeterResponse.from_record(record).model_dump(mode="json"), status=201)


@csrf_exempt
@require_POST
def nearest_meter_view(request: HttpRequest) -> HttpResponse:
    nearest_request = _validated(request, NearestMeterRequest)
    if isinstance(nearest_request, JsonResponse):
        return nearest_request

    result = get_nearest_service().nearest(
        nearest_request.to_point(), statuses=nearest_request.statuses
    )
    if isinstance(result, NearestMeter):
        response = NearestMeterResponse(
            found=True,
            meter=MeterResponse.from_record(result.meter),
            distance_km=result.distance_km,
        )
    else:
        response = NearestMeterResponse(found=False)

    return JsonResponse(response.model_dump(mode="json"), status=200)


@csrf_exempt
@require_POST
def meter_status_view(request: HttpRequest, meter_id: str) -> HttpResponse:
    status_request = _validated(request, MeterStatusRequest)
    if isinstance(status_request, JsonResponse):
        return status_request

    try:
        record = get_meter_store().set_status(meter_id, status_request.status)
    except MeterNotFoundError as exc:
        return _error_response("meter_not_found", str(exc), status=404)

    return JsonResponse(MeterResponse.from_record(record).model_dump(mode="json"), status=200)


@csrf_exempt
@require_POST
def meter_move_view(request: HttpRequest, meter_id: str) -> HttpResponse:
    move_request = _validated(request, MeterMoveRequest)
    if isinstance(move_request, JsonResponse):
        return move_request

    try:
        record = get_meter_store().move(meter_id, move_request.to_point())
    except MeterNotFoundError as exc:
        return _error_response("meter_not_found", str(exc), status=404)

    return JsonResponse(MeterResponse.from_record(record).model_dump(mode="json"), status=200)


def _validated(request: HttpRequest, schema: type[BaseModel]) -> Any:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_url=False, include_context=False),
                }
            },
            status=400,
        )


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
