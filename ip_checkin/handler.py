"""
IP Check-in request handling.

Validates a check-in request and upserts the (Name, IPv4) record into
Table Storage. Every outcome is a single HttpResponse; errors never
reach the Functions host.

Flow:
    method → content type → body → fields → config → get → upsert → 200
"""
import json
import logging
from typing import Callable

import azure.functions as func

from .config import Settings
from .exceptions import (
    ClientInputError,
    ConfigurationError,
    MethodNotAllowedError,
    StoreFault,
    StoreRejection,
)
from .models import CheckinRecord, CheckinRequest, FieldsOk, MissingField, extract_fields
from .store import UPSERT_SUCCESS_CODES, CheckinStore

logger = logging.getLogger(__name__)

INVALID_CONTENT_TYPE = "Invalid content type. Must be application/json"
INVALID_BODY = "Invalid JSON body."

StoreFactory = Callable[[Settings], CheckinStore]


# ==========================================
# Request Validation
# ==========================================

def _check_method(req: func.HttpRequest, settings: Settings) -> None:
    method = (req.method or "").upper()
    if method == "GET" and not settings.IP_CHECKIN_ALLOW_GET:
        raise MethodNotAllowedError(method)


def parse_checkin(req: func.HttpRequest) -> CheckinRequest:
    """
    Turn the request into a CheckinRequest.

    Raises:
        ClientInputError: On a non-JSON content type, an unparseable body,
            or a missing / non-string Name or IPv4 field
    """
    content_type = req.headers.get("content-type")
    if not content_type or "application/json" not in content_type:
        raise ClientInputError(INVALID_CONTENT_TYPE)

    try:
        document = json.loads(req.get_body().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        logger.warning(f"Invalid JSON: {e}")
        raise ClientInputError(INVALID_BODY) from e

    result = extract_fields(document)
    if isinstance(result, FieldsOk):
        return result.request

    problem = "is missing" if isinstance(result, MissingField) else "must be a string"
    logger.warning(f"Invalid JSON body. '{result.field}' {problem}; body must contain 'Name' and 'IPv4' strings")
    raise ClientInputError(INVALID_BODY)


# ==========================================
# Get-or-create + Upsert
# ==========================================

async def upsert_checkin(store: CheckinStore, checkin: CheckinRequest) -> CheckinRecord:
    """
    Write the check-in, reusing the stored entity when the key already exists.

    Raises:
        StoreFault: If the lookup or upsert fails
        StoreRejection: If the upsert reports neither 200 nor 204
    """
    record = await store.get(checkin.Name, checkin.IPv4)
    if record is None:
        logger.info(f"Creating check-in record for ({checkin.Name}, {checkin.IPv4})")
        record = CheckinRecord.new(checkin.Name, checkin.IPv4)

    record.apply(checkin)

    status = await store.upsert(record)
    if status not in UPSERT_SUCCESS_CODES:
        raise StoreRejection(status)

    logger.info(f"Checked in {checkin.Name} at {checkin.IPv4}")
    return record


# ==========================================
# Handler Entry Point
# ==========================================

async def handle_checkin(
    req: func.HttpRequest,
    settings: Settings,
    store_factory: StoreFactory = CheckinStore.from_settings,
) -> func.HttpResponse:
    """
    Handle one check-in request end to end.

    Args:
        req: Incoming HTTP request
        settings: Function settings, built once at startup
        store_factory: Builds the table store for this request

    Returns:
        func.HttpResponse: 200 on success, 400/405 for client or store
        rejections, 500 with an empty body for configuration, store and
        unexpected faults
    """
    logger.info("IP Check-in: Received request")

    try:
        _check_method(req, settings)
        checkin = parse_checkin(req)

        if settings.connection_string is None:
            raise ConfigurationError("AzureTableConnectionString environment variable not set")

        async with store_factory(settings) as store:
            logger.debug(f"Writing check-in to table '{store.table_name}'")
            await upsert_checkin(store, checkin)

    except ClientInputError as e:
        logger.warning(f"Rejected check-in: {e.message}")
        return func.HttpResponse(e.message, status_code=e.status_code)

    except ConfigurationError as e:
        logger.error(e.message)
        return func.HttpResponse(status_code=500)

    except StoreRejection as e:
        logger.error(f"{e.message} (status={e.upsert_status})")
        return func.HttpResponse(e.message, status_code=e.status_code)

    except StoreFault as e:
        logger.error(f"Error accessing table storage: {e.message}", exc_info=e.__cause__ or e)
        return func.HttpResponse(status_code=500)

    except Exception as e:
        logger.error(f"IP Check-in Error: {e}", exc_info=e)
        return func.HttpResponse(status_code=500)

    return func.HttpResponse("", status_code=200)
