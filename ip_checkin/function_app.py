"""
IP Check-in Azure Function.

Receives device check-ins and upserts them into Azure Table Storage,
one row per (Name, IPv4) pair.

Architecture:
    Device → [HTTP POST] → IpCheckin → Table Storage (IpCheckin table)

Registered on the root FunctionApp through the Blueprint below.
"""
import azure.functions as func

from .config import settings
from .handler import handle_checkin
from .logger import configure_logging

configure_logging(settings)

# Create Blueprint for registration by main function_app.py
bp = func.Blueprint()


@bp.function_name(name="IpCheckin")
@bp.route(route="IpCheckin", methods=["GET", "POST"], auth_level=func.AuthLevel.ANONYMOUS)
async def ip_checkin(req: func.HttpRequest) -> func.HttpResponse:
    """
    Record a device check-in.

    GET stays registered for legacy callers and is refused unless
    IP_CHECKIN_ALLOW_GET is set.
    """
    return await handle_checkin(req, settings)
