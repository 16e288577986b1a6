"""
Contact form: visitors reach the BeAware team without an account.
"""

from fastapi import APIRouter, Request
from loguru import logger

from helpers.rate_limiter import CONTACT_RATE_LIMIT, limiter
from helpers.request_utils import get_client_ip
from models.schemas import ContactFormRequest, ContactFormResponse
from services.contact_service import ContactService

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactFormResponse)
@limiter.limit(CONTACT_RATE_LIMIT)
def submit_contact_form(
    request: Request, form: ContactFormRequest
) -> ContactFormResponse:
    """
    Forward a message to the team mailbox.

    Always answers with success once the form validates; mail delivery
    failures stay in the server logs.
    """
    category = form.category.value if form.category else "general"
    logger.info(
        f"Contact message received ({category})",
        client_ip=get_client_ip(request),
    )
    return ContactService.submit_contact_form(form)
