"""Contact form service.

Forwards visitor messages to the BeAware mailbox.
"""

import html

from loguru import logger

from models.config import settings
from models.schemas import ContactFormRequest, ContactFormResponse
from services.email_service import get_email_provider

CONTACT_SUCCESS_MESSAGE = (
    "Your message has been sent successfully. We'll get back to you soon!"
)


class ContactService:
    """Service for handling contact form submissions."""

    @classmethod
    def _build_email(cls, form: ContactFormRequest) -> tuple[str, str, str]:
        """Build the notification email.

        User-provided data is HTML-escaped in the HTML body.

        Returns:
            Tuple of (subject, html_body, text_body)
        """
        category = form.category.value if form.category else "general"
        email_subject = f"[{settings.PROJECT_NAME} Contact Form] {form.subject}"

        text_body = f"""Name: {form.name}
Email: {form.email}
Subject: {form.subject}
Category: {category}

Message:
{form.message}
"""

        safe_message = html.escape(form.message).replace("\n", "<br>")
        html_body = f"""<h2>New Contact Form Submission</h2>
<p><strong>Name:</strong> {html.escape(form.name)}</p>
<p><strong>Email:</strong> {html.escape(form.email)}</p>
<p><strong>Subject:</strong> {html.escape(form.subject)}</p>
<p><strong>Category:</strong> {category}</p>
<h3>Message:</h3>
<p>{safe_message}</p>
"""
        return email_subject, html_body, text_body

    @classmethod
    def submit_contact_form(cls, form: ContactFormRequest) -> ContactFormResponse:
        """Forward a contact form submission.

        Delivery is best effort: a failed send is logged with the sender and
        subject so nothing is lost, and the visitor still gets a success reply.
        """
        recipient = settings.CONTACT_RECIPIENT_EMAIL
        subject, html_body, text_body = cls._build_email(form)

        sent = get_email_provider().send(
            recipient, subject, html_body, text_body, reply_to=form.email
        )
        if sent:
            logger.info(f"Contact form forwarded to {recipient}")
        else:
            logger.error(
                f"Failed to forward contact form: from={form.email} subject={form.subject!r}"
            )

        return ContactFormResponse(success=True, message=CONTACT_SUCCESS_MESSAGE)
