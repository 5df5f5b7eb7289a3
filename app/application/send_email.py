import logging

import app.domain.services as domain_services
from app.domain.entities import OutgoingEmail, SendDefaults, SendResult, Sender
from app.domain.errors import InvalidRecipient, MissingRequiredFields, VendorApiError
from app.domain.ports.email_port import EmailPort

logger = logging.getLogger(__name__)


async def send_email(
    email_port: EmailPort,
    defaults: SendDefaults,
    to: str | None,
    subject: str | None,
    text: str | None = None,
    html: str | None = None,
    from_email: str | None = None,
    from_name: str | None = None,
) -> SendResult:
    if not to or not subject or (not text and not html):
        raise MissingRequiredFields()
    if defaults.validate_recipient and not domain_services.is_valid_email(to):
        raise InvalidRecipient(to)

    message = OutgoingEmail(
        to=to,
        subject=subject,
        sender=Sender(
            email=from_email or defaults.sender.email,
            name=from_name or defaults.sender.name,
        ),
        text=text or None,
        html=html or text,
        tracking=defaults.tracking,
    )

    try:
        result = await email_port.send(message)
    except VendorApiError as exc:
        for line in domain_services.describe_vendor_errors(exc.errors):
            logger.error("sendgrid rejected field", extra={"to": to, "hint": line})
        logger.error(
            "sendgrid api error",
            extra={"to": to, "status_code": exc.status_code, "error": str(exc)},
        )
        raise
    except Exception:
        logger.exception("email send failed", extra={"to": to, "subject": subject})
        raise

    logger.info(
        "email sent",
        extra={"to": to, "subject": subject, "message_id": result.message_id},
    )
    return result
