from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from app.application.send_email import send_email
from app.domain.entities import SendDefaults
from app.domain.errors import InvalidRecipient, MissingRequiredFields, VendorApiError
from app.domain.ports.email_port import EmailPort
from app.presentation.dependencies import (
    enforce_send_rate_limit,
    get_email_port,
    get_send_defaults,
    read_send_request,
)
from app.schemas.requests import SendEmailIn
from app.schemas.responses import ErrorOut, SendEmailOut

router = APIRouter(tags=["Email"])


@router.post(
    "/send-email",
    dependencies=[Depends(enforce_send_rate_limit)],
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": SendEmailIn.model_json_schema(by_alias=True)
                }
            }
        }
    },
    responses={
        200: {"model": SendEmailOut},
        400: {"model": ErrorOut},
        429: {"description": "Too many email requests"},
        500: {"model": ErrorOut},
    },
)
async def post_send_email(
    response: Response,
    body: Annotated[SendEmailIn, Depends(read_send_request)],
    email_port: Annotated[EmailPort, Depends(get_email_port)],
    defaults: Annotated[SendDefaults, Depends(get_send_defaults)],
) -> dict[str, Any]:
    try:
        result = await send_email(
            email_port=email_port,
            defaults=defaults,
            to=body.to,
            subject=body.subject,
            text=body.text,
            html=body.html,
            from_email=body.from_email,
            from_name=body.from_name,
        )
    except (MissingRequiredFields, InvalidRecipient) as exc:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ErrorOut(error=str(exc)).model_dump(exclude_none=True)
    except VendorApiError as exc:
        response.status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
        return ErrorOut(error="SendGrid API error", details=exc.details).model_dump()
    except Exception as exc:  # noqa: BLE001
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return ErrorOut(error="Server error", details=str(exc)).model_dump()

    # no X-Message-Id from the vendor -> no messageId key
    return SendEmailOut(message_id=result.message_id).model_dump(
        by_alias=True, exclude_none=True
    )
