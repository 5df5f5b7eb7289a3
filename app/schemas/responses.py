from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class SendEmailOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    message_id: str | None = Field(None, alias="messageId")
    message: str = "Email sent successfully"


class ErrorOut(BaseModel):
    error: str
    details: Any | None = None


class HealthOut(BaseModel):
    status: Literal["OK"] = "OK"
    message: str = "Backend is running"
