from __future__ import annotations

from typing import Protocol

from app.domain.entities import OutgoingEmail, SendResult


class EmailPort(Protocol):
    async def send(self, message: OutgoingEmail) -> SendResult:
        """
        Hand the message to the vendor.
        Raises VendorApiError when the vendor rejects it.
        """
