from __future__ import annotations

from typing import Any, Dict, Optional
import httpx

from app.domain.entities import OutgoingEmail, SendResult
from app.domain.errors import VendorApiError
from app.domain.ports.email_port import EmailPort


def build_mail_send_payload(message: OutgoingEmail) -> Dict[str, Any]:
    """SendGrid v3 /mail/send body. text/plain must come before text/html."""
    sender: Dict[str, str] = {"email": message.sender.email}
    if message.sender.name:
        sender["name"] = message.sender.name

    content = []
    if message.text:
        content.append({"type": "text/plain", "value": message.text})
    if message.html:
        content.append({"type": "text/html", "value": message.html})

    return {
        "personalizations": [{"to": [{"email": message.to}]}],
        "from": sender,
        "subject": message.subject,
        "content": content,
        "tracking_settings": {
            "click_tracking": {"enable": message.tracking.click},
            "open_tracking": {"enable": message.tracking.open},
        },
    }


class SendGridEmailAdapter(EmailPort):
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.sendgrid.com",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        send_path: str = "/v3/mail/send",
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, message: OutgoingEmail) -> SendResult:
        url = f"{self._base_url}{self._send_path}"
        headers = {"Authorization": f"Bearer {self._api_key}"}
        payload = build_mail_send_payload(message)

        try:
            resp = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise RuntimeError(f"SendGrid HTTP error: {e}") from e

        if not (200 <= resp.status_code < 300):
            raise VendorApiError(
                f"SendGrid responded {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
                errors=_extract_errors(resp),
            )

        return SendResult(
            message_id=resp.headers.get("X-Message-Id"),
            status_code=resp.status_code,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _extract_errors(resp: httpx.Response) -> list[dict[str, Any]] | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    errors = body.get("errors")
    return errors if isinstance(errors, list) and errors else None
