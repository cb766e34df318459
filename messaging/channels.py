"""
messaging/channels.py
------------------------------------
Outbound message channels: email, SMS, WhatsApp document, WhatsApp text.
------------------------------------
Every sender takes a MessageEnvelope and returns a MessageResult.
Remote failures are reported in the result; delivery is never verified.
"""

import logging
from typing import Callable, Dict

import requests

import settings
from .schemas import MessageEnvelope, MessageResult

logger = logging.getLogger(__name__)


def _json_body(response: requests.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _error_message(response: requests.Response, fallback: str) -> str:
    data = _json_body(response)
    if not data:
        return response.text or fallback
    if data.get("message"):
        message = data["message"]
        return message if isinstance(message, str) else str(message)
    return fallback


# ------------------------------------------------
# Email (generic JSON API, bearer key)
# ------------------------------------------------
def send_email(envelope: MessageEnvelope) -> MessageResult:
    if not envelope.api_key:
        return MessageResult(success=False, message="Email API Key is not configured in the admin dashboard.")
    if not envelope.endpoint_url:
        return MessageResult(success=False, message="The Email API URL is not configured.")
    try:
        r = requests.post(
            envelope.endpoint_url,
            json={"to": envelope.recipient, "subject": envelope.subject or "", "html": envelope.body},
            headers={"Authorization": f"Bearer {envelope.api_key}", "Content-Type": "application/json"},
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Email API error: %s", e)
        return MessageResult(success=False, message=f"Failed to send email: {e}")

    if 200 <= r.status_code < 300:
        return MessageResult(success=True, message="Email sent successfully.")
    detail = _error_message(r, "Unknown error from email provider.")
    logger.warning("Email API rejected message: %s", detail)
    return MessageResult(success=False, message=f"Failed to send email: {detail}")


# ------------------------------------------------
# SMS (Fast2SMS quick route)
# ------------------------------------------------
def send_sms(envelope: MessageEnvelope) -> MessageResult:
    if not envelope.api_key:
        return MessageResult(success=False, message="Fast2SMS API key is not configured.")
    try:
        r = requests.post(
            envelope.endpoint_url or settings.FAST2SMS_URL,
            json={
                "route": "q",
                "message": envelope.body,
                "language": "english",
                "flash": 0,
                "numbers": envelope.recipient,
            },
            headers={"authorization": envelope.api_key, "Content-Type": "application/json"},
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Fast2SMS API error: %s", e)
        return MessageResult(success=False, message=f"Failed to send SMS: {e}")

    data = _json_body(r)
    if data.get("return") is True:
        return MessageResult(success=True, message="SMS sent successfully!")
    detail = data.get("message") or "Unknown error from Fast2SMS"
    return MessageResult(success=False, message=f"Failed to send SMS: {detail}")


# ------------------------------------------------
# WhatsApp document (Fast2SMS promotional route, text only)
# ------------------------------------------------
def send_whatsapp_document(envelope: MessageEnvelope) -> MessageResult:
    if not envelope.api_key:
        return MessageResult(success=False, message="Fast2Sms API Key is not configured in the admin dashboard.")
    params = {
        "authorization": envelope.api_key,
        "route": "p",
        "message": envelope.body,
        "numbers": envelope.recipient,
    }
    try:
        r = requests.get(
            envelope.endpoint_url or settings.FAST2SMS_URL,
            params=params,
            headers={"Accept": "application/json"},
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("Fast2Sms API error: %s", e)
        return MessageResult(success=False, message=f"Failed to send message: {e}")

    data = _json_body(r)
    if data.get("return") is True:
        return MessageResult(
            success=True,
            message="Text message sent successfully. (PDF attachment not supported by this API endpoint).",
        )
    detail = data.get("message") or "Unknown error from Fast2Sms."
    return MessageResult(success=False, message=f"Failed to send message: {detail}")


# ------------------------------------------------
# WhatsApp text (generic provider, x-api-key)
# ------------------------------------------------
def send_whatsapp_text(envelope: MessageEnvelope) -> MessageResult:
    api_url = envelope.endpoint_url or settings.WHATSAPP_DEFAULT_API_URL
    if not envelope.api_key:
        return MessageResult(success=False, message="WhatsApp API Key is not configured in the admin dashboard.")
    try:
        r = requests.post(
            api_url,
            json={"to": envelope.recipient, "type": "text", "text": {"body": envelope.body}},
            headers={
                "x-api-key": envelope.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("WhatsApp API error: %s", e)
        return MessageResult(success=False, message=f"Failed to send message: {e}")

    if r.status_code in (200, 201):
        return MessageResult(success=True, message="WhatsApp message sent successfully.")
    detail = _error_message(r, "Unknown error from WhatsApp provider.")
    return MessageResult(success=False, message=f"Failed to send message: {detail}")


CHANNELS: Dict[str, Callable[[MessageEnvelope], MessageResult]] = {
    "email": send_email,
    "sms": send_sms,
    "whatsapp_document": send_whatsapp_document,
    "whatsapp_text": send_whatsapp_text,
}


def send(channel: str, envelope: MessageEnvelope) -> MessageResult:
    sender = CHANNELS.get(channel)
    if sender is None:
        return MessageResult(success=False, message=f"Unknown messaging channel: {channel}")
    return sender(envelope)
