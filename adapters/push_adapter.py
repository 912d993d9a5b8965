from typing import Optional, Dict, Any
import logging
import httpx

logger = logging.getLogger("messmate.push")

_client: Optional[httpx.Client] = None
_url: Optional[str] = None


def connect(url: str, access_token: Optional[str] = None, timeout: float = 5.0):
    """Create the HTTP client used to reach the Expo push service."""
    global _client, _url
    headers = {
        "Accept": "application/json",
        "Accept-Encoding": "gzip, deflate",
        "Content-Type": "application/json",
    }
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"

    _client = httpx.Client(timeout=httpx.Timeout(timeout), headers=headers)
    _url = url
    logger.info("Push client ready for %s", url)


def close():
    global _client, _url
    try:
        if _client is not None:
            _client.close()
            logger.info("Push client closed")
    except Exception:
        logger.exception("Error closing push client")
    finally:
        _client = None
        _url = None


def is_connected() -> bool:
    return _client is not None


def send_push(
    token: str, title: str, body: str, data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Send one push message, delivered immediately (no trigger delay).

    Args:
        token: Expo push token of the recipient device
        title: Alert title
        body: Alert body
        data: Payload delivered to the app alongside the alert

    Returns:
        The push ticket returned by the service

    Raises:
        RuntimeError: If the client is not connected or the service rejects the message
        httpx.HTTPError: On transport failures or non-2xx responses
    """
    if _client is None:
        raise RuntimeError(
            "Push client not initialized. Call push_adapter.connect() first."
        )

    message = {
        "to": token,
        "title": title,
        "body": body,
        "data": data or {},
        "sound": "default",
        "priority": "high",
        "channelId": "default",
    }
    response = _client.post(_url, json=message)
    response.raise_for_status()

    ticket = response.json().get("data", {})
    if isinstance(ticket, list):
        ticket = ticket[0] if ticket else {}
    if ticket.get("status") == "error":
        raise RuntimeError(f"Push rejected: {ticket.get('message', 'unknown error')}")

    logger.debug("Push ticket %s for token %s", ticket.get("id"), token)
    return ticket
