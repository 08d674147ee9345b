"""
Credential extraction for the firewall update webhook.

Clients send the DigitalOcean API token the same way ddclient-style updaters
send dyndns credentials: an HTTP Basic-style header whose payload is
base64("email:token"). The scheme word itself is not checked.
"""

import re
import base64
from typing import Dict, Union

from models import ClassifiedError, Credentials, auth_error

CONTROL_CHARACTERS = re.compile(r"[\x00-\x1F\x7F]")


def decode_credential_payload(payload: str) -> str:
    """Base64-decode the header payload into text, replacing undecodable bytes."""
    # Some clients strip the trailing padding
    payload += "=" * (-len(payload) % 4)
    raw = base64.b64decode(payload, validate=True)
    return raw.decode("utf-8", errors="replace")


def parse_auth(headers: Dict[str, str]) -> Union[Credentials, ClassifiedError]:
    """
    Extract the API identity from the request headers.

    Returns a ClassifiedError (401) when the header is missing or cannot be
    decoded into an "email:token" pair free of control characters.
    """
    authorization = headers.get("authorization")
    if not authorization:
        return auth_error("API token missing.")

    _, _, payload = authorization.partition(" ")
    if not payload:
        return auth_error("Invalid API key or token.")

    try:
        decoded = decode_credential_payload(payload.strip())
    except ValueError:
        # binascii.Error for bad base64, plain ValueError for non-ASCII input
        return auth_error("Invalid API key or token.")

    email, separator, token = decoded.partition(":")
    if not separator or CONTROL_CHARACTERS.search(decoded):
        return auth_error("Invalid API key or token.")

    return Credentials(api_email=email, api_token=token)
