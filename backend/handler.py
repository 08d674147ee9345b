"""
Serverless entrypoint: point a cloud firewall's rules at a caller's new IP.

The function is wired up as a web action, so `event` carries an `http`
envelope plus the query/body parameters merged in at the top level:

{
    "http": {
        "headers": {"authorization": "Basic ...", "x-forwarded-for": "...", "host": "..."},
        "method": "GET",
        "path": "/fw"
    },
    "ip": "203.0.113.7",
    "hostname": "home-firewall"
}
"""

from typing import Any, Callable, Dict, Optional

import requests
from pydantic import ValidationError

from authorizer import parse_auth
from config import AppConfig, load_config
from firewall_api import FirewallService, build_firewall_api
from firewall_updater import update_firewall, upstream_error_from
from models import (
    ClassifiedError,
    Credentials,
    ErrorKind,
    FunctionEvent,
    FunctionResponse,
    internal_error,
)
from utils import parse_update_request

ApiFactory = Callable[[Credentials, AppConfig], FirewallService]


def log_request(event: FunctionEvent) -> None:
    # Never log the full event, the authorization header is in it
    headers = event.http.headers
    print(f"Requestor IP: {headers.get('x-forwarded-for')}")
    print(f"{event.http.method}: {headers.get('host')}{event.http.path}")


def error_response(error: ClassifiedError) -> Dict[str, Any]:
    if error.kind != ErrorKind.UPSTREAM:
        print(f"Error updating record: {error.message}")
    return error.to_response().model_dump()


def run(event: FunctionEvent, api_factory: ApiFactory) -> Optional[ClassifiedError]:
    if event.http is None:
        return internal_error("Was not called as a web request")

    log_request(event)

    credentials = parse_auth(event.http.headers)
    if isinstance(credentials, ClassifiedError):
        return credentials

    config = load_config()
    api = api_factory(credentials, config)

    request = parse_update_request(event)
    if isinstance(request, ClassifiedError):
        return request

    result = update_firewall(request, api, config.page_size)
    if isinstance(result, ClassifiedError):
        return result

    return None


def main(
    event: Optional[Dict[str, Any]],
    context: Any = None,
    api_factory: Optional[ApiFactory] = None,
) -> Dict[str, Any]:
    factory = api_factory or build_firewall_api

    try:
        parsed = FunctionEvent.model_validate(event or {})
    except ValidationError as e:
        return error_response(internal_error(f"Malformed event ({e.error_count()} invalid fields)"))

    try:
        error = run(parsed, factory)
    except requests.RequestException as e:
        error = upstream_error_from(e)
    except Exception as e:
        error = internal_error(str(e))

    if error is not None:
        return error_response(error)

    return FunctionResponse(statusCode=200, body="ok").model_dump()
