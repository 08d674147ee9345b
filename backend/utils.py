import re
import ipaddress
from typing import Optional, Union
from models import (
    ClassifiedError,
    FirewallId,
    FirewallName,
    FunctionEvent,
    Selector,
    UpdateRequest,
    validation_error,
)


# Canonical 8-4-4-4-12 hex UUID, optionally wrapped in braces
FIREWALL_ID_PATTERN = re.compile(
    r"[{]?[0-9a-fA-F]{8}-([0-9a-fA-F]{4}-){3}[0-9a-fA-F]{12}[}]?"
)


def is_ip_address(value: Optional[str]) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def classify_selector(selector: str) -> Selector:
    """
    Decide whether the caller's hostname names a firewall by id or by name.

    UUID-shaped strings are treated as ids, anything else as a name.
    """
    if FIREWALL_ID_PATTERN.fullmatch(selector):
        return FirewallId(selector)
    return FirewallName(selector)


def parse_update_request(event: FunctionEvent) -> Union[UpdateRequest, ClassifiedError]:
    # myip is what ddclient and most dyndns clients send
    ip = event.ip or event.myip
    hostname = event.hostname

    if not ip:
        return validation_error('The "ip" parameter is required and cannot be empty.')

    if not is_ip_address(ip):
        return validation_error('The "ip" parameter does not appear to be a valid address.')

    # hostname carries the firewall id or name
    if not hostname:
        return validation_error('The "hostname" parameter is required and cannot be empty.')

    return UpdateRequest(ip=ip, firewall=hostname)
