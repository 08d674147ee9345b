from typing import Union
import requests
from firewall_api import FirewallService
from models import (
    ClassifiedError,
    FirewallId,
    FirewallRecord,
    RuleTarget,
    UpdateRequest,
    lookup_error,
    upstream_error,
)
from utils import classify_selector


def upstream_error_from(exc: requests.RequestException) -> ClassifiedError:
    status_code = exc.response.status_code if exc.response is not None else None
    print(f"Upstream error: {exc}")
    return upstream_error(status_code, str(exc))


def resolve_firewall(
    request: UpdateRequest,
    api: FirewallService,
    page_size: int,
) -> Union[FirewallRecord, ClassifiedError]:
    try:
        firewalls = api.list_firewalls(per_page=page_size)
    except requests.RequestException as e:
        return upstream_error_from(e)

    selector = classify_selector(request.firewall)
    if isinstance(selector, FirewallId):
        record = next((fw for fw in firewalls if fw.id == selector.value), None)
    else:
        print(f"{selector.value} does not appear to be an id. Attempting to look up by name...")
        record = next((fw for fw in firewalls if fw.name == selector.value), None)

    if record is None:
        return lookup_error(
            f"Could not find a firewall matching the requested {selector.key}. "
            "You must first manually create the firewall."
        )

    return record


def _retarget(target: Union[RuleTarget, None], ip: str) -> RuleTarget:
    if target is None:
        return RuleTarget(addresses=[ip])
    return target.model_copy(update={"addresses": [ip]})


def rewrite_rules(record: FirewallRecord, ip: str) -> FirewallRecord:
    """
    Point every inbound source and outbound destination at the single new ip.

    Only the address lists change; ports, protocols, tag/droplet targets and
    the record's own id, name, droplet_ids and tags are carried over as-is.
    """
    inbound_rules = [
        rule.model_copy(update={"sources": _retarget(rule.sources, ip)})
        for rule in record.inbound_rules
    ]
    outbound_rules = [
        rule.model_copy(update={"destinations": _retarget(rule.destinations, ip)})
        for rule in record.outbound_rules
    ]
    return FirewallRecord(
        id=record.id,
        name=record.name,
        inbound_rules=inbound_rules,
        outbound_rules=outbound_rules,
        droplet_ids=list(record.droplet_ids),
        tags=list(record.tags) if record.tags is not None else None,
    )


def update_firewall(
    request: UpdateRequest,
    api: FirewallService,
    page_size: int,
) -> Union[FirewallRecord, ClassifiedError]:
    record = resolve_firewall(request, api, page_size)
    if isinstance(record, ClassifiedError):
        return record

    print(f"Updating firewall record '{record.name}' to ip: {request.ip}")
    updated_input = rewrite_rules(record, request.ip)

    try:
        result = api.update_firewall(updated_input)
    except requests.RequestException as e:
        return upstream_error_from(e)

    print(f"Update successful ({record.name})")
    return result
