import base64
from typing import Optional

import pytest

from firewall_api import FirewallService
from models import FirewallRecord

FIREWALL_ID = "11111111-2222-3333-4444-555555555555"

FIREWALLS = [
    {
        "id": FIREWALL_ID,
        "name": "test",
        "status": "succeeded",
        "created_at": "2024-01-15T10:30:00Z",
        "inbound_rules": [
            {
                "protocol": "tcp",
                "ports": "22",
                "sources": {"addresses": ["10.10.10.10"]},
            },
            {
                "protocol": "icmp",
                "sources": {"addresses": ["192.168.0.0/16"], "tags": ["bastion"]},
            },
        ],
        "outbound_rules": [
            {
                "protocol": "tcp",
                "ports": "0",
                "destinations": {"addresses": ["0.0.0.0/0", "::/0"]},
            },
        ],
        "droplet_ids": [289110074],
        "tags": ["firewall_tag"],
        "pending_changes": [],
    },
    {
        "id": "fe2e76df-3e15-4895-800f-2d5b3b807711",
        "name": "k8s-worker",
        "inbound_rules": [],
        "outbound_rules": [],
        "droplet_ids": [],
        "tags": [],
    },
]


def basic_auth(credentials: str, scheme: str = "bearer") -> str:
    return f"{scheme} {base64.b64encode(credentials.encode('utf-8')).decode('ascii')}"


class FakeFirewallService(FirewallService):
    """In-memory stand-in for the DigitalOcean API."""

    def __init__(self, firewalls: Optional[list[dict]] = None, update_exc: Optional[Exception] = None):
        self.firewalls = [FirewallRecord.model_validate(fw) for fw in (firewalls if firewalls is not None else FIREWALLS)]
        self.update_exc = update_exc
        self.list_calls: list[int] = []
        self.updates: list[FirewallRecord] = []

    def list_firewalls(self, per_page: int) -> list[FirewallRecord]:
        self.list_calls.append(per_page)
        return list(self.firewalls)

    def update_firewall(self, record: FirewallRecord) -> FirewallRecord:
        self.updates.append(record)
        if self.update_exc is not None:
            raise self.update_exc
        return record


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DIGITALOCEAN_API_URL", "DIGITALOCEAN_TIMEOUT", "FIREWALL_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_api() -> FakeFirewallService:
    return FakeFirewallService()


@pytest.fixture
def web_event() -> dict:
    return {
        "http": {
            "headers": {
                "x-forwarded-for": "1.1.1.1",
                "host": "faas-nyc1-2ef2e6cc.doserverless.co",
                "authorization": basic_auth("example:super_secret_key"),
            },
            "path": "/api/v1/web/fn-1-2-3-4/ddns/fw",
            "method": "GET",
        },
    }
