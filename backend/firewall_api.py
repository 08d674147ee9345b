from __future__ import annotations

import abc
from typing import Any, Optional

import requests

from config import AppConfig
from models import Credentials, FirewallRecord


class FirewallService(abc.ABC):
    @abc.abstractmethod
    def list_firewalls(self, per_page: int) -> list[FirewallRecord]:
        pass

    @abc.abstractmethod
    def update_firewall(self, record: FirewallRecord) -> FirewallRecord:
        pass


class DigitalOceanFirewallAPI(FirewallService):
    """Thin client over the DigitalOcean Cloud Firewalls endpoints."""

    def __init__(self, api_token: str, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        resp = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if not resp.ok:
            raise requests.HTTPError(extract_error_message(resp), response=resp)
        if not resp.content:
            return {}
        return resp.json()

    def list_firewalls(self, per_page: int) -> list[FirewallRecord]:
        # Only the first page is fetched; larger accounts need pagination support
        data = self._request("GET", "/firewalls", params={"per_page": per_page})
        firewalls = [FirewallRecord.model_validate(fw) for fw in data.get("firewalls") or []]

        total = (data.get("meta") or {}).get("total")
        if isinstance(total, int) and total > len(firewalls):
            print(f"Warning: only {len(firewalls)} of {total} firewalls were searched (first page only)")

        return firewalls

    def update_firewall(self, record: FirewallRecord) -> FirewallRecord:
        payload = record.model_dump(exclude={"id"}, exclude_none=True)
        data = self._request("PUT", f"/firewalls/{record.id}", json=payload)
        updated = data.get("firewall")
        if updated is None:
            return record
        return FirewallRecord.model_validate(updated)


def extract_error_message(resp: requests.Response) -> str:
    message: Optional[str] = None
    try:
        body = resp.json()
        if isinstance(body, dict):
            message = body.get("message")
    except ValueError:
        pass
    return message or f"Request failed with status code {resp.status_code}"


def build_firewall_api(credentials: Credentials, config: AppConfig) -> FirewallService:
    return DigitalOceanFirewallAPI(
        api_token=credentials.api_token.get_secret_value(),
        base_url=config.api_url,
        timeout=config.request_timeout,
    )
