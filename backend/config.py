import os
from dataclasses import dataclass


DEFAULT_API_URL = "https://api.digitalocean.com/v2"


@dataclass
class AppConfig:
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    page_size: int = 1000


def load_config() -> AppConfig:
    api_url = os.getenv("DIGITALOCEAN_API_URL", DEFAULT_API_URL).strip().rstrip("/")
    if not api_url.startswith(("http://", "https://")):
        raise ValueError(f"Invalid DIGITALOCEAN_API_URL: {api_url}")

    try:
        request_timeout = float(os.getenv("DIGITALOCEAN_TIMEOUT", "30"))
    except ValueError:
        raise ValueError("DIGITALOCEAN_TIMEOUT must be a number of seconds")
    if request_timeout <= 0:
        raise ValueError("DIGITALOCEAN_TIMEOUT must be positive")

    try:
        page_size = int(os.getenv("FIREWALL_PAGE_SIZE", "1000"))
    except ValueError:
        raise ValueError("FIREWALL_PAGE_SIZE must be an integer")
    if page_size <= 0:
        raise ValueError("FIREWALL_PAGE_SIZE must be positive")

    return AppConfig(
        api_url=api_url,
        request_timeout=request_timeout,
        page_size=page_size,
    )
