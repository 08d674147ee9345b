import asyncio
from typing import Any, Dict
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from dotenv import load_dotenv

from handler import main

load_dotenv()

app = FastAPI(
    title="Firewall DDNS Updater",
    description="Point DigitalOcean firewall rules at a dynamic IP address",
    version="1.0.0"
)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


async def build_event(request: Request) -> Dict[str, Any]:
    """Reshape a plain HTTP request into the web-action event `main` expects."""
    headers = {k.lower(): v for k, v in request.headers.items()}
    if "x-forwarded-for" not in headers and request.client:
        headers["x-forwarded-for"] = request.client.host

    event: Dict[str, Any] = dict(request.query_params)

    content_type = headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            event.update(body)
    elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        event.update({k: v for k, v in form.items() if isinstance(v, str)})

    event["http"] = {
        "headers": headers,
        "method": request.method,
        "path": request.url.path,
    }
    return event


@app.api_route("/fw", methods=["GET", "POST"], response_class=PlainTextResponse)
async def update_firewall_endpoint(request: Request):
    event = await build_event(request)

    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(None, main, event)

    return PlainTextResponse(result["body"], status_code=result["statusCode"])
