from enum import Enum
from typing import Optional, Union
from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class ErrorKind(str, Enum):
    AUTH = "auth"
    VALIDATION = "validation"
    LOOKUP = "lookup"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class HttpEnvelope(BaseModel):
    headers: dict[str, str] = Field(default_factory=dict)
    method: Optional[str] = None
    path: Optional[str] = None

    @field_validator("headers", mode="before")
    @classmethod
    def lowercase_header_names(cls, value):
        if value is None:
            return {}
        return {str(k).lower(): str(v) for k, v in dict(value).items() if v is not None}


class FunctionEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    http: Optional[HttpEnvelope] = None
    ip: Optional[str] = None
    myip: Optional[str] = None
    hostname: Optional[str] = None

    @field_validator("ip", "myip", "hostname", mode="before")
    @classmethod
    def stringify_parameters(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)


class FunctionResponse(BaseModel):
    statusCode: int
    body: str


class Credentials(BaseModel):
    api_email: str
    api_token: SecretStr


class UpdateRequest(BaseModel):
    ip: str
    firewall: str = Field(..., description="Firewall id or name, taken from the hostname parameter")


class RuleTarget(BaseModel):
    model_config = ConfigDict(extra="allow")

    addresses: list[str] = Field(default_factory=list)


class FirewallRule(BaseModel):
    model_config = ConfigDict(extra="allow")

    protocol: str
    ports: Optional[str] = None
    sources: Optional[RuleTarget] = None
    destinations: Optional[RuleTarget] = None


class FirewallRecord(BaseModel):
    # status, created_at and pending_changes are read-only upstream
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    inbound_rules: list[FirewallRule] = Field(default_factory=list)
    outbound_rules: list[FirewallRule] = Field(default_factory=list)
    droplet_ids: list[int] = Field(default_factory=list)
    tags: Optional[list[str]] = None


class ClassifiedError(BaseModel):
    kind: ErrorKind
    status_code: int
    message: str

    def to_response(self) -> FunctionResponse:
        return FunctionResponse(statusCode=self.status_code, body=self.message)


def auth_error(message: str) -> ClassifiedError:
    return ClassifiedError(kind=ErrorKind.AUTH, status_code=401, message=message)


def validation_error(message: str) -> ClassifiedError:
    return ClassifiedError(kind=ErrorKind.VALIDATION, status_code=422, message=message)


def lookup_error(message: str) -> ClassifiedError:
    return ClassifiedError(kind=ErrorKind.LOOKUP, status_code=400, message=message)


def upstream_error(status_code: Optional[int], message: str) -> ClassifiedError:
    return ClassifiedError(kind=ErrorKind.UPSTREAM, status_code=status_code or 503, message=message)


def internal_error(message: str) -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.INTERNAL,
        status_code=500,
        message=f"Internal Server Error: {message}",
    )


@dataclass(frozen=True)
class FirewallId:
    value: str
    key: str = "id"


@dataclass(frozen=True)
class FirewallName:
    value: str
    key: str = "name"


Selector = Union[FirewallId, FirewallName]
