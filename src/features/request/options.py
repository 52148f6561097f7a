"""Construction options accepted by a request."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedirectMode(str, Enum):
    """Redirect policy carried by a request.

    - FOLLOW: Follow redirects up to ``follow`` hops
    - ERROR: Treat a redirect response as an error
    - MANUAL: Hand redirect responses back to the caller
    """

    FOLLOW = "follow"
    ERROR = "error"
    MANUAL = "manual"


class RequestOptions(BaseModel):
    """Caller-supplied construction options.

    Every field defaults to None, meaning "not supplied". Absent options
    fall back to the input request, then to the built-in default.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", arbitrary_types_allowed=True
    )

    method: str | None = Field(default=None, description="HTTP method")
    body: Any = Field(default=None, description="Payload or Body instance")
    headers: Any = Field(default=None, description="Header container seed")
    redirect: RedirectMode | None = Field(default=None, description="Redirect mode")
    follow: Annotated[int, Field(ge=0)] | None = Field(
        default=None, description="Maximum redirect hops"
    )
    compress: bool | None = Field(
        default=None, description="Advertise gzip/deflate acceptance"
    )
    counter: Annotated[int, Field(ge=0)] | None = Field(
        default=None, description="Current redirect count"
    )
    agent: Any = Field(default=None, description="Connection agent reference")
    timeout: Annotated[int, Field(ge=0)] | None = Field(
        default=None, description="Timeout in milliseconds (0 = unlimited)"
    )
    size: Annotated[int, Field(ge=0)] | None = Field(
        default=None, description="Maximum response bytes (0 = unlimited)"
    )

    @field_validator("method")
    @classmethod
    def empty_method_is_absent(cls, v: str | None) -> str | None:
        """Treat an empty method string as not supplied."""
        return v or None
