"""Pydantic models for the GitHub issues adapter."""

from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_ENDPOINT = "https://api.github.com"


class ClientConfig(BaseModel):
    """Connection settings for an IssueClient. Frozen once built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    token: str = Field(min_length=1)
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    api_endpoint: str = DEFAULT_API_ENDPOINT
    # Injected transports stay owned by the caller; see IssueClient.close().
    http_client: httpx.Client | None = None

    @field_validator("token", "owner", "repo")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("api_endpoint")
    @classmethod
    def _normalize_endpoint(cls, v: str) -> str:
        # An empty endpoint falls back to the public API host.
        v = v.strip().rstrip("/") or DEFAULT_API_ENDPOINT
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid API endpoint: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("API endpoint must be an absolute http(s) URL")
        return v


class IssuePayload(BaseModel):
    """Outbound body for creating or updating an issue.

    Unset fields and empty lists are left out of the JSON body, so a PATCH only
    touches what the caller set.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    body: str | None = None
    labels: list[str] | None = None
    assignees: list[str] | None = None
    state: Literal["open", "closed"] | None = None
    milestone: int | None = None

    def to_request_body(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude_none=True)
        return {key: value for key, value in data.items() if value != []}


class IssueResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    number: int
    html_url: str
    state: str = ""
    title: str = ""
    # GitHub returns null for issues created without a description.
    body: str | None = None
    node_id: str = ""
