"""HTTP adapter for the GitHub REST API v3 issues endpoints."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx
import pydantic
import structlog

from issue_tracker.adapters.github_models import ClientConfig, IssuePayload, IssueResponse

logger = structlog.get_logger(__name__)

_ACCEPT = "application/vnd.github.v3+json"


class IssueClientError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SerializationError(IssueClientError):
    """The issue payload could not be validated or encoded as JSON."""


class RequestConstructionError(IssueClientError):
    """The request could not be built (bad issue number or URL)."""


class TransportError(IssueClientError):
    """The request never got a response (connection, DNS, timeout...)."""


class UnexpectedStatusError(IssueClientError):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code=status_code)


class DecodeError(IssueClientError):
    """The response body was not JSON or did not look like an issue."""


class IssueClient:
    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._owns_http = config.http_client is None
        self._http = config.http_client if config.http_client is not None else httpx.Client()
        self._issues_url = (
            f"{config.api_endpoint}/repos/{quote(config.owner, safe='')}/{quote(config.repo, safe='')}/issues"
        )

    def __enter__(self) -> "IssueClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        # An injected client belongs to the caller and is left open.
        if self._owns_http and not self._http.is_closed:
            self._http.close()

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def create_issue(self, payload: IssuePayload | Mapping[str, Any]) -> IssueResponse:
        """Create an issue in the configured repository.

        Args:
            payload: Issue fields. A plain mapping is validated into an IssuePayload.

        Returns:
            The created issue as reported by GitHub.

        Raises:
            SerializationError: If the payload cannot be encoded.
            TransportError: If the request fails before a response arrives.
            UnexpectedStatusError: On any status other than 201.
            DecodeError: If the response body is not a valid issue.
        """
        content = self._encode(payload)
        issue = self._send("POST", self._issues_url, expected_status=201, content=content)
        logger.info("issue_created", number=issue.number, html_url=issue.html_url)
        return issue

    def get_issue(self, number: int) -> IssueResponse:
        """Fetch a single issue by its repository-scoped number.

        Raises:
            RequestConstructionError: If ``number`` is not a positive integer.
            TransportError, UnexpectedStatusError, DecodeError: As for create_issue,
                with 200 as the only accepted status.
        """
        return self._send("GET", self._issue_url(number), expected_status=200)

    def update_issue(self, number: int, payload: IssuePayload | Mapping[str, Any]) -> IssueResponse:
        """Apply a partial update to an issue.

        Only fields set on ``payload`` are sent; GitHub leaves the rest untouched.
        Errors are the same as for get_issue plus SerializationError.
        """
        url = self._issue_url(number)
        content = self._encode(payload)
        issue = self._send("PATCH", url, expected_status=200, content=content)
        logger.info("issue_updated", number=issue.number, state=issue.state)
        return issue

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _issue_url(self, number: int) -> str:
        # bool is an int subclass; True must not become issue #1.
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            raise RequestConstructionError(f"Issue number must be a positive integer, got {number!r}")
        return f"{self._issues_url}/{number}"

    @staticmethod
    def _encode(payload: IssuePayload | Mapping[str, Any]) -> str:
        try:
            if not isinstance(payload, IssuePayload):
                payload = IssuePayload.model_validate(payload)
            return json.dumps(payload.to_request_body())
        except (pydantic.ValidationError, TypeError, ValueError) as exc:
            raise SerializationError(f"Failed to encode issue payload: {exc}") from exc

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._config.token}",
            "Accept": _ACCEPT,
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(self, method: str, url: str, expected_status: int, content: str | None = None) -> IssueResponse:
        try:
            request = self._http.build_request(
                method, url, headers=self._headers(content is not None), content=content
            )
        except httpx.InvalidURL as exc:
            raise RequestConstructionError(f"Failed to build {method} request for {url}: {exc}") from exc

        logger.debug("issue_request_sent", method=method, url=url)
        try:
            resp = self._http.send(request)
        except httpx.TransportError as exc:
            raise TransportError(f"GitHub request {method} {url} failed: {exc}") from exc

        try:
            logger.debug("issue_response_received", method=method, url=url, status_code=resp.status_code)
            if resp.status_code != expected_status:
                raise UnexpectedStatusError(
                    f"GitHub API error {resp.status_code} on {method} {url}: {resp.text}",
                    status_code=resp.status_code,
                )
            return self._parse(resp)
        finally:
            resp.close()

    def _parse(self, resp: httpx.Response) -> IssueResponse:
        """Parse the response body as JSON, then validate it as an IssueResponse.

        Both invalid JSON and schema mismatches raise DecodeError, so callers
        don't need to handle json.JSONDecodeError or pydantic.ValidationError.
        """
        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(
                f"GitHub returned non-JSON body (status {resp.status_code}): {exc}",
                status_code=resp.status_code,
            ) from exc
        try:
            return IssueResponse.model_validate(data)
        except pydantic.ValidationError as exc:
            raise DecodeError(
                f"GitHub issue response schema mismatch: {exc}",
                status_code=resp.status_code,
            ) from exc
