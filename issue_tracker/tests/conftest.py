from collections.abc import Iterator

import pytest

from issue_tracker.adapters.github_client import IssueClient
from issue_tracker.adapters.github_models import ClientConfig
from issue_tracker.config.config import get_settings

BASE_URL = "https://api.github.test"
OWNER = "testowner"
REPO = "testrepo"
ISSUES_PATH = f"/repos/{OWNER}/{REPO}/issues"


def issue_json(number: int = 1, **overrides) -> dict:
    data = {
        "id": 1000 + number,
        "number": number,
        "html_url": f"https://github.com/{OWNER}/{REPO}/issues/{number}",
        "title": "Test Issue",
        "body": "Test Description",
        "state": "open",
        "node_id": "MDU6SXNzdWUx",
    }
    data.update(overrides)
    return data


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(token="testtoken", owner=OWNER, repo=REPO, api_endpoint=BASE_URL)


@pytest.fixture
def client(config: ClientConfig) -> Iterator[IssueClient]:
    with IssueClient(config) as c:
        yield c


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
