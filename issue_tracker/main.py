"""Demo: create an issue, read it back, then update it."""

import argparse
import sys

import structlog

from issue_tracker.adapters.github_client import IssueClient, IssueClientError
from issue_tracker.adapters.github_models import IssuePayload
from issue_tracker.config.config import get_settings

logger = structlog.get_logger(__name__)


def configure_logging() -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.JSONRenderer(),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create, fetch and update a GitHub issue using GITHUB_PAT, GITHUB_OWNER and GITHUB_REPO",
    )
    parser.add_argument("--title", default="Test Issue", help="Title of the issue to create")
    parser.add_argument(
        "--body",
        default="This is a test issue created via the API",
        help="Body of the issue to create",
    )
    parser.add_argument(
        "--label",
        action="append",
        dest="labels",
        default=None,
        help="Label to apply (repeatable)",
    )
    parser.add_argument("--close", action="store_true", help="Close the issue in the update step")
    return parser


def run(client: IssueClient, args: argparse.Namespace) -> None:
    created = client.create_issue(IssuePayload(title=args.title, body=args.body, labels=args.labels))
    print(f"Created issue #{created.number}: {created.html_url}")

    fetched = client.get_issue(created.number)
    print(f"Retrieved issue: {fetched.title}")

    update = IssuePayload(title=f"Updated {args.title}", state="closed" if args.close else None)
    updated = client.update_issue(created.number, update)
    print(f"Updated issue: {updated.title} (Status: {updated.state})")


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    settings = get_settings()
    missing = settings.missing_required()
    if missing:
        logger.error("missing_configuration", variables=missing)
        raise SystemExit(f"{', '.join(missing)} environment variable(s) required")

    config = settings.to_client_config()
    with config.http_client, IssueClient(config) as client:
        try:
            run(client, args)
        except IssueClientError as exc:
            logger.error("issue_demo_failed", error=str(exc), status_code=exc.status_code)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
