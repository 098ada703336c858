"""Poll the results API until a document finishes.

Usage:
    docpipeline-poll <document_id>
    docpipeline-poll <document_id> --base-url http://results.internal:8000

Exit codes: 0 completed, 1 pipeline failed, 2 not found, 3 polling timed out.
"""

import argparse
import json

from app.config.settings import Settings
from app.logging.logger import Log
from app.results.exceptions import PollTimeoutError, ResultNotFoundError
from app.results.http_source import HttpResultSource
from app.results.poller import ResultPoller
from app.status.models import ProcessingStatus

EXIT_COMPLETED = 0
EXIT_FAILED = 1
EXIT_NOT_FOUND = 2
EXIT_TIMEOUT = 3


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docpipeline-poll",
        description="Wait for a document to reach COMPLETED or FAILED and print its result.",
    )
    parser.add_argument("document_id", help="ID returned when the upload was registered")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Results API base URL (default: RESULTS_API_BASE_URL setting)",
    )
    return parser.parse_args(argv)


def poll(poller: ResultPoller, document_id: str) -> int:
    """Wait for one document, print its final payload as JSON, and return the exit code."""
    try:
        result = poller.wait_for_result(document_id)
    except ResultNotFoundError as exc:
        Log.error(str(exc), document_id=document_id)
        return EXIT_NOT_FOUND
    except PollTimeoutError as exc:
        Log.error(str(exc), document_id=document_id)
        return EXIT_TIMEOUT

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    if result.status is ProcessingStatus.COMPLETED:
        return EXIT_COMPLETED
    return EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    source = HttpResultSource(args.base_url or settings.results_api_base_url)
    try:
        return poll(ResultPoller.from_settings(source, settings), args.document_id)
    finally:
        source.close()


if __name__ == "__main__":
    raise SystemExit(main())
