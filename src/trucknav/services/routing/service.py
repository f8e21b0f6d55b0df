"""Route calculation orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

from ...errors import BackendError, CalculationError
from ...models.domain import Session
from ...persistence.filesystem import FileStorage
from ...schemas.routing import RouteRequest, RouteResult
from ..api_client import ApiClient
from ..outputs.routing_formatter import route_result_to_csv, route_result_to_json
from .result import parse_route_result

CALCULATE_PATH = "/api/v1/routes/calculate"

logger = logging.getLogger(__name__)


class RouteCalculator:
    """Submits built requests to the backend. Never retries."""

    def __init__(self, api: ApiClient, session: Session) -> None:
        self.api = api
        self.session = session

    def calculate(self, request: RouteRequest) -> RouteResult:
        """Run one calculation.

        Raises:
            CalculationError: the backend rejected the request; the message is
                the backend's ``error`` text, unmodified.
            NotFoundError / AuthError / NetworkError / ParseError: from transport
                and parsing.
        """
        logger.info(
            f"Calculating {request.optimization_type.value} route with profile {request.truck_profile_id}"
        )
        try:
            body = self.api.post(CALCULATE_PATH, request.to_payload(), session=self.session)
        except BackendError as e:
            raise CalculationError(e.message) from e

        result = parse_route_result(body)
        logger.info(
            f"Received {len(result.route_options)} route options, "
            f"{result.restrictions_found} restrictions found"
        )
        return result


def save_route_result(
    result: RouteResult,
    request: RouteRequest | None = None,
    storage: FileStorage | None = None,
) -> Path:
    """Persist a result the user chose to keep. Returns the run directory."""
    storage = storage or FileStorage()
    prefix = request.route_name if request is not None and request.route_name else "route"
    run_dir = storage.make_run_directory(prefix=prefix)

    summary = route_result_to_json(result)
    if request is not None:
        summary["request"] = request.to_payload()
    storage.write_json(run_dir / "summary.json", summary)
    storage.write_csv(run_dir / "options.csv", route_result_to_csv(result))
    logger.info(f"Saved route result to {run_dir}")
    return run_dir
