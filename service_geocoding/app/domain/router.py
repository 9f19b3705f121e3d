"""
Method and path routing for geocoding queries.
"""

from ..models import ForwardQuery, GatewayRequest, ReverseQuery, RouteOutcome, RouteResult

FORWARD = "forward"
REVERSE = "reverse"


class QueryRouter:
    """Select forward search, reverse search, or a rejection.

    Only the final path segment is inspected, so ``/x/forward`` and
    ``/.netlify/functions/geocoding/forward`` route identically. Parameter
    values are passed through without format checks.
    """

    def route(self, request: GatewayRequest) -> RouteResult:
        if request.method != "GET":
            return RouteResult(RouteOutcome.METHOD_NOT_ALLOWED)

        selector = request.path.rsplit("/", 1)[-1]
        params = request.query_params

        if selector == FORWARD:
            text = params.get("q")
            if text is None:
                return RouteResult(RouteOutcome.BAD_REQUEST, message="missing required query parameter: q")
            return RouteResult(RouteOutcome.OK, ForwardQuery(text))

        if selector == REVERSE:
            for name in ("lat", "lon"):
                if params.get(name) is None:
                    return RouteResult(
                        RouteOutcome.BAD_REQUEST,
                        message=f"missing required query parameter: {name}",
                    )
            return RouteResult(RouteOutcome.OK, ReverseQuery(params["lat"], params["lon"]))

        return RouteResult(RouteOutcome.NOT_FOUND)
