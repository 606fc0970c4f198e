"""API v1 route handlers."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from poolrev.models.requests import CalculationRequest, ProjectionRequest
from poolrev.models.responses import CalculationResponse, LiveDataResponse, ProjectionResponse
from poolrev.models.assumptions import Assumptions, get_default_assumptions
from poolrev.models.snapshot import NetworkSnapshot
from poolrev.engine.calc import build_projection, calculate_pool_revenue, projection_params_for
from poolrev.engine.export import projection_to_csv
from poolrev.engine.live_data import LiveDataError, LiveDataService
from poolrev.engine.projection import project


router = APIRouter()


def get_live_data_service(request: Request) -> LiveDataService:
    """Live data collaborator owned by the application."""
    return request.app.state.live_data


def _resolve_snapshot(network: NetworkSnapshot | None, service: LiveDataService) -> NetworkSnapshot:
    if network is not None:
        return network
    try:
        return service.current_snapshot()
    except LiveDataError as e:
        raise HTTPException(status_code=503, detail=f"Network data unavailable: {e}") from e


@router.get("/assumptions", response_model=Assumptions)
def get_assumptions() -> Assumptions:
    """Get current calculation assumptions and version."""
    return get_default_assumptions()


@router.get("/live", response_model=LiveDataResponse)
def get_live_data(service: LiveDataService = Depends(get_live_data_service)) -> LiveDataResponse:
    """
    Get live Bitcoin network and market data.

    Fetches data from mempool.space including:
    - BTC prices (USD, EUR)
    - Network hashrate and difficulty
    - Current blockchain tip height and block subsidy
    - Average transaction fees of recent blocks

    Data is cached (configurable via LIVE_CACHE_TTL_SECONDS).
    Falls back to cached data if mempool.space is temporarily unavailable.
    """
    return service.fetch_live_data()


@router.post("/calculate", response_model=CalculationResponse)
def calculate(
    request: CalculationRequest,
    service: LiveDataService = Depends(get_live_data_service),
) -> CalculationResponse:
    """Calculate current pool revenue for the given pool parameters."""
    snapshot = _resolve_snapshot(request.network, service)
    return calculate_pool_revenue(request.pool, snapshot)


@router.post("/projection", response_model=ProjectionResponse)
def projection(
    request: ProjectionRequest,
    service: LiveDataService = Depends(get_live_data_service),
) -> ProjectionResponse:
    """Project pool revenue forward with compound hashrate growth."""
    snapshot = _resolve_snapshot(request.network, service)
    return build_projection(request, snapshot)


@router.post("/projection/export")
def export_projection(
    request: ProjectionRequest,
    service: LiveDataService = Depends(get_live_data_service),
) -> Response:
    """Download the full projection table as CSV."""
    snapshot = _resolve_snapshot(request.network, service)
    params = projection_params_for(request, snapshot)
    body = projection_to_csv(params, project(params))
    filename = f"pool-projection-{params.start_date.isoformat()}-{params.granularity}.csv"
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
