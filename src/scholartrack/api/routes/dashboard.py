"""Dashboard endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from scholartrack.api.dependencies import StudentServiceDep, require_authenticated
from scholartrack.api.models import APIResponse, DashboardView, dashboard_to_view
from scholartrack.students import load_dashboard

router = APIRouter(tags=["dashboard"], dependencies=[Depends(require_authenticated)])


@router.get("/", response_model=APIResponse[DashboardView])
async def dashboard(service: StudentServiceDep) -> APIResponse[DashboardView] | JSONResponse:
    """Aggregate counts and the most recently enrolled students."""
    result = await load_dashboard(service)
    if not result.success or result.data is None:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](
                data=None, error=result.error or "Failed to load student data"
            ).model_dump(),
        )
    return APIResponse(data=dashboard_to_view(result.data))
