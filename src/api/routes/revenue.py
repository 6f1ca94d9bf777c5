"""Revenue API Routes"""

from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.revenue.dtos import RevenueOverviewDTO
from src.app.use_cases.revenue.get_revenue_overview import GetRevenueOverview
from src.adapter.repositories import SqlAlchemyRevenueLedgerRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/revenue", tags=["Revenue"])


@router.get(
    "/{workspace_id}/{year}",
    response_model=RevenueOverviewDTO,
    status_code=status.HTTP_200_OK,
)
async def get_revenue_overview(
    workspace_id: int,
    year: int = Path(..., ge=2000, le=9999),
    session: AsyncSession = Depends(get_session)
):
    """
    Projected revenue per month of a year.

    Figures come from the revenue ledger, which is credited when lessons are
    scheduled and debited on on-time cancellations. It is a forecast, not
    billed revenue. Months without entries are reported as 0.
    """
    use_case = GetRevenueOverview(SqlAlchemyRevenueLedgerRepository(session))
    result = await use_case.execute(workspace_id, year)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
