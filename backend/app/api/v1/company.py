"""Company endpoints (EMPLOYER role only).

GET /company/me - own company, null if not created yet
PUT /company/me - upsert company
"""

from fastapi import APIRouter

from app.api.deps import CurrentEmployer, DbSession
from app.core.responses import DataResponse
from app.repositories.company_repository import CompanyRepository
from app.schemas.accounts import CompanyResponse, UpdateCompanyRequest

router = APIRouter()


@router.get("/me")
async def get_my_company(
    user: CurrentEmployer,
    db: DbSession,
) -> DataResponse[CompanyResponse | None]:
    company = await CompanyRepository.get_by_user_id(db, user.id)
    return DataResponse(
        data=CompanyResponse.model_validate(company) if company else None
    )


@router.put("/me")
async def update_my_company(
    body: UpdateCompanyRequest,
    user: CurrentEmployer,
    db: DbSession,
) -> DataResponse[CompanyResponse]:
    """Create or update the caller's company. Omitted fields are kept."""
    fields = body.model_dump(mode="json", exclude_unset=True)
    company = await CompanyRepository.upsert(db, user.id, **fields)
    return DataResponse(data=CompanyResponse.model_validate(company))
