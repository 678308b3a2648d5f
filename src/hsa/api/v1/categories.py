"""Medical-expense category reference endpoint."""

from fastapi import APIRouter

from hsa.categorization import all_categories
from hsa.schemas.transaction import CategoryListResult, CategoryResponse

router = APIRouter(prefix="/medical-expenses", tags=["categories"])


@router.get(
    "/categories",
    response_model=CategoryListResult,
    summary="List expense categories",
    description="All known category codes with their HSA qualification verdict.",
)
async def list_categories() -> CategoryListResult:
    return CategoryListResult(
        categories=[CategoryResponse.model_validate(c) for c in all_categories()]
    )
