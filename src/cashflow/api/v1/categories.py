"""Category listing endpoint."""

from fastapi import APIRouter, Depends

from cashflow.api.deps import get_category_repository
from cashflow.repositories.category import CategoryRepository
from cashflow.schemas.category import CategoryListResult, CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResult, summary="List categories")
async def list_categories(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> CategoryListResult:
    """Get every category, sorted by title."""
    categories = await category_repo.get_all_ordered()
    return CategoryListResult(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories),
    )
