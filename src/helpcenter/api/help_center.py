from fastapi import APIRouter, Query, Depends
from pydantic import ValidationError
from typing import Annotated
from ..dto.article_result import ArticleResults, SearchHitResult, SearchResults
from ..dto.category_result import CategoryResults
from ..dto.exceptions import QueryValidationException
from ..dto.search_query import PopularQuery, SearchQuery
from ..dto.store_status import StoreStatus
from ..helpcenter_setup import get_help_center_service
from ..service.help_center import HelpCenterService


router = APIRouter(
  prefix="/api/v1/helpcenter",
  tags=["Help Center"],
)

Service = Annotated[HelpCenterService, Depends(get_help_center_service)]


def build_query(model, **values):
  # DTO validation errors are client errors, not server errors
  try:
    return model(**values)
  except ValidationError as e:
    raise QueryValidationException("; ".join(
      f"{'.'.join(str(l) for l in err['loc'])}: {err['msg']}" for err in e.errors()
    ))


@router.get(
  "/search",
  response_model=SearchResults,
  response_model_exclude_none=True,
)
async def search(
  service: Service,

  # absent means no text filter, blank means no results
  q: Annotated[str | None, Query()] = None,
  category: Annotated[str | None, Query()] = None,
  limit: Annotated[int | None, Query()] = None,
) -> SearchResults:
  search_query = build_query(
    SearchQuery,
    query=q,
    category_id=category,
    limit=limit,
  )
  return await service.search(search_query)


@router.get(
  "/categories",
  response_model=CategoryResults,
  response_model_exclude_none=True,
)
async def list_categories(service: Service) -> CategoryResults:
  return await service.list_categories()


@router.get(
  "/categories/{category_id}/articles",
  response_model=ArticleResults,
  response_model_exclude_none=True,
)
async def get_articles_by_category(category_id: str, service: Service) -> ArticleResults:
  return await service.get_articles_by_category(category_id)


# declared before /articles/{article_id} so 'popular' isn't taken for an id
@router.get(
  "/articles/popular",
  response_model=SearchResults,
  response_model_exclude_none=True,
)
async def get_popular_articles(
  service: Service,
  limit: Annotated[int, Query()] = 5,
) -> SearchResults:
  return await service.get_popular_articles(build_query(PopularQuery, limit=limit))


@router.get(
  "/articles/{article_id}",
  response_model=SearchHitResult,
  response_model_exclude_none=True,
)
async def get_article(article_id: str, service: Service) -> SearchHitResult:
  return await service.get_article(article_id)


@router.get(
  "/status",
  response_model=StoreStatus,
)
async def get_status(service: Service) -> StoreStatus:
  return service.status()


@router.post(
  "/refresh",
  response_model=StoreStatus,
)
async def refresh(service: Service) -> StoreStatus:
  return await service.refresh()
