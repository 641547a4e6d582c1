from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from ..domain.exceptions import ArticleNotFoundError, DataUnavailableError, StoreLoadingError
from ..dto.exceptions import QueryValidationException


def error_response(status_code: int, errors: list[dict]) -> JSONResponse:
  return JSONResponse(
    status_code=status_code,
    content=jsonable_encoder({"detail": errors})
  )

# for Pydantic custom validation errors
def handle_query_validation_errors(request: Request, e: QueryValidationException) -> JSONResponse:
  return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, [{"msg": e.message}])

# for FastAPI-specific errors
def handle_request_validation_errors(request: Request, e: RequestValidationError) -> JSONResponse:
  errors = [{
    "loc": err["loc"],
    "msg": err["msg"],
    "input": err.get("input"),
  } for err in e.errors()]

  return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, errors)

def handle_article_not_found(request: Request, e: ArticleNotFoundError) -> JSONResponse:
  return error_response(status.HTTP_404_NOT_FOUND, [{"msg": e.message}])

# no data yet or a fetch is running, the client may retry
def handle_data_unavailable(request: Request, e: DataUnavailableError | StoreLoadingError) -> JSONResponse:
  response = error_response(status.HTTP_503_SERVICE_UNAVAILABLE, [{"msg": e.message}])
  response.headers["Retry-After"] = "5"
  return response

handlers = [
  (QueryValidationException, handle_query_validation_errors),
  (RequestValidationError, handle_request_validation_errors),
  (ArticleNotFoundError, handle_article_not_found),
  (DataUnavailableError, handle_data_unavailable),
  (StoreLoadingError, handle_data_unavailable),
]
