"""
FastAPI dependencies.

The service instance is built once in the application lifespan and stored on
`app.state`; tests replace it through `app.dependency_overrides[get_user_service]`.
"""
from typing import Awaitable, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.services.user_service import AbstractUserService

M = TypeVar("M", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_user_service(request: Request) -> AbstractUserService:
    return request.app.state.user_service


def json_or_form(model: type[M]) -> Callable[[Request], Awaitable[M]]:
    """
    Build a dependency that parses the request body into `model`, accepting
    either a JSON document or a form-encoded body.

    An empty body is treated as `{}`, so a PATCH without content is a valid
    no-op update. Any parse or validation failure is raised as
    RequestValidationError and rendered as 400 by the error handlers.
    """

    async def parse(request: Request) -> M:
        content_type = request.headers.get("content-type", "")

        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            raw = {key: value for key, value in form.items()}
        else:
            body = await request.body()
            if not body:
                raw = {}
            else:
                try:
                    raw = await request.json()
                except ValueError:
                    raise RequestValidationError(
                        [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body", "input": None}]
                    ) from None

        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            errors = [{**err, "loc": ("body", *err["loc"])} for err in exc.errors(include_url=False)]
            raise RequestValidationError(errors, body=raw) from exc

    return parse
