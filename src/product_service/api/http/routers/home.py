"""Root liveness endpoint."""

from fastapi import APIRouter
from starlette.responses import PlainTextResponse

router = APIRouter(tags=["home"])


@router.get("/", response_class=PlainTextResponse)
def home_page() -> str:
    return "Welcome home"
