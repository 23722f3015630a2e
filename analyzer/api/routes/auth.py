from typing import Any

from fastapi import APIRouter, Depends

from analyzer.analysis.models import Subject
from analyzer.api.dependencies import AppServices, get_current_subject, get_services
from analyzer.api.schemas import CredentialsBody, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse)
def register(
    body: CredentialsBody,
    services: AppServices = Depends(get_services),
) -> TokenResponse:
    return TokenResponse(token=services.auth.register(body.username, body.password))


@router.post("/login", response_model=TokenResponse)
def login(
    body: CredentialsBody,
    services: AppServices = Depends(get_services),
) -> TokenResponse:
    return TokenResponse(token=services.auth.login(body.username, body.password))


@router.get("/me")
def me(subject: Subject = Depends(get_current_subject)) -> dict[str, Any]:
    return subject.to_dict()
