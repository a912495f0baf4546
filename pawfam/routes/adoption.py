"""Adoption API routes"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..core.session import StorefrontSession
from ..models.adoption import AdoptionForm, PetListing
from ..models.checkout import SubmissionResult
from ..services.adoption import AdoptionService
from ..services.api_client import PawFamAPIError, PawFamClient
from ..services.submission import SubmissionInProgressError
from .deps import api_error_to_http, get_client, get_session

router = APIRouter(prefix="/api/adoption", tags=["Adoption"])


def get_adoption_service(client: PawFamClient = Depends(get_client)) -> AdoptionService:
    return AdoptionService(client)


class ApplicationRequest(BaseModel):
    """Pet being applied for and the filled-in application form"""
    pet: PetListing
    form: AdoptionForm


@router.get("/pets", response_model=list[PetListing])
async def list_pets(adoption: AdoptionService = Depends(get_adoption_service)):
    try:
        return await adoption.list_pets()
    except PawFamAPIError as e:
        raise api_error_to_http(e)


@router.get("/applications")
async def list_applications(adoption: AdoptionService = Depends(get_adoption_service)):
    try:
        return await adoption.list_applications()
    except PawFamAPIError as e:
        raise api_error_to_http(e)


@router.post("/applications", response_model=SubmissionResult)
async def apply(
    request: ApplicationRequest,
    session: StorefrontSession = Depends(get_session),
    adoption: AdoptionService = Depends(get_adoption_service),
):
    try:
        return await adoption.submit(session, request.pet, request.form)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/applications/{application_id}/revoke", response_model=SubmissionResult)
async def revoke_application(
    application_id: str,
    adoption: AdoptionService = Depends(get_adoption_service),
):
    return await adoption.revoke_application(application_id)
