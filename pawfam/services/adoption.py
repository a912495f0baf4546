"""Pet adoption service"""

import logging

from ..core.session import StorefrontSession
from ..models.adoption import AdoptionForm, PetListing
from ..models.checkout import SubmissionResult
from .api_client import PawFamAPIError, PawFamClient
from .normalizer import normalize_list, normalize_pets
from .payloads import build_adoption_application
from .submission import resolve_api_error, submission_guard
from .validation import validate_adoption

logger = logging.getLogger(__name__)


class AdoptionService:
    """Adoptable pet listings and adoption applications"""

    def __init__(self, client: PawFamClient):
        self.client = client

    async def list_pets(self) -> list[PetListing]:
        return normalize_pets(await self.client.get_adoption_pets())

    async def list_applications(self) -> list:
        return normalize_list(await self.client.get_applications())

    async def submit(
        self,
        session: StorefrontSession,
        pet: PetListing,
        form: AdoptionForm,
    ) -> SubmissionResult:
        with submission_guard(session):
            errors = validate_adoption(form)
            if errors:
                return SubmissionResult(success=False, errors=errors)

            application = build_adoption_application(pet, form)
            try:
                response = await self.client.create_application(application.to_payload())
            except PawFamAPIError as e:
                return resolve_api_error(e, "Error submitting application")

            logger.info(f"Adoption application submitted for pet {pet.id}")
            session.touch()
            return SubmissionResult(
                success=True,
                notice="Adoption application submitted successfully! We will contact you soon.",
                data=response if isinstance(response, dict) else None,
            )

    async def revoke_application(self, application_id: str) -> SubmissionResult:
        try:
            await self.client.revoke_application(application_id)
        except PawFamAPIError as e:
            return resolve_api_error(e, "Failed to revoke application")
        return SubmissionResult(success=True, notice="Application revoked successfully!")
