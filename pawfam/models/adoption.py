"""Adoption models"""

from pydantic import BaseModel, Field


class PetListing(BaseModel):
    """Adoptable pet in canonical display shape"""
    id: str
    name: str = "Unnamed Pet"
    type: str = "Pet"
    breed: str = ""
    age: str = ""
    gender: str = ""
    size: str = ""
    description: str = ""
    image: str = ""
    status: str = "Available"
    shelter: str = "Vendor"


class AdoptionForm(BaseModel):
    """Snapshot of the adoption application form"""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    experience: str = ""
    experience_details: str = ""
    visit_date: str = ""
    visit_time: str = ""
    adoption_reason: str = ""
    other_pets: str = ""
    other_pets_details: str = ""
    terms_accepted_consent: bool = False
    terms_accepted_care: bool = False


class PetSummary(BaseModel):
    id: str
    name: str
    type: str
    breed: str
    age: str
    shelter: str


class PersonalInfo(BaseModel):
    full_name: str = Field(serialization_alias="fullName")
    email: str
    phone: str
    address: str


class Experience(BaseModel):
    level: str
    details: str
    other_pets: str = Field(serialization_alias="otherPets")
    other_pets_details: str = Field(serialization_alias="otherPetsDetails")


class VisitSchedule(BaseModel):
    date: str
    time: str


class AdoptionApplication(BaseModel):
    """Application body sent to the adoption API"""
    pet: PetSummary
    personal_info: PersonalInfo = Field(serialization_alias="personalInfo")
    experience: Experience
    visit_schedule: VisitSchedule = Field(serialization_alias="visitSchedule")
    adoption_reason: str = Field(serialization_alias="adoptionReason")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
