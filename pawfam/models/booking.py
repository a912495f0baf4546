"""Daycare booking models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookingMode(str, Enum):
    """How the pet descriptor of a booking is filled in"""
    UNSELECTED = "unselected"
    SAVED_PET = "saved_pet"
    MANUAL = "manual"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DaycareCenter(BaseModel):
    """Vendor-operated daycare center"""
    id: str
    name: str
    location: str = ""
    price_per_day: float = Field(ge=0)


class BookingForm(BaseModel):
    """Snapshot of the daycare booking form"""
    pet_name: str = ""
    pet_type: str = ""
    pet_age: str = ""
    email: str = ""
    mobile_number: str = ""
    start_date: str = ""
    end_date: str = ""
    special_instructions: str = ""


class CenterSummary(BaseModel):
    name: str
    location: str
    price_per_day: float = Field(serialization_alias="pricePerDay")


class BookingRequest(BaseModel):
    """Booking body sent to the daycare API"""
    daycare_center_id: str = Field(serialization_alias="daycareCenterId")
    daycare_center: CenterSummary = Field(serialization_alias="daycareCenter")
    pet_name: str = Field(serialization_alias="petName")
    pet_type: str = Field(serialization_alias="petType")
    pet_age: str = Field(serialization_alias="petAge")
    email: str
    mobile_number: str = Field(serialization_alias="mobileNumber")
    start_date: str = Field(serialization_alias="startDate")
    end_date: str = Field(serialization_alias="endDate")
    special_instructions: str = Field(default="", serialization_alias="specialInstructions")
    total_amount: float = Field(serialization_alias="totalAmount")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class SavedPet(BaseModel):
    """Pet from the customer's profile used to prefill a booking"""
    id: str
    name: str
    category: str = ""
    age: Optional[str] = None
