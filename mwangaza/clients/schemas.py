"""
Clients - Pydantic Schemas

Field names follow the stored rows and the JSON wire format (camelCase);
either spelling is accepted on input.
"""

from datetime import date
from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


Gender = Literal["male", "female", "other"]
ClientStatus = Literal[
    "active",
    "successful_reintegration",
    "early_reintegration",
    "discharge",
    "referral",
]
ProgramType = Literal[
    "school",
    "training_institution",
    "family",
    "independent_living",
    "other",
]

CLIENT_STATUSES = get_args(ClientStatus)


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Parent(CamelModel):
    """Parent or guardian owned by one client"""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    contact: str = ""
    location: str = ""
    relationship: str = Field("Guardian", description="Mother, Father, Guardian, Other or free text")


class AftercareProgramDetails(CamelModel):
    """Placement after the programme (normally set with successful_reintegration)"""
    program_type: ProgramType
    institution_name: Optional[str] = None
    contact_person: Optional[str] = None
    contact_details: Optional[str] = None
    start_date: date
    notes: Optional[str] = None


class ClientFields(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    gender: Gender
    original_home: str = ""
    street: str = ""
    intake: Optional[str] = Field(None, description="Intake period, YYYY-MM")
    notes: Optional[str] = None
    status: ClientStatus = "active"
    aftercare_details: Optional[AftercareProgramDetails] = None
    parents: List[Parent] = []


class ClientCreate(ClientFields):
    """Client with every field except the id"""
    admission_number: str = Field(..., min_length=1, max_length=20)
    admission_date: date


class Client(ClientCreate):
    id: str


class ClientRegistration(ClientFields):
    """Registration form: admission number is assigned, admission date defaults to today"""
    admission_date: Optional[date] = None


class StatusUpdateRequest(CamelModel):
    status: ClientStatus
    aftercare_details: Optional[AftercareProgramDetails] = None


class NotesUpdateRequest(CamelModel):
    notes: str = Field("", max_length=5000)
