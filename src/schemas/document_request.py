"""Document request schema definitions."""

from typing import Dict, List, Optional

from pydantic import Field

from schemas.base import CamelModel


class DocumentRequest(CamelModel):
    """A student's request for registrar documents."""
    id: str
    student_id: str = Field(description="The user_id of the requesting student.")
    student_name: str = Field(description="Student's full name at request time.")
    document_type: str
    quantity: int
    price_per_copy: int
    total: int
    status: str
    created_at: str
    updated_at: str


class CreateRequestRequest(CamelModel):
    document_type: Optional[str] = None
    quantity: Optional[int] = None


class UpdateStatusRequest(CamelModel):
    status: Optional[str] = None


class RequestListResponse(CamelModel):
    requests: List[DocumentRequest]


class RequestUpdateResponse(CamelModel):
    success: bool = True
    request: DocumentRequest


class DocumentTypeInfo(CamelModel):
    value: str
    label: str


class DocumentCatalogResponse(CamelModel):
    document_types: List[DocumentTypeInfo]
    price_per_copy: int
    max_copies_per_request: int
    max_active_requests: int


class RequestStatsResponse(CamelModel):
    """Per-status request counts for the admin overview."""
    total: int
    by_status: Dict[str, int]
