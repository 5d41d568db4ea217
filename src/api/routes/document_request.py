"""Document request routes.

This module handles HTTP endpoints for the document request lifecycle.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from config import (
    DOCUMENT_TYPES,
    MAX_ACTIVE_REQUESTS,
    MAX_COPIES_PER_REQUEST,
    PRICE_PER_COPY,
    ROLE_ADMIN,
    ROLE_STUDENT,
)
from core.dependencies import RequestManagerDep
from schemas.document_request import (
    CreateRequestRequest,
    DocumentCatalogResponse,
    DocumentTypeInfo,
    RequestListResponse,
    RequestStatsResponse,
    RequestUpdateResponse,
    UpdateStatusRequest,
)
from schemas.message import RequestCreateResponse
from schemas.user import User

router = APIRouter(prefix="/api/requests", tags=["Request"])


@router.get(
    "/document-types",
    response_model=DocumentCatalogResponse,
    summary="List requestable documents",
)
def list_document_types() -> DocumentCatalogResponse:
    """Return the document catalog and pricing rules. No auth required."""
    return DocumentCatalogResponse(
        document_types=[
            DocumentTypeInfo(value=value, label=label)
            for value, label in DOCUMENT_TYPES.items()
        ],
        price_per_copy=PRICE_PER_COPY,
        max_copies_per_request=MAX_COPIES_PER_REQUEST,
        max_active_requests=MAX_ACTIVE_REQUESTS,
    )


@router.get("/stats", response_model=RequestStatsResponse, summary="Request counts per status")
def request_stats(
    request_manager: RequestManagerDep,
    current_user: User = Depends(get_current_user),
) -> RequestStatsResponse:
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    counts = request_manager.status_counts()
    return RequestStatsResponse(total=sum(counts.values()), by_status=counts)


@router.post("", response_model=RequestCreateResponse, summary="Create a document request")
def create_request(
    req: CreateRequestRequest,
    request_manager: RequestManagerDep,
    current_user: User = Depends(get_current_user),
) -> RequestCreateResponse:
    """Create a document request for the current student.

    Args:
        req: Document type and quantity.
        request_manager: Injected RequestManager instance.
        current_user: Current authenticated user.

    Returns:
        The created request and its initial system message.

    Raises:
        HTTPException: 401 if the caller is not a student.
    """
    if current_user.role != ROLE_STUDENT:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    request, message = request_manager.create_request(
        current_user, req.document_type, req.quantity
    )
    return RequestCreateResponse(request=request, message=message)


@router.get("", response_model=RequestListResponse, summary="List document requests")
def list_requests(
    request_manager: RequestManagerDep,
    current_user: User = Depends(get_current_user),
) -> RequestListResponse:
    """Students get their own requests; admins get every request."""
    return RequestListResponse(requests=request_manager.list_requests(current_user))


@router.put("/{request_id}", response_model=RequestUpdateResponse, summary="Update request status")
def update_request(
    request_id: str,
    req: UpdateStatusRequest,
    request_manager: RequestManagerDep,
    current_user: User = Depends(get_current_user),
) -> RequestUpdateResponse:
    """Change the status of a request (admin only).

    Args:
        request_id: The request to update.
        req: The new status.
        request_manager: Injected RequestManager instance.
        current_user: Current authenticated user.

    Returns:
        The updated request.

    Raises:
        HTTPException: 401 if the caller is not an admin.
    """
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    request = request_manager.update_status(request_id, req.status)
    return RequestUpdateResponse(request=request)
