"""Site header CRUD: public read, authenticated writes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from nutricare.api.v1.auth import AUTH_ERROR_RESPONSES, get_current_user
from nutricare.core.database import get_db
from nutricare.models import Header
from nutricare.schemas.auth import CurrentUser
from nutricare.schemas.header import HeaderCreate, HeaderResponse, HeaderUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, header_id: str) -> Header:
    header = db.get(Header, header_id)
    if header is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Header not found.",
        )
    return header


@router.get("", response_model=list[HeaderResponse])
def list_headers(db: Annotated[Session, Depends(get_db)]) -> list[HeaderResponse]:
    """Return all header entries."""
    headers = db.query(Header).order_by(Header.created_at, Header.id).all()
    return [HeaderResponse.model_validate(h) for h in headers]


@router.post(
    "",
    response_model=HeaderResponse,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERROR_RESPONSES,
)
def create_header(
    body: HeaderCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> HeaderResponse:
    header = Header(**body.model_dump())
    db.add(header)
    db.commit()
    db.refresh(header)
    logger.info("Header %s created by %s", header.id, current_user.id)
    return HeaderResponse.model_validate(header)


@router.put(
    "/{header_id}",
    response_model=HeaderResponse,
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "Header not found"}},
)
def update_header(
    header_id: str,
    body: HeaderUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> HeaderResponse:
    """Update the given fields of a header entry."""
    header = _get_or_404(db, header_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        setattr(header, field, value)
    db.commit()
    db.refresh(header)
    logger.info("Header %s updated by %s", header.id, current_user.id)
    return HeaderResponse.model_validate(header)


@router.delete(
    "/{header_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**AUTH_ERROR_RESPONSES, 404: {"description": "Header not found"}},
)
def delete_header(
    header_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    header = _get_or_404(db, header_id)
    db.delete(header)
    db.commit()
    logger.info("Header %s deleted by %s", header_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
