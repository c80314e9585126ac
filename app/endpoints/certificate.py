from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.certificate import Certificate, CertificateWithCourse
from app.schemas.response import APIResponse
from app.schemas.user import UserContext
from app.services.certificate import certificate_service
from app.utils import deps

router = APIRouter()


@router.post("/generate/{enrollment_id}", response_model=APIResponse[Certificate])
def generate_certificate(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    certificate = certificate_service.generate_certificate(
        db, enrollment_id=enrollment_id, current_user_context=context
    )
    return APIResponse(message="Certificate generated successfully", data=Certificate.model_validate(certificate))


@router.get("/my-certificates", response_model=APIResponse[List[CertificateWithCourse]])
def get_my_certificates(
    *,
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    certificates = certificate_service.get_user_certificates(db, current_user_context=context)
    return APIResponse(
        message="Certificates retrieved successfully",
        data=[CertificateWithCourse.model_validate(c) for c in certificates]
    )


@router.get("/{certificate_id}/download")
def download_certificate(
    *,
    db: Session = Depends(deps.get_db),
    certificate_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    path = certificate_service.get_certificate_file(db, certificate_id=certificate_id, current_user_context=context)
    return FileResponse(
        path,
        media_type="application/pdf",
        filename=f"certificate-{certificate_id}.pdf"
    )


@router.delete("/{certificate_id}", response_model=APIResponse[None])
def delete_certificate(
    *,
    db: Session = Depends(deps.get_transactional_db),
    certificate_id: int,
    context: UserContext = Depends(deps.require_role(RoleEnum.ADMIN))
):
    certificate_service.delete_certificate(db, certificate_id=certificate_id)
    return APIResponse(message="Certificate deleted successfully", data=None)
