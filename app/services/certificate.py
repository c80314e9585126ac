import os
import logging
from typing import List

from jinja2 import Environment, FileSystemLoader, select_autoescape
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import EnrollmentNotFoundException, NotCompletedException, NotFoundException
from app.crud.certificate import certificate as crud_certificate
from app.crud.enrollment import enrollment as crud_enrollment
from app.models.certificate import Certificate as CertificateModel
from app.schemas.certificate import CertificateData
from app.schemas.user import UserContext
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class CertificateRenderer:
    """Renders certificate documents as PDF files on local storage."""
    _template_env = None

    def __init__(self, output_dir: str = None, template_name: str = "certificate.html"):
        self.output_dir = output_dir or settings.CERTIFICATES_DIR
        self.template_name = template_name

    @classmethod
    def _get_template_env(cls):
        if cls._template_env is None:
            template_dir = os.path.join(
                os.path.dirname(os.path.abspath(__file__)),
                '..',
                'templates'
            )
            cls._template_env = Environment(
                loader=FileSystemLoader(template_dir),
                autoescape=select_autoescape(['html']),
            )
        return cls._template_env

    def file_path(self, certificate_id: int) -> str:
        return os.path.join(self.output_dir, f"certificate-{certificate_id}.pdf")

    def render_html(self, data: CertificateData) -> str:
        template = self._get_template_env().get_template(self.template_name)
        completed = data.completed_at
        return template.render(
            certificate_id=data.certificate_id,
            student_name=data.student_name,
            course_title=data.course_title,
            instructor_name=data.instructor_name,
            completed_on=f"{completed:%B} {completed.day}, {completed.year}",
            issuer_name=data.issuer_name,
        )

    def write_pdf(self, html_string: str, path: str) -> None:
        # weasyprint pulls in pango/cairo on import
        from weasyprint import HTML

        HTML(string=html_string).write_pdf(path)

    def render(self, data: CertificateData) -> str:
        """Render the certificate and return its storage path.

        Rendering the same certificate again overwrites the previous file.
        """
        os.makedirs(self.output_dir, exist_ok=True)
        path = self.file_path(data.certificate_id)
        self.write_pdf(self.render_html(data), path)
        logger.info(f"Rendered certificate {data.certificate_id} to {path}")
        return path


class CertificateService:

    def __init__(self, renderer: CertificateRenderer = None):
        self.renderer = renderer or CertificateRenderer()

    def generate_certificate(
        self, db: Session, enrollment_id: int, current_user_context: UserContext
    ) -> CertificateModel:
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment:
            raise EnrollmentNotFoundException()

        permission_helper.require_owner(
            current_user_context, enrollment.user_id, "You can only generate certificates for your own enrollments"
        )

        if not enrollment.is_completed:
            raise NotCompletedException()

        certificate, created = crud_certificate.get_or_create(
            db, user_id=enrollment.user_id, course_id=enrollment.course_id
        )
        if created:
            logger.info(f"Certificate {certificate.id} issued on demand for enrollment {enrollment.id}")

        course = enrollment.course
        data = CertificateData(
            certificate_id=certificate.id,
            student_name=enrollment.user.name,
            course_title=course.title,
            instructor_name=course.instructor.name,
            completed_at=enrollment.completed_at or certificate.issued_at,
            issuer_name=settings.CERTIFICATE_ISSUER_NAME,
        )
        self.renderer.render(data)

        certificate_url = settings.CERTIFICATE_URL_TEMPLATE.format(certificate_id=certificate.id)
        return crud_certificate.update(db, db_obj=certificate, obj_in={"certificate_url": certificate_url})

    def get_user_certificates(self, db: Session, current_user_context: UserContext) -> List[CertificateModel]:
        return crud_certificate.get_by_user(db, user_id=current_user_context.user_id)

    def _get_certificate_or_404(self, db: Session, certificate_id: int) -> CertificateModel:
        certificate = crud_certificate.get(db, id=certificate_id)
        if not certificate:
            raise NotFoundException(detail="Certificate not found")
        return certificate

    def get_certificate_file(self, db: Session, certificate_id: int, current_user_context: UserContext) -> str:
        certificate = self._get_certificate_or_404(db, certificate_id)
        permission_helper.require_owner_or_admin(
            current_user_context, certificate.user_id, "You can only download your own certificates"
        )

        path = self.renderer.file_path(certificate.id)
        if not certificate.certificate_url or not os.path.exists(path):
            raise NotFoundException(detail="Certificate file not found")
        return path

    def delete_certificate(self, db: Session, certificate_id: int) -> CertificateModel:
        certificate = self._get_certificate_or_404(db, certificate_id)

        path = self.renderer.file_path(certificate.id)
        if os.path.exists(path):
            os.remove(path)

        crud_certificate.delete(db, id=certificate.id)
        logger.info(f"Certificate {certificate_id} deleted")
        return certificate


certificate_service = CertificateService()
