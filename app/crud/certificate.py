from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple

from app.crud.base import CRUDBase
from app.models.certificate import Certificate
from app.schemas.certificate import Certificate as CertificateSchema


class CRUDCertificate(CRUDBase[Certificate, CertificateSchema, CertificateSchema]):

    def get(self, db: Session, id: int) -> Optional[Certificate]:
        return (
            db.query(Certificate)
            .options(selectinload(Certificate.course), selectinload(Certificate.user))
            .filter(Certificate.id == id)
            .first()
        )

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[Certificate]:
        return (
            db.query(Certificate)
            .filter(Certificate.user_id == user_id, Certificate.course_id == course_id)
            .first()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[Certificate]:
        return (
            db.query(Certificate)
            .options(selectinload(Certificate.course))
            .filter(Certificate.user_id == user_id)
            .order_by(Certificate.issued_at.desc(), Certificate.id.desc())
            .all()
        )

    def count_by_user(self, db: Session, *, user_id: int) -> int:
        return db.query(Certificate).filter(Certificate.user_id == user_id).count()

    def get_or_create(self, db: Session, *, user_id: int, course_id: int) -> Tuple[Certificate, bool]:
        """Return the (user, course) certificate, inserting it if absent.

        The unique (user_id, course_id) index decides races: a losing insert
        is rolled back to its savepoint and the winner's row is returned.
        """
        existing = self.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        if existing:
            return existing, False
        try:
            with db.begin_nested():
                certificate = Certificate(user_id=user_id, course_id=course_id)
                db.add(certificate)
                db.flush()
        except IntegrityError:
            return self.get_by_user_and_course(db, user_id=user_id, course_id=course_id), False
        db.refresh(certificate)
        return certificate, True


certificate = CRUDCertificate(Certificate)
