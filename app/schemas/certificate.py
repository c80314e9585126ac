from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class CertificateCourse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    instructor_id: int


class Certificate(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    certificate_url: Optional[str] = None
    issued_at: Optional[datetime] = None


class CertificateWithCourse(Certificate):
    course: CertificateCourse


class CertificateData(BaseModel):
    """Everything the rendered document shows."""
    certificate_id: int
    student_name: str
    course_title: str
    instructor_name: str
    completed_at: datetime
    issuer_name: str
