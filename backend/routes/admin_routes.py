import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_roles
from backend.database import get_db
from backend.models.job import JOB_STATUSES
from backend.models.user import ADMIN, User
from backend.routes.errors import database_error
from backend.routes.job_routes import JobResponse, get_job_or_404, serialize_job

router = APIRouter(tags=['admin'])

logger = logging.getLogger(__name__)


class UpdateJobStatusRequest(BaseModel):
    status: str

    @field_validator('status')
    @classmethod
    def validate_status(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in JOB_STATUSES:
            raise ValueError(f'Status must be one of: {", ".join(JOB_STATUSES)}.')
        return normalized


@router.put('/jobs/{job_id}', response_model=JobResponse, status_code=status.HTTP_200_OK)
def update_job_status(
    job_id: int,
    data: UpdateJobStatusRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    try:
        job = get_job_or_404(db, job_id)
        previous_status = job.status
        job.status = data.status
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info(
        'Admin %s moved job %s from %s to %s',
        current_user.id,
        job.id,
        previous_status,
        job.status,
    )
    return serialize_job(job, current_user)
