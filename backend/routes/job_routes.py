import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from backend.auth.dependencies import get_optional_user, require_roles
from backend.database import get_db
from backend.models.job import APPROVED, PENDING, Job, JobApplication
from backend.models.user import ADMIN, CANDIDATE, EMPLOYER, User, utc_now
from backend.routes.errors import database_error

router = APIRouter(tags=['jobs'])

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_COMPANY_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 10000


def _clean_required(value: str, field_name: str, max_length: int) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f'{field_name} is required.')
    if len(normalized) > max_length:
        raise ValueError(f'{field_name} must be {max_length} characters or fewer.')
    return normalized


def _clean_optional(value: str | None, field_name: str, max_length: int) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not normalized:
        return None
    if len(normalized) > max_length:
        raise ValueError(f'{field_name} must be {max_length} characters or fewer.')
    return normalized


class CreateJobRequest(BaseModel):
    title: str
    description: str
    company: str

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _clean_required(value, 'Title', MAX_TITLE_LENGTH)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _clean_required(value, 'Description', MAX_DESCRIPTION_LENGTH)

    @field_validator('company')
    @classmethod
    def validate_company(cls, value: str) -> str:
        return _clean_required(value, 'Company', MAX_COMPANY_LENGTH)


class UpdateJobRequest(BaseModel):
    """Partial edit; blank or missing fields keep their current value."""

    title: str | None = None
    description: str | None = None
    company: str | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return _clean_optional(value, 'Title', MAX_TITLE_LENGTH)

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return _clean_optional(value, 'Description', MAX_DESCRIPTION_LENGTH)

    @field_validator('company')
    @classmethod
    def validate_company(cls, value: str | None) -> str | None:
        return _clean_optional(value, 'Company', MAX_COMPANY_LENGTH)


class ApplicantResponse(BaseModel):
    candidate_id: int
    applied_at: datetime


class JobResponse(BaseModel):
    id: int
    title: str
    description: str
    company: str
    employer_id: int
    employer_name: str | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    applicants: list[ApplicantResponse]
    applicant_count: int
    has_applied: bool | None = None


class MessageResponse(BaseModel):
    message: str


def can_view_unapproved_jobs(viewer: User | None) -> bool:
    return viewer is not None and viewer.role in (EMPLOYER, ADMIN)


def visible_jobs_query(db: Session, viewer: User | None) -> Query:
    query = db.query(Job)
    if not can_view_unapproved_jobs(viewer):
        query = query.filter(Job.status == APPROVED)
    return query


def visible_applicants(job: Job, viewer: User | None) -> list[JobApplication]:
    if viewer is None:
        return []
    if viewer.role == ADMIN or (viewer.role == EMPLOYER and job.employer_id == viewer.id):
        return list(job.applicants)
    if viewer.role == CANDIDATE:
        return [entry for entry in job.applicants if entry.candidate_id == viewer.id]
    return []


def serialize_job(job: Job, viewer: User | None) -> JobResponse:
    applicants = visible_applicants(job, viewer)
    has_applied = None
    if viewer is not None and viewer.role == CANDIDATE:
        has_applied = bool(applicants)

    return JobResponse(
        id=job.id,
        title=job.title,
        description=job.description,
        company=job.company,
        employer_id=job.employer_id,
        employer_name=job.employer.name if job.employer else None,
        status=job.status,
        created_at=job.created_at,
        updated_at=job.updated_at,
        applicants=[
            ApplicantResponse(candidate_id=entry.candidate_id, applied_at=entry.applied_at)
            for entry in applicants
        ],
        applicant_count=len(job.applicants),
        has_applied=has_applied,
    )


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if job is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Job not found',
        )
    return job


def ensure_job_owner(job: Job, user: User, action: str) -> None:
    if job.employer_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f'Not authorized to {action} this job',
        )


@router.get('/jobs', response_model=list[JobResponse])
def list_jobs(
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        jobs = visible_jobs_query(db, viewer).order_by(Job.created_at.desc(), Job.id.desc()).all()
        return [serialize_job(job, viewer) for job in jobs]
    except SQLAlchemyError as exc:
        raise database_error(exc) from exc


@router.get('/jobs/{job_id}', response_model=JobResponse)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    try:
        job = visible_jobs_query(db, viewer).filter(Job.id == job_id).first()
        if job is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail='Job not found',
            )
        return serialize_job(job, viewer)
    except SQLAlchemyError as exc:
        raise database_error(exc) from exc


@router.post('/jobs', response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    data: CreateJobRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(EMPLOYER)),
):
    try:
        job = Job(
            title=data.title,
            description=data.description,
            company=data.company,
            employer_id=current_user.id,
            status=PENDING,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info('Employer %s created job %s', current_user.id, job.id)
    return serialize_job(job, current_user)


@router.put('/jobs/{job_id}', response_model=JobResponse)
def update_job(
    job_id: int,
    data: UpdateJobRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(EMPLOYER)),
):
    try:
        job = get_job_or_404(db, job_id)
        ensure_job_owner(job, current_user, 'edit')

        if data.title is not None:
            job.title = data.title
        if data.company is not None:
            job.company = data.company
        if data.description is not None:
            job.description = data.description

        db.commit()
        db.refresh(job)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info('Employer %s edited job %s', current_user.id, job.id)
    return serialize_job(job, current_user)


@router.delete('/jobs/{job_id}', response_model=MessageResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(EMPLOYER)),
):
    try:
        job = get_job_or_404(db, job_id)
        ensure_job_owner(job, current_user, 'delete')

        db.delete(job)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info('Employer %s deleted job %s', current_user.id, job_id)
    return MessageResponse(message='Job removed')


@router.post('/jobs/{job_id}/apply', response_model=MessageResponse)
def apply_to_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(CANDIDATE)),
):
    try:
        job = get_job_or_404(db, job_id)

        already_applied = any(entry.candidate_id == current_user.id for entry in job.applicants)
        if already_applied:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Already applied',
            )

        job.applicants.append(JobApplication(candidate_id=current_user.id, applied_at=utc_now()))
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Already applied',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info('Candidate %s applied to job %s', current_user.id, job_id)
    return MessageResponse(message='Application successful')
