import os

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
os.environ.setdefault('BCRYPT_ROUNDS', '4')

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from backend.auth import passwords  # noqa: E402
from backend.database import Base  # noqa: E402
from backend.models.job import PENDING, Job  # noqa: E402
from backend.models.user import ADMIN, CANDIDATE, EMPLOYER, User  # noqa: E402


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    def _make_user(role: str, email: str | None = None, name: str = 'Test User', password: str = 'secret123') -> User:
        user = User(
            name=name,
            email=email or f'{role}-{db.query(User).count() + 1}@example.com',
            hashed_password=passwords.hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def employer(make_user) -> User:
    return make_user(EMPLOYER, name='Acme Recruiter')


@pytest.fixture
def candidate(make_user) -> User:
    return make_user(CANDIDATE, name='Casey Candidate')


@pytest.fixture
def admin(make_user) -> User:
    return make_user(ADMIN, name='Ada Admin')


@pytest.fixture
def make_job(db):
    def _make_job(owner: User, status: str = PENDING, title: str = 'Backend Engineer') -> Job:
        job = Job(
            title=title,
            description='Build and run APIs.',
            company='Acme',
            employer_id=owner.id,
            status=status,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return _make_job
