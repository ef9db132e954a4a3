import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.database import Base, engine
from backend.models import job, user  # noqa: F401  registers tables on Base.metadata
from backend.routes import admin_routes, auth_routes, job_routes

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI(title='Job Portal API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={'detail': 'Internal server error.'})


@app.get('/')
def root():
    return {'status': 'Job Portal API Running'}


app.include_router(auth_routes.router, prefix=config.API_PREFIX)
app.include_router(job_routes.router, prefix=config.API_PREFIX)
app.include_router(admin_routes.router, prefix=f'{config.API_PREFIX}/admin')
