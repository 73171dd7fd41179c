import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from agenda.core import config
from agenda.core.errors import register_error_handlers
from agenda.database import db_healthcheck, init_db
from agenda.routes import admin_routes, auth_routes, class_routes, task_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

logger = logging.getLogger(__name__)

app = FastAPI(title='Agenda API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

register_error_handlers(app)


@app.middleware('http')
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info('%s %s -> %s (%.1f ms)', request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Agenda API running'}


@app.get('/health/db')
def health_db():
    ok, _error = db_healthcheck()
    return {'database': 'ok' if ok else 'error'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(class_routes.router, prefix='/classes')
app.include_router(task_routes.router, prefix='/tasks')
app.include_router(admin_routes.router, prefix='/admin')
