import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

import actor_parser
import actor_store
import intel_extraction
import network_safety
from routes_api import create_api_router
from routes_dashboard import create_dashboard_router

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').strip().upper() or 'INFO'
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

DB_PATH = os.environ.get('THREAT_CATALOG_DB_PATH', '/data/app.db')
BASE_DIR = Path(__file__).resolve().parent
SEED_SAMPLE_ACTORS = os.environ.get('THREAT_CATALOG_SEED', '1').strip().lower() not in {
    '0', 'false', 'no', 'off',
}
OUTBOUND_ALLOWED_DOMAINS = {
    domain.strip().lower()
    for domain in os.environ.get('OUTBOUND_ALLOWED_DOMAINS', '').split(',')
    if domain.strip()
}
FETCH_TIMEOUT_SECONDS = float(os.environ.get('FETCH_TIMEOUT_SECONDS', '20'))
FETCH_MAX_BYTES = max(1, int(os.environ.get('FETCH_MAX_BYTES', str(5 * 1024 * 1024))))
DEFAULT_BODY_LIMIT_BYTES = 256 * 1024
IMPORT_BODY_LIMIT_BYTES = max(1, int(os.environ.get('IMPORT_BODY_LIMIT_BYTES', str(2 * 1024 * 1024))))
IMPORT_PATH_PREFIXES = ('/import/', '/intel/')

templates = Jinja2Templates(directory=str(BASE_DIR / 'templates'))


def _prepare_db_path(path_value: str) -> str:
    db_parent = str(Path(path_value).resolve().parent)
    os.makedirs(db_parent, exist_ok=True)
    return path_value


def _resolve_startup_db_path() -> str:
    try:
        return _prepare_db_path(DB_PATH)
    except PermissionError:
        fallback = str(BASE_DIR / 'app.db')
        logger.warning('database path %s is not writable, using %s', DB_PATH, fallback)
        return _prepare_db_path(fallback)


def initialize_sqlite() -> None:
    global DB_PATH
    DB_PATH = _resolve_startup_db_path()
    actor_store.configure(db_path=DB_PATH)
    actor_store.initialize_store(seed=SEED_SAMPLE_ACTORS)
    logger.info('catalog ready at %s', DB_PATH)


@asynccontextmanager
async def app_lifespan(_: FastAPI):
    initialize_sqlite()
    yield


app = FastAPI(lifespan=app_lifespan)


def _request_body_limit_bytes(method: str, path: str) -> int:
    if method.upper() not in {'POST', 'PUT', 'PATCH'}:
        return 0
    if path.startswith(IMPORT_PATH_PREFIXES):
        return IMPORT_BODY_LIMIT_BYTES
    return DEFAULT_BODY_LIMIT_BYTES


async def _enforce_request_size(request: Request, limit: int) -> None:
    if limit <= 0:
        return
    content_length = request.headers.get('content-length', '').strip()
    if content_length.isdigit() and int(content_length) > limit:
        raise HTTPException(
            status_code=413,
            detail=f'Request body too large. Limit for this endpoint is {limit} bytes.',
        )
    body = await request.body()
    if len(body) > limit:
        raise HTTPException(
            status_code=413,
            detail=f'Request body too large. Limit for this endpoint is {limit} bytes.',
        )


@app.middleware('http')
async def add_security_headers(request: Request, call_next):
    limit = _request_body_limit_bytes(request.method, request.url.path)
    if limit > 0:
        content_length = request.headers.get('content-length', '').strip()
        if content_length.isdigit() and int(content_length) > limit:
            return JSONResponse(
                status_code=413,
                content={'detail': f'Request body too large. Limit for this endpoint is {limit} bytes.'},
            )

    response = await call_next(request)
    csp_policy = (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; "
        "object-src 'none'; "
        "base-uri 'self'; "
        "form-action 'self'; "
        "frame-ancestors 'none'"
    )
    response.headers.setdefault('Content-Security-Policy', csp_policy)
    response.headers.setdefault('X-Content-Type-Options', 'nosniff')
    response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
    response.headers.setdefault('X-Frame-Options', 'DENY')
    return response


def fetch_remote_text(source_url: str) -> str:
    return network_safety.fetch_remote_text(
        source_url,
        timeout=FETCH_TIMEOUT_SECONDS,
        max_bytes=FETCH_MAX_BYTES,
        allowed_domains=OUTBOUND_ALLOWED_DOMAINS or None,
    )


app.include_router(
    create_api_router(
        deps={
            'list_actors': lambda: actor_store.list_actors(),
            'get_actor': lambda actor_id: actor_store.get_actor(actor_id),
            'insert_actor': lambda actor: actor_store.insert_actor(actor),
            'update_actor': lambda actor: actor_store.update_actor(actor),
            'import_actors': lambda actors: actor_store.import_actors(actors),
            'parse_html': lambda markup: actor_parser.parse_html(markup),
            'extract_intel': lambda text, source_url=None: intel_extraction.extract_intel(text, source_url),
            'markup_to_text': lambda markup: actor_parser.markup_to_text(markup),
            'fetch_remote_text': lambda source_url: fetch_remote_text(source_url),
            'enforce_request_size': _enforce_request_size,
            'default_body_limit_bytes': DEFAULT_BODY_LIMIT_BYTES,
            'import_body_limit_bytes': IMPORT_BODY_LIMIT_BYTES,
        }
    )
)
app.include_router(
    create_dashboard_router(
        deps={
            'list_actors': lambda: actor_store.list_actors(),
            'get_actor': lambda actor_id: actor_store.get_actor(actor_id),
            'templates': templates,
        }
    )
)
