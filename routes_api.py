import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

import actor_catalog
from field_normalization import generate_id
from network_safety import OutboundURLError, RemoteFetchError

logger = logging.getLogger(__name__)

FETCH_FAILED_DETAIL = 'Could not retrieve content from URL'


async def read_json_object(request: Request) -> dict[str, object]:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail='request body must be valid JSON') from exc
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail='request body must be a JSON object')
    return payload


def create_api_router(*, deps: dict[str, object]) -> APIRouter:
    router = APIRouter()

    _list_actors = deps['list_actors']
    _get_actor = deps['get_actor']
    _insert_actor = deps['insert_actor']
    _update_actor = deps['update_actor']
    _import_actors = deps['import_actors']
    _parse_html = deps['parse_html']
    _extract_intel = deps['extract_intel']
    _markup_to_text = deps['markup_to_text']
    _fetch_remote_text = deps['fetch_remote_text']
    _enforce_request_size = deps['enforce_request_size']
    _default_body_limit_bytes = deps['default_body_limit_bytes']
    _import_body_limit_bytes = deps['import_body_limit_bytes']

    async def _fetch_or_fail(source_url: str) -> str:
        if not source_url:
            raise HTTPException(status_code=400, detail='source_url is required')
        try:
            return await run_in_threadpool(_fetch_remote_text, source_url)
        except OutboundURLError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RemoteFetchError as exc:
            raise HTTPException(status_code=502, detail=FETCH_FAILED_DETAIL) from exc

    @router.get('/health')
    def health() -> dict[str, str]:
        return {'status': 'ok'}

    @router.get('/actors')
    def get_actors(q: str | None = None) -> list[dict[str, object]]:
        return actor_catalog.filter_actors_core(_list_actors(), q)

    @router.get('/actors/{actor_id}')
    def get_actor(actor_id: str) -> dict[str, object]:
        return _get_actor(actor_id)

    @router.post('/actors', status_code=201)
    async def create_actor(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _default_body_limit_bytes)
        payload = await read_json_object(request)
        actor = actor_catalog.build_actor_from_form_core(payload)
        return _insert_actor(actor)

    @router.put('/actors/{actor_id}')
    async def update_actor(actor_id: str, request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _default_body_limit_bytes)
        payload = await read_json_object(request)
        actor = actor_catalog.build_actor_from_form_core(payload, existing_id=actor_id)
        return _update_actor(actor)

    @router.post('/import/parse')
    async def import_parse(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _import_body_limit_bytes)
        payload = await read_json_object(request)
        actors = _parse_html(str(payload.get('markup') or ''))
        return {'actors': actors, 'count': len(actors)}

    @router.post('/import/fetch')
    async def import_fetch(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _default_body_limit_bytes)
        payload = await read_json_object(request)
        source_url = str(payload.get('source_url') or '').strip()
        content = await _fetch_or_fail(source_url)
        actors = _parse_html(content)
        logger.info('parsed %d actors from %s', len(actors), source_url)
        return {'actors': actors, 'count': len(actors), 'source_url': source_url}

    @router.post('/import/commit')
    async def import_commit(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _import_body_limit_bytes)
        payload = await read_json_object(request)
        incoming = payload.get('actors')
        if not isinstance(incoming, list):
            raise HTTPException(status_code=400, detail='actors must be an array')
        actors: list[dict[str, object]] = []
        for item in incoming:
            if not isinstance(item, dict):
                raise HTTPException(status_code=400, detail='actors must contain objects')
            existing_id = generate_id(str(item.get('id') or '')) or None
            actors.append(actor_catalog.build_actor_from_form_core(item, existing_id=existing_id))
        return _import_actors(actors)

    @router.post('/intel/extract')
    async def intel_extract(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _import_body_limit_bytes)
        payload = await read_json_object(request)
        source_url = str(payload.get('source_url') or '').strip() or None
        return _extract_intel(str(payload.get('text') or ''), source_url)

    @router.post('/intel/fetch')
    async def intel_fetch(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _default_body_limit_bytes)
        payload = await read_json_object(request)
        source_url = str(payload.get('source_url') or '').strip()
        content = await _fetch_or_fail(source_url)
        return _extract_intel(_markup_to_text(content), source_url)

    @router.post('/intel/apply')
    async def intel_apply(request: Request) -> dict[str, object]:
        await _enforce_request_size(request, _default_body_limit_bytes)
        payload = await read_json_object(request)
        form = payload.get('form') or {}
        intel = payload.get('intel')
        if not isinstance(form, dict) or not isinstance(intel, dict):
            raise HTTPException(status_code=400, detail='form and intel must be objects')
        return actor_catalog.apply_intel_to_form_core(form, intel)

    return router
