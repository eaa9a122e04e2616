from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

import actor_catalog

TYPE_BADGES = {
    'APT': 'badge-apt',
    'Ransomware': 'badge-ransomware',
    'eCrime': 'badge-ecrime',
    'Nation State': 'badge-nation-state',
    'Hacktivist': 'badge-hacktivist',
}
CARD_PREVIEW_ITEMS = 3


def render_catalog_root(
    *,
    request: Request,
    query: str | None,
    deps: dict[str, object],
) -> HTMLResponse:
    _list_actors = deps['list_actors']
    _templates = deps['templates']

    actors_all = _list_actors()
    actors = actor_catalog.filter_actors_core(actors_all, query)
    cards = [
        {
            'id': actor['id'],
            'name': actor['name'],
            'type': actor['type'],
            'badge': TYPE_BADGES.get(str(actor['type']), 'badge-ecrime'),
            'status': actor['status'],
            'origin': actor['origin'],
            'aliases': list(actor['aliases'])[:CARD_PREVIEW_ITEMS],
            'malware_preview': list(actor['malware_used'])[:CARD_PREVIEW_ITEMS],
            'technique_count': len(actor['techniques']),
        }
        for actor in actors
    ]
    return _templates.TemplateResponse(
        request,
        'index.html',
        {
            'cards': cards,
            'query': query or '',
            'total_count': len(actors_all),
            'match_count': len(actors),
        },
    )


def render_actor_detail(
    *,
    request: Request,
    actor_id: str,
    deps: dict[str, object],
) -> HTMLResponse:
    _get_actor = deps['get_actor']
    _templates = deps['templates']

    try:
        actor = _get_actor(actor_id)
    except HTTPException:
        return _templates.TemplateResponse(
            request,
            'actor_detail.html',
            {'actor': None, 'notice': 'Actor not found.'},
            status_code=404,
        )
    return _templates.TemplateResponse(
        request,
        'actor_detail.html',
        {
            'actor': actor,
            'badge': TYPE_BADGES.get(str(actor['type']), 'badge-ecrime'),
            'notice': None,
        },
    )


def create_dashboard_router(*, deps: dict[str, object]) -> APIRouter:
    router = APIRouter()

    @router.get('/', response_class=HTMLResponse)
    def catalog_root(request: Request, q: str | None = None) -> HTMLResponse:
        return render_catalog_root(request=request, query=q, deps=deps)

    @router.get('/actors/{actor_id}/view', response_class=HTMLResponse)
    def actor_detail(request: Request, actor_id: str) -> HTMLResponse:
        return render_actor_detail(request=request, actor_id=actor_id, deps=deps)

    return router
