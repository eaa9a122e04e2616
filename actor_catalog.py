from typing import Sequence

from fastapi import HTTPException

from field_normalization import (
    ACTOR_STATUSES,
    ACTOR_TYPES,
    DEFAULT_ACTOR_TYPE,
    UNKNOWN,
    generate_id,
    map_status,
    map_type,
)
from intel_extraction import UNKNOWN_ACTOR

LIST_FIELDS = ('aliases', 'malware_used', 'target_industries', 'target_countries', 'techniques')
TEXT_FIELDS = ('origin', 'first_seen', 'last_seen', 'motivation')
COUNT_FIELDS = ('intel_reports', 'vulnerabilities')
SEARCHABLE_TEXT_FIELDS = ('name', 'description', 'origin', 'type', 'motivation')
SEARCHABLE_LIST_FIELDS = ('aliases', 'malware_used', 'target_industries', 'target_countries')

# (intel key, form key)
INTEL_LIST_FIELDS = (
    ('aliases', 'aliases'),
    ('malware', 'malware_used'),
    ('industries', 'target_industries'),
    ('countries', 'target_countries'),
    ('techniques', 'techniques'),
)


def normalize_form_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    if not isinstance(value, list):
        raise HTTPException(status_code=400, detail='list fields must be arrays or comma-separated text')
    normalized: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise HTTPException(status_code=400, detail='list values must be strings')
        if item.strip():
            normalized.append(item.strip())
    return normalized


def normalize_form_count(value: object) -> int:
    if value is None or value == '':
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail='count fields must be integers') from exc
    return max(0, count)


def build_actor_from_form_core(
    form: dict[str, object],
    *,
    existing_id: str | None = None,
) -> dict[str, object]:
    name = str(form.get('name') or '').strip()
    if not name:
        raise HTTPException(status_code=400, detail='Actor name is required')
    actor_id = existing_id or generate_id(name)
    if not actor_id:
        raise HTTPException(status_code=400, detail='Actor name must contain letters or digits')

    actor_type = str(form.get('type') or DEFAULT_ACTOR_TYPE).strip()
    if actor_type not in ACTOR_TYPES:
        actor_type = map_type(actor_type)
    status = str(form.get('status') or UNKNOWN).strip()
    if status not in ACTOR_STATUSES:
        status = map_status(status)

    actor: dict[str, object] = {
        'id': actor_id,
        'name': name,
        'type': actor_type,
        'status': status,
        'description': str(form.get('description') or ''),
    }
    for field in TEXT_FIELDS:
        actor[field] = str(form.get(field) or '').strip() or UNKNOWN
    for field in LIST_FIELDS:
        actor[field] = normalize_form_list(form.get(field))
    for field in COUNT_FIELDS:
        actor[field] = normalize_form_count(form.get(field))
    return actor


def filter_actors_core(actors: Sequence[dict[str, object]], query: str | None) -> list[dict[str, object]]:
    needle = str(query or '').strip().lower()
    if not needle:
        return list(actors)

    def _matches(actor: dict[str, object]) -> bool:
        for field in SEARCHABLE_TEXT_FIELDS:
            if needle in str(actor.get(field) or '').lower():
                return True
        for field in SEARCHABLE_LIST_FIELDS:
            values = actor.get(field) or []
            if any(needle in str(value).lower() for value in values):
                return True
        return False

    return [actor for actor in actors if _matches(actor)]


def merge_import_core(
    existing_ids: set[str],
    incoming: Sequence[dict[str, object]],
) -> tuple[list[dict[str, object]], list[dict[str, object]]]:
    seen = set(existing_ids)
    accepted: list[dict[str, object]] = []
    skipped: list[dict[str, object]] = []
    for actor in incoming:
        actor_id = str(actor.get('id') or '')
        if not actor_id or actor_id in seen:
            skipped.append(actor)
            continue
        seen.add(actor_id)
        accepted.append(actor)
    return (accepted, skipped)


def apply_intel_to_form_core(form: dict[str, object], intel: dict[str, object]) -> dict[str, object]:
    merged = dict(form)
    actor_name = str(intel.get('actor_name') or '').strip()
    if actor_name and actor_name != UNKNOWN_ACTOR:
        merged['name'] = actor_name

    for intel_key, form_key in INTEL_LIST_FIELDS:
        existing = form.get(form_key) or []
        if isinstance(existing, str):
            existing = normalize_form_list(existing)
        extracted = intel.get(intel_key) or []
        merged[form_key] = [value for value in [*existing, *extracted] if value]

    summary = str(intel.get('summary') or '')
    if summary:
        merged['description'] = summary
    return merged
