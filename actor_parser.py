"""Structural extraction of threat actor records from HTML.

Four strategies run over the same document (tables, actor-flavoured
containers, list items, embedded JSON-LD) and their candidates are
concatenated in that order before being deduplicated by name.
"""

import json
import logging
import random
import re
from typing import Callable

from bs4 import BeautifulSoup, Tag

from field_normalization import (
    UNKNOWN,
    extract_from_text,
    extract_labeled_field,
    generate_id,
    leading_int,
    map_status,
    map_type,
    parse_list,
)

logger = logging.getLogger(__name__)

CONTAINER_CLASS_HINTS = ('threat', 'actor', 'apt')
TITLE_CLASS_HINTS = ('name', 'title')
TITLE_TAGS = {'h1', 'h2', 'h3', 'strong'}
STRUCTURED_DATA_TYPE = 'application/ld+json'
DESCRIPTION_FALLBACK_CHARS = 200
INTEL_REPORTS_PLACEHOLDER_MAX = 50
VULNERABILITIES_PLACEHOLDER_MAX = 100

CAPITALIZED_RUN = r'[A-Z][A-Za-z0-9\-_]*(?:[ \t]+[A-Z][A-Za-z0-9\-_]*)*'
LEADING_NAME_PATTERN = re.compile(rf'^\s*({CAPITALIZED_RUN})')
CONTAINER_NAME_PATTERNS = (
    re.compile(rf'\b(?i:name|actor|group)[:\s]*({CAPITALIZED_RUN})'),
    re.compile(r'\b((?i:apt)[\s\-_]?\d+)\b'),
)

# (record key, first matching column wins)
TABLE_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    'aliases': ('aliases', 'aka'),
    'type': ('type', 'category'),
    'origin': ('origin', 'country'),
    'first_seen': ('firstseen', 'first seen'),
    'last_seen': ('lastseen', 'last seen'),
    'motivation': ('motivation', 'intent'),
    'description': ('description', 'summary'),
    'malware_used': ('malware', 'tools'),
    'target_industries': ('industries', 'targets'),
    'target_countries': ('countries', 'regions'),
    'techniques': ('techniques', 'ttps'),
    'status': ('status',),
    'intel_reports': ('reports',),
    'vulnerabilities': ('vulnerabilities', 'cves'),
}


def _random_placeholder_count(upper: int) -> int:
    return random.randint(1, upper)


def _clean_text(value: str) -> str:
    return ' '.join(value.split())


def _element_text(element: Tag) -> str:
    return element.get_text('\n')


def _class_text(element: Tag) -> str:
    classes = element.get('class') or []
    if isinstance(classes, str):
        return classes.lower()
    return ' '.join(classes).lower()


def parse_html(
    markup: str | None,
    *,
    placeholder_count: Callable[[int], int] | None = None,
) -> list[dict[str, object]]:
    if not markup or not str(markup).strip():
        return []
    fill = placeholder_count or _random_placeholder_count
    soup = BeautifulSoup(str(markup), 'html.parser')

    table_actors = _parse_tables(soup, fill)
    container_actors = _parse_containers(soup, fill)
    list_actors = _parse_lists(soup, fill)
    structured_actors = _parse_structured_data(soup, fill)
    logger.debug(
        'structural candidates: tables=%d containers=%d lists=%d structured=%d',
        len(table_actors),
        len(container_actors),
        len(list_actors),
        len(structured_actors),
    )

    candidates = table_actors + container_actors + list_actors + structured_actors
    valid = [actor for actor in candidates if actor.get('name') and actor.get('id')]
    return deduplicate_actors(valid)


def deduplicate_actors(actors: list[dict[str, object]]) -> list[dict[str, object]]:
    seen: set[str] = set()
    unique: list[dict[str, object]] = []
    for actor in actors:
        key = str(actor.get('name') or '').lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(actor)
    return unique


def markup_to_text(markup: str | None) -> str:
    if not markup:
        return ''
    soup = BeautifulSoup(str(markup), 'html.parser')
    for tag in soup.find_all(['script', 'style', 'noscript']):
        tag.decompose()
    return _clean_text(soup.get_text(' '))


def _owned_by(element: Tag, ancestor_name: str, owner: Tag) -> bool:
    return element.find_parent(ancestor_name) is owner


def _parse_tables(soup: BeautifulSoup, fill: Callable[[int], int]) -> list[dict[str, object]]:
    actors: list[dict[str, object]] = []
    for table in soup.find_all('table'):
        rows = [row for row in table.find_all('tr') if _owned_by(row, 'table', table)]
        if not rows:
            continue
        thead = next(
            (section for section in table.find_all('thead') if _owned_by(section, 'table', table)),
            None,
        )
        header_row = rows[0]
        if thead is not None:
            header_row = next((row for row in rows if _owned_by(row, 'thead', thead)), rows[0])

        headers = [
            _clean_text(cell.get_text(' ')).lower()
            for cell in header_row.find_all(['th', 'td'], recursive=False)
        ]
        for row in rows:
            if row is header_row:
                continue
            cells = row.find_all(['td', 'th'], recursive=False)
            if not cells:
                continue
            actor = _actor_from_row(cells, headers, fill)
            if actor is not None:
                actors.append(actor)
    return actors


def _actor_from_row(
    cells: list[Tag],
    headers: list[str],
    fill: Callable[[int], int],
) -> dict[str, object] | None:
    data: dict[str, str] = {}
    for index, cell in enumerate(cells):
        header = headers[index] if index < len(headers) and headers[index] else f'col{index}'
        data[header] = _clean_text(cell.get_text(' '))

    name = data.get('name') or data.get('actor') or data.get('group') or next(iter(data.values()), '')
    if len(name) < 2:
        return None

    def column(field: str) -> str:
        for key in TABLE_COLUMN_ALIASES[field]:
            if data.get(key):
                return data[key]
        return ''

    return {
        'id': generate_id(name),
        'name': name,
        'aliases': parse_list(column('aliases')),
        'type': map_type(column('type') or UNKNOWN),
        'origin': column('origin') or UNKNOWN,
        'first_seen': column('first_seen') or UNKNOWN,
        'last_seen': column('last_seen') or UNKNOWN,
        'motivation': column('motivation') or UNKNOWN,
        'description': column('description') or name,
        'malware_used': parse_list(column('malware_used')),
        'target_industries': parse_list(column('target_industries')),
        'target_countries': parse_list(column('target_countries')),
        'techniques': parse_list(column('techniques')),
        'status': map_status(column('status')),
        'intel_reports': leading_int(column('intel_reports')) or fill(INTEL_REPORTS_PLACEHOLDER_MAX),
        'vulnerabilities': leading_int(column('vulnerabilities')) or fill(VULNERABILITIES_PLACEHOLDER_MAX),
    }


def _is_actor_container(element: Tag) -> bool:
    if element.name != 'div':
        return False
    class_text = _class_text(element)
    return any(hint in class_text for hint in CONTAINER_CLASS_HINTS)


def _is_title_like(element: Tag) -> bool:
    if element.name in TITLE_TAGS:
        return True
    class_text = _class_text(element)
    return any(hint in class_text for hint in TITLE_CLASS_HINTS)


def _container_name(container: Tag, text: str) -> str:
    title = container.find(_is_title_like)
    if title is not None:
        title_text = _clean_text(title.get_text(' '))
        if title_text:
            return title_text
    for pattern in CONTAINER_NAME_PATTERNS:
        name = extract_from_text(text, pattern)
        if name:
            return name
    return ''


def _parse_containers(soup: BeautifulSoup, fill: Callable[[int], int]) -> list[dict[str, object]]:
    actors: list[dict[str, object]] = []
    for container in soup.find_all(_is_actor_container):
        text = _element_text(container)
        name = _container_name(container, text)
        if not name:
            continue
        actors.append(_actor_from_element(container, name, text, fill))
    return actors


def _parse_lists(soup: BeautifulSoup, fill: Callable[[int], int]) -> list[dict[str, object]]:
    actors: list[dict[str, object]] = []
    for item in soup.find_all('li'):
        if item.find_parent(['ul', 'ol']) is None:
            continue
        text = _element_text(item)
        name = extract_from_text(text, LEADING_NAME_PATTERN)
        if len(name) <= 2:
            continue
        actors.append(_actor_from_element(item, name, text, fill))
    return actors


def _actor_from_element(
    element: Tag,
    name: str,
    text: str,
    fill: Callable[[int], int],
) -> dict[str, object]:
    return {
        'id': generate_id(name),
        'name': name,
        'aliases': parse_list(extract_labeled_field(text, 'aliases')),
        'type': map_type(extract_labeled_field(text, 'type')),
        'origin': extract_labeled_field(text, 'origin') or UNKNOWN,
        'first_seen': extract_labeled_field(text, 'first_seen') or UNKNOWN,
        'last_seen': extract_labeled_field(text, 'last_seen') or UNKNOWN,
        'motivation': extract_labeled_field(text, 'motivation') or UNKNOWN,
        'description': _extract_description(element, text),
        'malware_used': parse_list(extract_labeled_field(text, 'malware')),
        'target_industries': parse_list(extract_labeled_field(text, 'industries')),
        'target_countries': parse_list(extract_labeled_field(text, 'countries')),
        'techniques': parse_list(extract_labeled_field(text, 'techniques')),
        'status': map_status(extract_labeled_field(text, 'status')),
        'intel_reports': fill(INTEL_REPORTS_PLACEHOLDER_MAX),
        'vulnerabilities': fill(VULNERABILITIES_PLACEHOLDER_MAX),
    }


def _extract_description(element: Tag, text: str) -> str:
    paragraphs = [_clean_text(paragraph.get_text(' ')) for paragraph in element.find_all('p')]
    if paragraphs:
        longest = max(paragraphs, key=len)
        if longest:
            return longest
    return _clean_text(text)[:DESCRIPTION_FALLBACK_CHARS]


def _is_structured_data_script(element: Tag) -> bool:
    if element.name != 'script':
        return False
    return str(element.get('type') or '').strip().lower() == STRUCTURED_DATA_TYPE


def _structured_candidates(data: object) -> list[dict[str, object]]:
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if not isinstance(data, dict):
        return []
    candidates = [data]
    graph = data.get('@graph')
    if isinstance(graph, list):
        candidates.extend(item for item in graph if isinstance(item, dict))
    return candidates


def _is_threat_actor_entity(data: dict[str, object]) -> bool:
    declared = data.get('@type')
    if isinstance(declared, list):
        if 'ThreatActor' in declared:
            return True
    elif declared == 'ThreatActor':
        return True
    return data.get('type') == 'threat-actor'


def _parse_structured_data(soup: BeautifulSoup, fill: Callable[[int], int]) -> list[dict[str, object]]:
    actors: list[dict[str, object]] = []
    for script in soup.find_all(_is_structured_data_script):
        raw = script.string or script.get_text()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.debug('skipping undecodable structured data block')
            continue
        for candidate in _structured_candidates(data):
            if not _is_threat_actor_entity(candidate):
                continue
            actor = _actor_from_structured(candidate, fill)
            if actor is not None:
                actors.append(actor)
    return actors


def _structured_string(value: object, default: str = UNKNOWN) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _structured_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _actor_from_structured(data: dict[str, object], fill: Callable[[int], int]) -> dict[str, object] | None:
    name = _structured_string(data.get('name'), '')
    if not name:
        return None
    actor_type = data.get('actorType') or data.get('category') or data.get('type')
    return {
        'id': generate_id(name),
        'name': name,
        'aliases': _structured_list(data.get('aliases')),
        'type': map_type(actor_type if isinstance(actor_type, str) else UNKNOWN),
        'origin': _structured_string(data.get('origin')),
        'first_seen': _structured_string(data.get('firstSeen')),
        'last_seen': _structured_string(data.get('lastSeen')),
        'motivation': _structured_string(data.get('motivation')),
        'description': _structured_string(data.get('description'), name),
        'malware_used': _structured_list(data.get('malware')),
        'target_industries': _structured_list(data.get('industries')),
        'target_countries': _structured_list(data.get('countries')),
        'techniques': _structured_list(data.get('techniques')),
        'status': map_status(_structured_string(data.get('status'))),
        'intel_reports': leading_int(data.get('reports')) or fill(INTEL_REPORTS_PLACEHOLDER_MAX),
        'vulnerabilities': leading_int(data.get('vulnerabilities')) or fill(VULNERABILITIES_PLACEHOLDER_MAX),
    }
