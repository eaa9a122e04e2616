"""Label vocabularies and small normalizers shared by the extractors and the catalog."""

import re

ACTOR_TYPES = ('APT', 'Ransomware', 'eCrime', 'Nation State', 'Hacktivist')
ACTOR_STATUSES = ('Active', 'Inactive', 'Unknown')
DEFAULT_ACTOR_TYPE = 'eCrime'
UNKNOWN = 'Unknown'

# Longest synonym first so "Aliases" is not consumed as "Alias" + "es".
LABEL_SYNONYMS: dict[str, tuple[str, ...]] = {
    'aliases': ('Also known as', 'Aliases', 'Alias', 'AKA'),
    'type': ('Category', 'Type'),
    'origin': ('Origin', 'Country', 'Region'),
    'first_seen': ('First seen', 'Active since', 'Since'),
    'last_seen': ('Last seen', 'Recent'),
    'motivation': ('Motivation', 'Intent', 'Goal'),
    'malware': ('Malware', 'Software', 'Tools'),
    'industries': ('Industries', 'Sectors', 'Targets'),
    'countries': ('Countries', 'Geography', 'Regions'),
    'techniques': ('Techniques', 'MITRE', 'TTPs'),
    'status': ('Status', 'State'),
}

# Checked in order; first keyword hit decides the type.
TYPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ('APT', ('apt', 'advanced')),
    ('Ransomware', ('ransom',)),
    ('eCrime', ('crime', 'criminal')),
    ('Nation State', ('nation', 'state')),
    ('Hacktivist', ('hack', 'activist')),
)

LIST_SEPARATOR_PATTERN = re.compile(r'[,;|]')
SLUG_SEPARATOR_PATTERN = re.compile(r'[^a-z0-9]+')


def labeled_field_pattern(labels: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = '|'.join(re.escape(label).replace(r'\ ', r'\s+') for label in labels)
    return re.compile(rf'\b(?:{alternatives})\b[:\s]*([^.\n]+)', flags=re.IGNORECASE)


LABELED_FIELD_PATTERNS: dict[str, re.Pattern[str]] = {
    field: labeled_field_pattern(labels) for field, labels in LABEL_SYNONYMS.items()
}


def extract_from_text(text: str, pattern: re.Pattern[str] | str) -> str:
    match = re.search(pattern, text or '')
    if not match:
        return ''
    return match.group(1).strip()


def extract_labeled_field(text: str, field: str) -> str:
    return extract_from_text(text, LABELED_FIELD_PATTERNS[field])


def parse_list(text: str | None) -> list[str]:
    if not text:
        return []
    pieces = [piece.strip() for piece in LIST_SEPARATOR_PATTERN.split(text)]
    return [piece for piece in pieces if piece]


def map_type(value: str | None) -> str:
    lowered = str(value or '').lower()
    for actor_type, keywords in TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return actor_type
    return DEFAULT_ACTOR_TYPE


def map_status(value: str | None) -> str:
    lowered = str(value or '').lower()
    # "inactive" contains "active", so it has to be tested first.
    if 'inactive' in lowered or 'dormant' in lowered:
        return 'Inactive'
    if 'active' in lowered:
        return 'Active'
    return UNKNOWN


def generate_id(name: str | None) -> str:
    lowered = str(name or '').lower()
    return SLUG_SEPARATOR_PATTERN.sub('-', lowered).strip('-')


def leading_int(value: object) -> int:
    match = re.match(r'\s*(\d+)', str(value or ''))
    return int(match.group(1)) if match else 0


def unique_capped(values: list[str], limit: int) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
        if len(unique) >= limit:
            break
    return unique
