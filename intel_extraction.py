"""Keyword and pattern sweep that turns report prose into one intelligence summary.

Every list keeps first-seen order, drops exact duplicates and is capped.
Confidence is scored from the raw match counts before deduplication.
"""

import logging
import re

from field_normalization import unique_capped

logger = logging.getLogger(__name__)

UNKNOWN_ACTOR = 'Unknown Actor'
SUMMARY_CHARS = 300

ACTOR_NAME_PATTERNS = (
    re.compile(r'\bapt[- ]?\d+', re.IGNORECASE),
    re.compile(r'\blazarus', re.IGNORECASE),
    re.compile(r'\bfancy bear', re.IGNORECASE),
    re.compile(r'\bcozy bear', re.IGNORECASE),
    re.compile(r'\bcarbanak', re.IGNORECASE),
    re.compile(r'\bequation', re.IGNORECASE),
    re.compile(r'\bturla', re.IGNORECASE),
    re.compile(r'\bkimsuky', re.IGNORECASE),
    re.compile(r'\bdarkhydrus', re.IGNORECASE),
    re.compile(r'\bfin\d+', re.IGNORECASE),
)
ALIAS_PATTERN = re.compile(r'\b(?:also known as|aka|aliases|alias)\b[:\s]*([^.]{1,100})', re.IGNORECASE)
ALIAS_SEPARATOR_PATTERN = re.compile(r'[,;]')
MALWARE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r'trojan', r'backdoor', r'ransomware', r'loader', r'stealer',
        r'rat\b', r'rootkit', r'botnet', r'wiper', r'downloader',
    )
)
TECHNIQUE_PATTERN = re.compile(r'\bT\d{4}(?:\.\d{3})?')
INDUSTRY_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r'financial', r'healthcare', r'government', r'defense', r'energy',
        r'manufacturing', r'retail', r'education', r'technology', r'telecommunications',
    )
)
COUNTRY_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r'united states', r'russia', r'china', r'north korea', r'iran',
        r'ukraine', r'germany', r'france', r'japan', r'south korea',
    )
)
INDICATOR_PATTERNS = (
    re.compile(r'\b(?:\d{1,3}\.){3}\d{1,3}\b'),
    re.compile(r'\b[a-fA-F0-9]{32}\b'),
    re.compile(r'\b[a-fA-F0-9]{40}\b'),
    re.compile(r'\b[a-fA-F0-9]{64}\b'),
    re.compile(r'\b[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'),
)

MAX_ALIASES = 5
MAX_MALWARE = 10
MAX_TECHNIQUES = 15
MAX_INDUSTRIES = 10
MAX_COUNTRIES = 10
MAX_INDICATORS = 20

HIGH_CONFIDENCE_SCORE = 10
MEDIUM_CONFIDENCE_SCORE = 5


def _sweep(text: str, patterns: tuple[re.Pattern[str], ...]) -> list[str]:
    matches: list[str] = []
    for pattern in patterns:
        matches.extend(match.group(0) for match in pattern.finditer(text))
    return matches


def extract_actor_name(text: str) -> str:
    for pattern in ACTOR_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return UNKNOWN_ACTOR


def extract_aliases(text: str) -> list[str]:
    match = ALIAS_PATTERN.search(text)
    if not match:
        return []
    pieces = [piece.strip() for piece in ALIAS_SEPARATOR_PATTERN.split(match.group(1))]
    return [piece for piece in pieces if piece]


def confidence_label(score: int) -> str:
    if score > HIGH_CONFIDENCE_SCORE:
        return 'High'
    if score > MEDIUM_CONFIDENCE_SCORE:
        return 'Medium'
    return 'Low'


def summarize(text: str) -> str:
    if len(text) > SUMMARY_CHARS:
        return text[:SUMMARY_CHARS] + '...'
    return text


def extract_intel(text: str | None, source_url: str | None = None) -> dict[str, object]:
    text = str(text or '')

    aliases = extract_aliases(text)
    malware = _sweep(text, MALWARE_PATTERNS)
    techniques = TECHNIQUE_PATTERN.findall(text)
    industries = _sweep(text, INDUSTRY_PATTERNS)
    countries = _sweep(text, COUNTRY_PATTERNS)
    indicators = _sweep(text, INDICATOR_PATTERNS)

    score = len(malware) + len(techniques) + len(industries) + len(countries)
    intel = {
        'actor_name': extract_actor_name(text),
        'aliases': unique_capped(aliases, MAX_ALIASES),
        'malware': unique_capped(malware, MAX_MALWARE),
        'techniques': unique_capped(techniques, MAX_TECHNIQUES),
        'industries': unique_capped(industries, MAX_INDUSTRIES),
        'countries': unique_capped(countries, MAX_COUNTRIES),
        'indicators': unique_capped(indicators, MAX_INDICATORS),
        'summary': summarize(text),
        'confidence': confidence_label(score),
        'source_url': source_url or '',
    }
    logger.debug('freeform sweep for %s scored %d', intel['actor_name'], score)
    return intel
