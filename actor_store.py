import json
import logging
import sqlite3
from datetime import datetime, timezone

from fastapi import HTTPException

import actor_catalog
from actor_seed_data import sample_actors

logger = logging.getLogger(__name__)

DB_PATH = '/data/app.db'

ACTOR_COLUMNS = (
    'id', 'name', 'aliases_json', 'actor_type', 'origin', 'first_seen', 'last_seen',
    'motivation', 'description', 'malware_json', 'industries_json', 'countries_json',
    'techniques_json', 'status', 'intel_reports', 'vulnerabilities',
)


def configure(*, db_path: str | None = None) -> None:
    global DB_PATH
    if db_path:
        DB_PATH = db_path


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def safe_json_string_list(value: str | None) -> list[str]:
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except ValueError:
        return []
    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed if isinstance(item, str)]


def initialize_store(*, seed: bool = True) -> None:
    with sqlite3.connect(DB_PATH) as connection:
        connection.execute(
            '''
            CREATE TABLE IF NOT EXISTS threat_actors (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                aliases_json TEXT NOT NULL DEFAULT '[]',
                actor_type TEXT NOT NULL DEFAULT 'eCrime',
                origin TEXT NOT NULL DEFAULT 'Unknown',
                first_seen TEXT NOT NULL DEFAULT 'Unknown',
                last_seen TEXT NOT NULL DEFAULT 'Unknown',
                motivation TEXT NOT NULL DEFAULT 'Unknown',
                description TEXT NOT NULL DEFAULT '',
                malware_json TEXT NOT NULL DEFAULT '[]',
                industries_json TEXT NOT NULL DEFAULT '[]',
                countries_json TEXT NOT NULL DEFAULT '[]',
                techniques_json TEXT NOT NULL DEFAULT '[]',
                status TEXT NOT NULL DEFAULT 'Unknown',
                intel_reports INTEGER NOT NULL DEFAULT 0,
                vulnerabilities INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            '''
        )
        existing = connection.execute('SELECT COUNT(*) FROM threat_actors').fetchone()[0]
        if seed and existing == 0:
            for actor in sample_actors():
                _insert_row(connection, actor)
            logger.info('seeded catalog with %d sample actors', len(sample_actors()))
        connection.commit()


def _row_values(actor: dict[str, object]) -> tuple[object, ...]:
    return (
        actor['id'],
        actor['name'],
        json.dumps(list(actor.get('aliases') or [])),
        actor.get('type') or 'eCrime',
        actor.get('origin') or 'Unknown',
        actor.get('first_seen') or 'Unknown',
        actor.get('last_seen') or 'Unknown',
        actor.get('motivation') or 'Unknown',
        actor.get('description') or '',
        json.dumps(list(actor.get('malware_used') or [])),
        json.dumps(list(actor.get('target_industries') or [])),
        json.dumps(list(actor.get('target_countries') or [])),
        json.dumps(list(actor.get('techniques') or [])),
        actor.get('status') or 'Unknown',
        int(actor.get('intel_reports') or 0),
        int(actor.get('vulnerabilities') or 0),
    )


def _insert_row(connection: sqlite3.Connection, actor: dict[str, object]) -> None:
    now = utc_now_iso()
    placeholders = ', '.join('?' for _ in range(len(ACTOR_COLUMNS) + 2))
    connection.execute(
        f'''
        INSERT INTO threat_actors ({', '.join(ACTOR_COLUMNS)}, created_at, updated_at)
        VALUES ({placeholders})
        ''',
        (*_row_values(actor), now, now),
    )


def _actor_from_row(row: tuple[object, ...]) -> dict[str, object]:
    return {
        'id': row[0],
        'name': row[1],
        'aliases': safe_json_string_list(row[2]),
        'type': row[3],
        'origin': row[4],
        'first_seen': row[5],
        'last_seen': row[6],
        'motivation': row[7],
        'description': row[8],
        'malware_used': safe_json_string_list(row[9]),
        'target_industries': safe_json_string_list(row[10]),
        'target_countries': safe_json_string_list(row[11]),
        'techniques': safe_json_string_list(row[12]),
        'status': row[13],
        'intel_reports': int(row[14] or 0),
        'vulnerabilities': int(row[15] or 0),
    }


def actor_exists(connection: sqlite3.Connection, actor_id: str) -> bool:
    row = connection.execute('SELECT 1 FROM threat_actors WHERE id = ?', (actor_id,)).fetchone()
    return row is not None


def list_actors() -> list[dict[str, object]]:
    with sqlite3.connect(DB_PATH) as connection:
        rows = connection.execute(
            f'SELECT {", ".join(ACTOR_COLUMNS)} FROM threat_actors ORDER BY rowid'
        ).fetchall()
    return [_actor_from_row(row) for row in rows]


def get_actor(actor_id: str) -> dict[str, object]:
    with sqlite3.connect(DB_PATH) as connection:
        row = connection.execute(
            f'SELECT {", ".join(ACTOR_COLUMNS)} FROM threat_actors WHERE id = ?',
            (actor_id,),
        ).fetchone()
    if row is None:
        raise HTTPException(status_code=404, detail='actor not found')
    return _actor_from_row(row)


def insert_actor(actor: dict[str, object]) -> dict[str, object]:
    with sqlite3.connect(DB_PATH) as connection:
        if actor_exists(connection, str(actor['id'])):
            raise HTTPException(status_code=409, detail='an actor with this id already exists')
        _insert_row(connection, actor)
        connection.commit()
    logger.info('added actor %s', actor['id'])
    return actor


def update_actor(actor: dict[str, object]) -> dict[str, object]:
    assignments = ', '.join(f'{column} = ?' for column in ACTOR_COLUMNS[1:])
    values = _row_values(actor)
    with sqlite3.connect(DB_PATH) as connection:
        if not actor_exists(connection, str(actor['id'])):
            raise HTTPException(status_code=404, detail='actor not found')
        connection.execute(
            f'UPDATE threat_actors SET {assignments}, updated_at = ? WHERE id = ?',
            (*values[1:], utc_now_iso(), values[0]),
        )
        connection.commit()
    logger.info('updated actor %s', actor['id'])
    return actor


def import_actors(actors: list[dict[str, object]]) -> dict[str, object]:
    with sqlite3.connect(DB_PATH) as connection:
        existing_ids = {str(row[0]) for row in connection.execute('SELECT id FROM threat_actors').fetchall()}
        accepted, skipped = actor_catalog.merge_import_core(existing_ids, actors)
        for actor in accepted:
            _insert_row(connection, actor)
        connection.commit()
    logger.info('imported %d actors, skipped %d already present', len(accepted), len(skipped))
    return {
        'imported': len(accepted),
        'skipped': len(skipped),
        'actor_ids': [str(actor['id']) for actor in accepted],
    }
