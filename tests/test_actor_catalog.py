import pytest
from fastapi import HTTPException

import actor_catalog
from actor_seed_data import sample_actors


def test_build_actor_from_form_fills_editor_defaults():
    actor = actor_catalog.build_actor_from_form_core(
        {'name': '  Sandworm Team ', 'aliases': 'Voodoo Bear, IRIDIUM', 'type': 'nation-state'}
    )
    assert actor['id'] == 'sandworm-team'
    assert actor['name'] == 'Sandworm Team'
    assert actor['aliases'] == ['Voodoo Bear', 'IRIDIUM']
    assert actor['type'] == 'Nation State'
    assert actor['status'] == 'Unknown'
    assert actor['origin'] == 'Unknown'
    assert actor['first_seen'] == 'Unknown'
    assert actor['description'] == ''
    assert actor['malware_used'] == []
    assert actor['intel_reports'] == 0
    assert actor['vulnerabilities'] == 0


def test_build_actor_from_form_keeps_existing_id_and_known_enums():
    actor = actor_catalog.build_actor_from_form_core(
        {'name': 'Renamed Spider', 'type': 'Ransomware', 'status': 'Inactive', 'intel_reports': '4'},
        existing_id='punk-spider',
    )
    assert actor['id'] == 'punk-spider'
    assert actor['type'] == 'Ransomware'
    assert actor['status'] == 'Inactive'
    assert actor['intel_reports'] == 4


def test_build_actor_from_form_requires_name():
    with pytest.raises(HTTPException) as exc_info:
        actor_catalog.build_actor_from_form_core({'name': '   '})
    assert exc_info.value.status_code == 400


def test_build_actor_from_form_rejects_bad_list_values():
    with pytest.raises(HTTPException):
        actor_catalog.build_actor_from_form_core({'name': 'APT1', 'techniques': ['T1059', 5]})
    with pytest.raises(HTTPException):
        actor_catalog.build_actor_from_form_core({'name': 'APT1', 'vulnerabilities': 'many'})


def test_filter_actors_matches_across_fields():
    actors = sample_actors()
    assert len(actor_catalog.filter_actors_core(actors, '')) == 5
    assert len(actor_catalog.filter_actors_core(actors, None)) == 5
    assert [a['id'] for a in actor_catalog.filter_actors_core(actors, 'AKIRA')] == ['punk-spider']
    assert [a['id'] for a in actor_catalog.filter_actors_core(actors, 'rhysida')] == ['vice-spider']
    assert [a['id'] for a in actor_catalog.filter_actors_core(actors, 'japan')] == ['punk-spider']
    assert [a['id'] for a in actor_catalog.filter_actors_core(actors, 'eastern europe')] == [
        'lunar-spider',
        'traveling-spider',
    ]
    assert actor_catalog.filter_actors_core(actors, 'no-such-actor') == []


def test_merge_import_skips_present_and_repeated_ids():
    incoming = [
        {'id': 'apt28', 'name': 'APT28'},
        {'id': 'apt29', 'name': 'APT29'},
        {'id': 'apt29', 'name': 'APT29 again'},
        {'id': 'turla', 'name': 'Turla'},
        {'id': '', 'name': '???'},
    ]
    accepted, skipped = actor_catalog.merge_import_core({'apt28'}, incoming)
    assert [actor['name'] for actor in accepted] == ['APT29', 'Turla']
    assert len(skipped) == 3


def test_apply_intel_keeps_name_for_unknown_actor():
    form = {'name': 'Existing', 'aliases': ['X'], 'description': 'old'}
    intel = {
        'actor_name': 'Unknown Actor',
        'aliases': ['Y', ''],
        'malware': ['loader'],
        'industries': [],
        'countries': ['Iran'],
        'techniques': ['T1059'],
        'summary': '',
    }
    merged = actor_catalog.apply_intel_to_form_core(form, intel)
    assert merged['name'] == 'Existing'
    assert merged['aliases'] == ['X', 'Y']
    assert merged['malware_used'] == ['loader']
    assert merged['target_countries'] == ['Iran']
    assert merged['techniques'] == ['T1059']
    assert merged['description'] == 'old'
    assert form['aliases'] == ['X']


def test_apply_intel_sets_name_and_description():
    merged = actor_catalog.apply_intel_to_form_core(
        {},
        {'actor_name': 'APT41', 'aliases': [], 'summary': 'APT41 targets gaming companies.'},
    )
    assert merged['name'] == 'APT41'
    assert merged['description'] == 'APT41 targets gaming companies.'
    assert merged['aliases'] == []
