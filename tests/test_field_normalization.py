import field_normalization


def test_parse_list_splits_trims_and_drops_empty_pieces():
    assert field_normalization.parse_list('Lazarus; Hidden Cobra | ZINC, ,') == [
        'Lazarus',
        'Hidden Cobra',
        'ZINC',
    ]
    assert field_normalization.parse_list('') == []
    assert field_normalization.parse_list(None) == []


def test_map_type_uses_keyword_priority():
    assert field_normalization.map_type('apt') == 'APT'
    assert field_normalization.map_type('Advanced persistent threat') == 'APT'
    assert field_normalization.map_type('Ransomware gang') == 'Ransomware'
    assert field_normalization.map_type('cybercriminal') == 'eCrime'
    assert field_normalization.map_type('Nation-sponsored') == 'Nation State'
    assert field_normalization.map_type('Hacktivist') == 'Hacktivist'


def test_map_type_defaults_to_ecrime():
    assert field_normalization.map_type('something-unrecognized') == 'eCrime'
    assert field_normalization.map_type('') == 'eCrime'
    assert field_normalization.map_type(None) == 'eCrime'


def test_map_status_checks_inactive_before_active():
    assert field_normalization.map_status('Active') == 'Active'
    assert field_normalization.map_status('currently ACTIVE') == 'Active'
    assert field_normalization.map_status('Inactive') == 'Inactive'
    assert field_normalization.map_status('Dormant since 2019') == 'Inactive'
    assert field_normalization.map_status('disbanded?') == 'Unknown'
    assert field_normalization.map_status('') == 'Unknown'


def test_generate_id_slugs_names():
    assert field_normalization.generate_id('APT29') == 'apt29'
    assert field_normalization.generate_id('Fancy Bear (APT28)') == 'fancy-bear-apt28'
    assert field_normalization.generate_id('  --VICE   SPIDER--  ') == 'vice-spider'
    assert field_normalization.generate_id('!!!') == ''


def test_generate_id_is_idempotent():
    for name in ('APT29', 'Fancy Bear (APT28)', 'Storm-1567', 'GOLD MANSARD'):
        slug = field_normalization.generate_id(name)
        assert field_normalization.generate_id(slug) == slug


def test_extract_labeled_field_stops_at_period_and_line_end():
    text = 'Aliases: Hidden Cobra, ZINC. Origin: North Korea\nStatus: Active'
    assert field_normalization.extract_labeled_field(text, 'aliases') == 'Hidden Cobra, ZINC'
    assert field_normalization.extract_labeled_field(text, 'origin') == 'North Korea'
    assert field_normalization.extract_labeled_field(text, 'status') == 'Active'
    assert field_normalization.extract_labeled_field(text, 'motivation') == ''


def test_extract_labeled_field_prefers_whole_label_words():
    text = 'Regions: Europe, Asia'
    assert field_normalization.extract_labeled_field(text, 'countries') == 'Europe, Asia'
    assert field_normalization.extract_labeled_field(text, 'origin') == ''


def test_leading_int_and_unique_capped():
    assert field_normalization.leading_int('12 reports') == 12
    assert field_normalization.leading_int('n/a') == 0
    assert field_normalization.leading_int(None) == 0
    assert field_normalization.unique_capped(['a', 'b', 'a', 'A', 'c'], 3) == ['a', 'b', 'A']
