import intel_extraction


def test_empty_text_yields_default_summary():
    for text in ('', None):
        intel = intel_extraction.extract_intel(text)
        assert intel['actor_name'] == 'Unknown Actor'
        assert intel['aliases'] == []
        assert intel['malware'] == []
        assert intel['techniques'] == []
        assert intel['indicators'] == []
        assert intel['summary'] == ''
        assert intel['confidence'] == 'Low'


def test_actor_name_follows_pattern_priority():
    assert intel_extraction.extract_actor_name('Lazarus overlaps with APT38 activity.') == 'APT38'
    assert intel_extraction.extract_actor_name('Turla and Lazarus both appear.') == 'Lazarus'
    assert intel_extraction.extract_actor_name('Attributed to fancy bear operators.') == 'fancy bear'
    assert intel_extraction.extract_actor_name('Links to FIN7 were found.') == 'FIN7'
    assert intel_extraction.extract_actor_name('No known group named.') == 'Unknown Actor'


def test_aliases_split_after_introducer():
    text = 'APT29, also known as Cozy Bear; The Dukes, NOBELIUM. It targets diplomats.'
    intel = intel_extraction.extract_intel(text)
    assert intel['actor_name'] == 'APT29'
    assert intel['aliases'] == ['Cozy Bear', 'The Dukes', 'NOBELIUM']


def test_high_confidence_with_twelve_matches():
    text = (
        'The actor deployed a backdoor, a rootkit and a wiper. '
        'Observed techniques T1059, T1566.001 and T1486. '
        'Victims were in healthcare, energy and retail organizations across Germany, France and Japan.'
    )
    intel = intel_extraction.extract_intel(text)
    assert intel['malware'] == ['backdoor', 'rootkit', 'wiper']
    assert intel['techniques'] == ['T1059', 'T1566.001', 'T1486']
    assert intel['industries'] == ['healthcare', 'energy', 'retail']
    assert intel['countries'] == ['Germany', 'France', 'Japan']
    assert intel['confidence'] == 'High'


def test_medium_confidence_with_exactly_six_matches():
    text = (
        'A trojan and a botnet were used. '
        'Techniques T1105 and T1071 were observed against government targets in China.'
    )
    assert intel_extraction.extract_intel(text)['confidence'] == 'Medium'


def test_low_confidence_with_five_matches():
    text = (
        'A trojan and a botnet were used. '
        'Techniques T1105 and T1071 were observed against government targets.'
    )
    assert intel_extraction.extract_intel(text)['confidence'] == 'Low'


def test_techniques_are_deduplicated_and_capped_in_order():
    ids = [f'T{1000 + index}' for index in range(30)]
    text = ' '.join(ids + ids[:5])
    intel = intel_extraction.extract_intel(text)
    assert intel['techniques'] == ids[:15]


def test_lists_deduplicate_case_sensitively():
    intel = intel_extraction.extract_intel('Ransomware and ransomware and more ransomware.')
    assert intel['malware'] == ['Ransomware', 'ransomware']


def test_indicators_combine_ips_hashes_and_domains():
    text = 'C2 at 185.220.101.4 and evil-domain.com, hash d41d8cd98f00b204e9800998ecf8427e'
    intel = intel_extraction.extract_intel(text)
    assert intel['indicators'] == [
        '185.220.101.4',
        'd41d8cd98f00b204e9800998ecf8427e',
        'evil-domain.com',
    ]


def test_summary_is_truncated_with_ellipsis():
    assert intel_extraction.extract_intel('a' * 300)['summary'] == 'a' * 300
    assert intel_extraction.extract_intel('a' * 301)['summary'] == 'a' * 300 + '...'


def test_source_url_is_echoed_but_not_used():
    text = 'Kimsuky phishing against education.'
    with_url = intel_extraction.extract_intel(text, 'https://example.com/report')
    without_url = intel_extraction.extract_intel(text)
    assert with_url['source_url'] == 'https://example.com/report'
    without_url['source_url'] = with_url['source_url']
    assert with_url == without_url


def test_rat_suffix_counts_toward_malware_and_confidence():
    text = 'The loader dropped AsyncRAT and njRAT on hosts. Techniques T1059, T1105 and T1071.'
    intel = intel_extraction.extract_intel(text)
    assert intel['malware'] == ['loader', 'RAT']
    assert intel['confidence'] == 'Medium'
    without_rats = intel_extraction.extract_intel('The loader dropped tools on hosts. Techniques T1059, T1105 and T1071.')
    assert without_rats['confidence'] == 'Low'


def test_aliases_are_capped_at_five():
    intel = intel_extraction.extract_intel('APT1 aka A1, B1, C1, D1, E1, F1 and more.')
    assert intel['aliases'] == ['A1', 'B1', 'C1', 'D1', 'E1']


def test_malware_is_capped_at_ten():
    text = 'trojan Trojan backdoor ransomware loader stealer rat rootkit botnet wiper downloader'
    intel = intel_extraction.extract_intel(text)
    assert intel['malware'] == [
        'trojan', 'Trojan', 'backdoor', 'ransomware', 'loader',
        'stealer', 'rat', 'rootkit', 'botnet', 'wiper',
    ]


def test_industries_are_capped_at_ten():
    text = (
        'financial Financial healthcare government defense energy '
        'manufacturing retail education technology telecommunications'
    )
    intel = intel_extraction.extract_intel(text)
    assert len(intel['industries']) == 10
    assert intel['industries'][:2] == ['financial', 'Financial']
    assert 'telecommunications' not in intel['industries']


def test_countries_are_capped_at_ten():
    text = (
        'united states United States russia china north korea iran '
        'ukraine germany france japan south korea'
    )
    intel = intel_extraction.extract_intel(text)
    assert len(intel['countries']) == 10
    assert intel['countries'][-1] == 'japan'
    assert 'south korea' not in intel['countries']


def test_indicators_are_capped_at_twenty():
    addresses = [f'10.0.0.{index}' for index in range(25)]
    intel = intel_extraction.extract_intel(' '.join(addresses))
    assert intel['indicators'] == addresses[:20]
