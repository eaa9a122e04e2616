def sample_actors() -> list[dict[str, object]]:
    return [
        {
            'id': 'vice-spider',
            'name': 'VICE SPIDER',
            'aliases': ['Vice Society', 'DEV-0832', 'Vanilla Tempest'],
            'type': 'eCrime',
            'origin': 'Unknown',
            'first_seen': 'May 2021',
            'last_seen': 'Aug 2025',
            'motivation': 'Criminal',
            'description': (
                'VICE SPIDER is an eCrime adversary that has conducted ransomware operations since at least '
                'April 2021. The group began using the commodity Zeppelin ransomware and likely acquired the '
                "source code to the Linux version of FERAL SPIDER's DeathKitty in May 2021. The adversary "
                "subsequently experimented with BITWISE SPIDER's LockBit and the RedAlertLocker ransomware "
                'before adopting the private Rhysida ransomware as their main payload.'
            ),
            'malware_used': [
                'Zeppelin', 'Rhysida', 'SocksShell', 'DeathKitty', 'HiveRansomware', 'LockBit',
                'SocksProxyGo', 'Lotus', 'RedAlertLocker', 'MinteLoader', 'HalfAndHalfDownloader', 'SystemBC',
            ],
            'target_industries': [
                'Utilities', 'Local Government', 'Academic', 'Telecommunications', 'Government',
                'Technology', 'Retail', 'Manufacturing', 'Healthcare', 'Energy', 'Financial Services',
            ],
            'target_countries': [
                'United States', 'Canada', 'United Kingdom', 'Germany', 'France', 'Italy', 'Spain',
                'Brazil', 'Australia', 'India',
            ],
            'techniques': [
                'T1021.001', 'T1047', 'T1055', 'T1059.001', 'T1059.003', 'T1078', 'T1082', 'T1083',
                'T1105', 'T1112', 'T1140', 'T1486', 'T1547.001', 'T1562.001', 'T1566.001', 'T1570',
            ],
            'status': 'Active',
            'intel_reports': 24,
            'vulnerabilities': 31,
        },
        {
            'id': 'punk-spider',
            'name': 'PUNK SPIDER',
            'aliases': ['Akira', 'Storm-1567', 'REDBIKE'],
            'type': 'eCrime',
            'origin': 'Unknown',
            'first_seen': 'Aug 2025',
            'last_seen': 'Aug 2025',
            'motivation': 'Criminal',
            'description': (
                'PUNK SPIDER is a financially motivated threat actor group that operates the Akira '
                'ransomware. The group has been active since early 2023 and primarily targets various '
                'industries worldwide through opportunistic attacks.'
            ),
            'malware_used': ['Akira Ransomware', 'Cobalt Strike', 'SystemBC', 'Various Remote Access Tools'],
            'target_industries': [
                'Healthcare', 'Manufacturing', 'Education', 'Government', 'Financial Services',
                'Technology', 'Retail',
            ],
            'target_countries': ['United States', 'Canada', 'United Kingdom', 'Germany', 'France', 'Australia', 'Japan'],
            'techniques': ['T1486', 'T1059.001', 'T1021.001', 'T1047', 'T1055', 'T1082', 'T1083', 'T1105'],
            'status': 'Active',
            'intel_reports': 24,
            'vulnerabilities': 32,
        },
        {
            'id': 'lunar-spider',
            'name': 'LUNAR SPIDER',
            'aliases': ['Vice Society', 'DEV-0832'],
            'type': 'eCrime',
            'origin': 'Russian Federation, Eastern Europe',
            'first_seen': 'Aug 2025',
            'last_seen': 'Aug 2025',
            'motivation': 'Criminal',
            'description': (
                'LUNAR SPIDER is a cybercriminal group known for deploying various ransomware families and '
                'conducting financially motivated attacks against organizations worldwide.'
            ),
            'malware_used': ['Various ransomware families', 'Cobalt Strike', 'Remote Access Tools'],
            'target_industries': ['Manufacturing', 'Healthcare', 'Education', 'Government'],
            'target_countries': ['Russian Federation', 'Eastern Europe', 'United States', 'European Union'],
            'techniques': ['T1486', 'T1059', 'T1021', 'T1047', 'T1055'],
            'status': 'Active',
            'intel_reports': 60,
            'vulnerabilities': 2,
        },
        {
            'id': 'traveling-spider',
            'name': 'TRAVELING SPIDER',
            'aliases': ['Nemty X', 'Nefilim', 'GOLD MANSARD', 'Nokoyawa', 'INC', 'Lynx', 'Nemty'],
            'type': 'eCrime',
            'origin': 'Russian Federation, Eastern Europe',
            'first_seen': 'Aug 2025',
            'last_seen': 'Aug 2025',
            'motivation': 'Criminal',
            'description': (
                'TRAVELING SPIDER is a prolific ransomware-as-a-service (RaaS) operation that has used '
                'multiple ransomware families over time, adapting their tactics and payloads based on the '
                'threat landscape.'
            ),
            'malware_used': ['Nemty', 'Nefilim', 'Nokoyawa', 'INC Ransomware', 'Lynx'],
            'target_industries': ['Healthcare', 'Manufacturing', 'Technology', 'Financial Services', 'Government'],
            'target_countries': ['Russian Federation', 'Eastern Europe', 'United States', 'Canada', 'United Kingdom'],
            'techniques': ['T1486', 'T1059.001', 'T1021.001', 'T1047', 'T1055', 'T1082'],
            'status': 'Active',
            'intel_reports': 9,
            'vulnerabilities': 28,
        },
        {
            'id': 'mutant-spider',
            'name': 'MUTANT SPIDER',
            'aliases': ['Vice Society', 'DEV-0832'],
            'type': 'eCrime',
            'origin': 'Unknown',
            'first_seen': 'Aug 2025',
            'last_seen': 'Aug 2025',
            'motivation': 'Criminal',
            'description': (
                'MUTANT SPIDER is an eCrime threat actor that conducts ransomware operations and data theft '
                'attacks against various organizations.'
            ),
            'malware_used': ['Custom ransomware', 'Data theft tools', 'Remote Access Tools'],
            'target_industries': ['Healthcare', 'Education', 'Manufacturing', 'Government'],
            'target_countries': ['United States', 'Canada', 'United Kingdom', 'Australia'],
            'techniques': ['T1486', 'T1059', 'T1021', 'T1047'],
            'status': 'Active',
            'intel_reports': 4,
            'vulnerabilities': 16,
        },
    ]
