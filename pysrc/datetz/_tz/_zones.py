"""The bundled timezone table.

Maps IANA timezone IDs to their (standard, daylight) UTC offsets in seconds,
as currently in effect. Zones that don't observe DST have both values equal.
Southern hemisphere zones observe daylight time around January.
"""

ZONES: dict[str, tuple[int, int]] = {
    # UTC and aliases
    "UTC": (0, 0),
    "Etc/UTC": (0, 0),
    "GMT": (0, 0),
    "Etc/GMT": (0, 0),
    # Europe
    "Europe/London": (0, 3600),
    "Europe/Dublin": (0, 3600),
    "Europe/Lisbon": (0, 3600),
    "Europe/Paris": (3600, 7200),
    "Europe/Berlin": (3600, 7200),
    "Europe/Rome": (3600, 7200),
    "Europe/Madrid": (3600, 7200),
    "Europe/Amsterdam": (3600, 7200),
    "Europe/Brussels": (3600, 7200),
    "Europe/Luxembourg": (3600, 7200),
    "Europe/Vienna": (3600, 7200),
    "Europe/Zurich": (3600, 7200),
    "Europe/Stockholm": (3600, 7200),
    "Europe/Oslo": (3600, 7200),
    "Europe/Copenhagen": (3600, 7200),
    "Europe/Warsaw": (3600, 7200),
    "Europe/Prague": (3600, 7200),
    "Europe/Budapest": (3600, 7200),
    "Europe/Belgrade": (3600, 7200),
    "Europe/Athens": (7200, 10800),
    "Europe/Helsinki": (7200, 10800),
    "Europe/Kiev": (7200, 10800),
    "Europe/Kyiv": (7200, 10800),
    "Europe/Bucharest": (7200, 10800),
    "Europe/Sofia": (7200, 10800),
    "Europe/Riga": (7200, 10800),
    "Europe/Vilnius": (7200, 10800),
    "Europe/Tallinn": (7200, 10800),
    "Europe/Istanbul": (10800, 10800),
    "Europe/Moscow": (10800, 10800),
    "Europe/Minsk": (10800, 10800),
    # Africa
    "Africa/Abidjan": (0, 0),
    "Africa/Accra": (0, 0),
    "Africa/Dakar": (0, 0),
    "Africa/Lagos": (3600, 3600),
    "Africa/Algiers": (3600, 3600),
    "Africa/Tunis": (3600, 3600),
    "Africa/Cairo": (7200, 10800),
    "Africa/Johannesburg": (7200, 7200),
    "Africa/Maputo": (7200, 7200),
    "Africa/Nairobi": (10800, 10800),
    "Africa/Addis_Ababa": (10800, 10800),
    # North America
    "America/New_York": (-18000, -14400),
    "America/Detroit": (-18000, -14400),
    "America/Toronto": (-18000, -14400),
    "America/Chicago": (-21600, -18000),
    "America/Winnipeg": (-21600, -18000),
    "America/Denver": (-25200, -21600),
    "America/Edmonton": (-25200, -21600),
    "America/Phoenix": (-25200, -25200),
    "America/Los_Angeles": (-28800, -25200),
    "America/Vancouver": (-28800, -25200),
    "America/Anchorage": (-32400, -28800),
    "America/Adak": (-36000, -32400),
    "America/Halifax": (-14400, -10800),
    "America/St_Johns": (-12600, -9000),
    "America/Regina": (-21600, -21600),
    "America/Mexico_City": (-21600, -21600),
    "America/Havana": (-18000, -14400),
    "America/Panama": (-18000, -18000),
    "America/Jamaica": (-18000, -18000),
    "America/Puerto_Rico": (-14400, -14400),
    # South America
    "America/Bogota": (-18000, -18000),
    "America/Lima": (-18000, -18000),
    "America/Caracas": (-14400, -14400),
    "America/La_Paz": (-14400, -14400),
    "America/Santiago": (-14400, -10800),
    "America/Asuncion": (-10800, -10800),
    "America/Sao_Paulo": (-10800, -10800),
    "America/Argentina/Buenos_Aires": (-10800, -10800),
    "America/Montevideo": (-10800, -10800),
    # Atlantic
    "Atlantic/Azores": (-3600, 0),
    "Atlantic/Reykjavik": (0, 0),
    "Atlantic/Canary": (0, 3600),
    # Asia
    "Asia/Jerusalem": (7200, 10800),
    "Asia/Beirut": (7200, 10800),
    "Asia/Amman": (10800, 10800),
    "Asia/Riyadh": (10800, 10800),
    "Asia/Baghdad": (10800, 10800),
    "Asia/Qatar": (10800, 10800),
    "Asia/Tehran": (12600, 12600),
    "Asia/Dubai": (14400, 14400),
    "Asia/Baku": (14400, 14400),
    "Asia/Kabul": (16200, 16200),
    "Asia/Karachi": (18000, 18000),
    "Asia/Tashkent": (18000, 18000),
    "Asia/Kolkata": (19800, 19800),
    "Asia/Calcutta": (19800, 19800),
    "Asia/Colombo": (19800, 19800),
    "Asia/Kathmandu": (20700, 20700),
    "Asia/Dhaka": (21600, 21600),
    "Asia/Yangon": (23400, 23400),
    "Asia/Bangkok": (25200, 25200),
    "Asia/Jakarta": (25200, 25200),
    "Asia/Ho_Chi_Minh": (25200, 25200),
    "Asia/Shanghai": (28800, 28800),
    "Asia/Hong_Kong": (28800, 28800),
    "Asia/Taipei": (28800, 28800),
    "Asia/Singapore": (28800, 28800),
    "Asia/Manila": (28800, 28800),
    "Asia/Kuala_Lumpur": (28800, 28800),
    "Asia/Tokyo": (32400, 32400),
    "Asia/Seoul": (32400, 32400),
    # Australia
    "Australia/Perth": (28800, 28800),
    "Australia/Darwin": (34200, 34200),
    "Australia/Adelaide": (34200, 37800),
    "Australia/Brisbane": (36000, 36000),
    "Australia/Sydney": (36000, 39600),
    "Australia/Melbourne": (36000, 39600),
    "Australia/Hobart": (36000, 39600),
    "Australia/Lord_Howe": (37800, 39600),
    # Pacific
    "Pacific/Honolulu": (-36000, -36000),
    "Pacific/Guam": (36000, 36000),
    "Pacific/Fiji": (43200, 43200),
    "Pacific/Auckland": (43200, 46800),
    "Pacific/Chatham": (45900, 49500),
    "Pacific/Tongatapu": (46800, 46800),
    "Pacific/Kiritimati": (50400, 50400),
}
