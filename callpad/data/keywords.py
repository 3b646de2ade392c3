"""
Keyword tables for events, vehicles, venues and numbers (lowercase).
"""

from __future__ import annotations

EVENT_KEYWORDS: tuple[str, ...] = (
    "bachelorette", "bachelor", "bar mitzvah", "bat mitzvah", "quinceanera", "quinceañera",
    "quince", "sweet 16", "sweet sixteen", "wedding", "prom", "homecoming", "formal",
    "birthday", "bday", "graduation", "grad", "anniversary", "concert", "party",
    "corporate", "airport", "funeral", "church", "brewery tour", "wine tour", "winery tour",
    "pub crawl", "bar crawl", "night out", "girls night", "date night", "sporting event",
    "game day", "tailgate", "reunion", "retirement", "baby shower", "bridal shower",
)

# Ordered: multi-word and more specific labels before their substrings.
VEHICLE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("party bus", "Party Bus"),
    ("partybus", "Party Bus"),
    ("limo bus", "Limo Bus"),
    ("limo coach", "Limo Bus"),
    ("charter bus", "Charter Bus"),
    ("motor coach", "Motorcoach"),
    ("motorcoach", "Motorcoach"),
    ("coach bus", "Motorcoach"),
    ("school bus", "School Bus"),
    ("shuttle", "Shuttle Bus"),
    ("mini bus", "Mini Bus"),
    ("minibus", "Mini Bus"),
    ("sprinter", "Sprinter Van"),
    ("executive van", "Sprinter Van"),
    ("stretch", "Limousine"),
    ("limousine", "Limousine"),
    ("limo", "Limousine"),
    ("hummer", "Hummer Limo"),
    ("escalade", "SUV"),
    ("suburban", "SUV"),
    ("trolley", "Trolley"),
    ("sedan", "Sedan"),
    ("town car", "Sedan"),
    ("suv", "SUV"),
    ("van", "Van"),
    ("bus", "Bus"),
)

# Vehicle keywords short enough to appear inside unrelated words
# ("vancouver", "business"); these match on word boundaries only.
VEHICLE_WORD_BOUNDARY: frozenset[str] = frozenset({"suv", "van", "bus"})

VENUE_KEYWORDS: tuple[str, ...] = (
    "hotel", "motel", "resort", "inn", "casino", "restaurant", "grill", "steakhouse", "cafe",
    "bar", "pub", "tavern", "lounge", "club", "nightclub", "brewery", "winery", "vineyard",
    "church", "chapel", "cathedral", "temple", "venue", "ballroom", "banquet", "hall",
    "stadium", "arena", "center", "centre", "theater", "theatre", "amphitheater",
    "mall", "plaza", "park", "golf", "topgolf", "country club", "school", "high school",
    "university", "college", "campus", "hospital", "museum", "zoo", "convention",
    "terminal", "station", "marriott", "hilton", "hyatt", "sheraton", "westin",
    "embassy suites", "holiday inn", "walmart", "target", "costco", "starbucks",
    "apartments", "apartment", "condo", "house", "home", "office", "building",
)

STREET_SUFFIXES: frozenset[str] = frozenset({
    "st", "street", "ave", "avenue", "rd", "road", "blvd", "boulevard", "dr", "drive",
    "ln", "lane", "way", "ct", "court", "pl", "place", "pkwy", "parkway", "hwy", "highway",
    "cir", "circle", "trl", "trail", "ter", "terrace", "loop",
})

# Dispatcher agents on the floor; overridable via settings.agent_roster.
AGENT_ROSTER: frozenset[str] = frozenset({
    "brittany", "marcus", "camille", "deshawn", "renata", "tobias",
})

NUMBER_WORDS: dict[str, int] = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "seven": 7,
    "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13,
    "fourteen": 14, "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19, "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50, "sixty": 60,
    "seventy": 70, "eighty": 80, "ninety": 90, "a dozen": 12, "dozen": 12,
}

WEEKDAYS: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

MONTHS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Words that make a capitalized pair look like a date, not a person.
DATE_WORDS: frozenset[str] = frozenset({
    *WEEKDAYS, "today", "tonight", "tomorrow", "next", "this", "weekend", "week", "month",
    "january", "february", "march", "april", "may", "june", "july", "august",
    "september", "october", "november", "december",
})

