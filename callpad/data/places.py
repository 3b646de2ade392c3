"""
Place tables: states, tracked metros, city keywords and suburb → metro.

Pure data. Keys are lowercase; metro values are the canonical names
used for vehicle-availability search.
"""

from __future__ import annotations

STATE_ABBREVIATIONS: dict[str, str] = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR", "california": "CA",
    "colorado": "CO", "connecticut": "CT", "delaware": "DE", "florida": "FL", "georgia": "GA",
    "hawaii": "HI", "idaho": "ID", "illinois": "IL", "indiana": "IN", "iowa": "IA",
    "kansas": "KS", "kentucky": "KY", "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN", "mississippi": "MS", "missouri": "MO",
    "montana": "MT", "nebraska": "NE", "nevada": "NV", "new hampshire": "NH", "new jersey": "NJ",
    "new mexico": "NM", "new york": "NY", "north carolina": "NC", "north dakota": "ND", "ohio": "OH",
    "oklahoma": "OK", "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT", "vermont": "VT",
    "virginia": "VA", "washington": "WA", "west virginia": "WV", "wisconsin": "WI", "wyoming": "WY",
    "district of columbia": "DC",
    # Canadian provinces served by the Toronto/Vancouver/Calgary metros
    "ontario": "ON", "quebec": "QC", "british columbia": "BC", "alberta": "AB", "manitoba": "MB",
}

# State tokens that are also everyday English words; a "<city> <token>"
# fragment only counts as city+state when the city part is a known place.
AMBIGUOUS_STATE_TOKENS: frozenset[str] = frozenset({
    "al", "co", "de", "hi", "id", "in", "la", "ma", "me", "mo", "ne", "oh", "ok", "or", "pa",
})

MAJOR_METROS: tuple[str, ...] = (
    "Phoenix", "Chicago", "Dallas", "Houston", "Austin", "San Antonio",
    "Los Angeles", "San Francisco", "San Diego", "San Jose",
    "Denver", "Las Vegas", "Seattle", "Portland",
    "Atlanta", "Miami", "Tampa", "Orlando", "Jacksonville",
    "Philadelphia", "New York", "Boston", "Washington",
    "Detroit", "Minneapolis", "St Louis", "Kansas City",
    "Nashville", "Charlotte", "Indianapolis", "Columbus",
    "Cleveland", "Cincinnati", "Pittsburgh", "Baltimore",
    "New Orleans", "Memphis", "Louisville", "Milwaukee",
    "Salt Lake City", "Raleigh", "Richmond", "Virginia Beach",
    "Birmingham", "Oklahoma City", "Tucson", "Albuquerque",
    "Sacramento", "Fresno", "Long Beach", "Omaha",
    "Toronto", "Montreal", "Vancouver", "Calgary", "Windsor", "Winnipeg",
    "Napa", "Santa Rosa", "Spokane",
)

# States (or provinces) each metro's service area covers. A suburb typed
# with a state outside this set does not resolve to the metro.
METRO_STATES: dict[str, tuple[str, ...]] = {
    "Phoenix": ("AZ",), "Chicago": ("IL", "IN", "WI"), "Dallas": ("TX",), "Houston": ("TX",),
    "Austin": ("TX",), "San Antonio": ("TX",), "Los Angeles": ("CA",), "San Francisco": ("CA",),
    "San Diego": ("CA",), "San Jose": ("CA",), "Denver": ("CO",), "Las Vegas": ("NV",),
    "Seattle": ("WA",), "Portland": ("OR", "WA"), "Atlanta": ("GA",), "Miami": ("FL",),
    "Tampa": ("FL",), "Orlando": ("FL",), "Jacksonville": ("FL",),
    "Philadelphia": ("PA", "NJ", "DE"), "New York": ("NY", "NJ", "CT"), "Boston": ("MA", "NH"),
    "Washington": ("DC", "VA", "MD"), "Detroit": ("MI",), "Minneapolis": ("MN", "WI"),
    "St Louis": ("MO", "IL"), "Kansas City": ("MO", "KS"), "Nashville": ("TN",),
    "Charlotte": ("NC", "SC"), "Indianapolis": ("IN",), "Columbus": ("OH",), "Cleveland": ("OH",),
    "Cincinnati": ("OH", "KY", "IN"), "Pittsburgh": ("PA",), "Baltimore": ("MD",),
    "New Orleans": ("LA",), "Memphis": ("TN", "MS", "AR"), "Louisville": ("KY", "IN"),
    "Milwaukee": ("WI",), "Salt Lake City": ("UT",), "Raleigh": ("NC",), "Richmond": ("VA",),
    "Virginia Beach": ("VA",), "Birmingham": ("AL",), "Oklahoma City": ("OK",), "Tucson": ("AZ",),
    "Albuquerque": ("NM",), "Sacramento": ("CA",), "Fresno": ("CA",), "Long Beach": ("CA",),
    "Omaha": ("NE", "IA"), "Toronto": ("ON",), "Montreal": ("QC",), "Vancouver": ("BC",),
    "Calgary": ("AB",), "Windsor": ("ON",), "Winnipeg": ("MB",), "Napa": ("CA",),
    "Santa Rosa": ("CA",), "Spokane": ("WA",),
}

# Bare city words recognised by the last-resort location rule.
CITY_KEYWORDS: tuple[str, ...] = (
    "phoenix", "scottsdale", "mesa", "tempe", "glendale", "chandler", "gilbert",
    "peoria", "surprise", "goodyear", "avondale", "tucson", "las vegas", "denver",
    "chicago", "dallas", "houston", "austin", "san antonio", "los angeles",
    "san diego", "san francisco", "seattle", "portland", "atlanta", "miami",
    "orlando", "tampa", "boston", "new york", "philadelphia", "detroit",
    "minneapolis", "st louis", "kansas city", "nashville", "memphis", "charlotte",
)

SUBURB_TO_METRO: dict[str, str] = {
    # Phoenix
    "mesa": "Phoenix", "scottsdale": "Phoenix", "tempe": "Phoenix", "glendale az": "Phoenix",
    "chandler": "Phoenix", "gilbert": "Phoenix", "peoria az": "Phoenix", "surprise": "Phoenix",
    "goodyear": "Phoenix", "avondale": "Phoenix", "buckeye": "Phoenix", "queen creek": "Phoenix",
    "san tan valley": "Phoenix", "fountain hills": "Phoenix", "cave creek": "Phoenix",
    "paradise valley": "Phoenix", "apache junction": "Phoenix", "sun city": "Phoenix",
    "litchfield park": "Phoenix", "tolleson": "Phoenix", "anthem": "Phoenix", "maricopa": "Phoenix",
    "ahwatukee": "Phoenix", "laveen": "Phoenix",
    # Chicago
    "naperville": "Chicago", "aurora il": "Chicago", "joliet": "Chicago", "schaumburg": "Chicago",
    "evanston": "Chicago", "oak park": "Chicago", "skokie": "Chicago", "arlington heights": "Chicago",
    "palatine": "Chicago", "wheaton": "Chicago", "elgin": "Chicago", "bolingbrook": "Chicago",
    "downers grove": "Chicago", "orland park": "Chicago", "tinley park": "Chicago", "oak lawn": "Chicago",
    "des plaines": "Chicago", "hoffman estates": "Chicago", "lombard": "Chicago", "oak brook": "Chicago",
    "cicero": "Chicago", "berwyn": "Chicago", "waukegan": "Chicago",
    "hammond": "Chicago", "rosemont": "Chicago", "elmhurst": "Chicago", "plainfield": "Chicago",
    # Dallas
    "plano": "Dallas", "frisco": "Dallas", "irving": "Dallas", "garland": "Dallas",
    "arlington tx": "Dallas", "fort worth": "Dallas", "mckinney": "Dallas", "richardson": "Dallas",
    "carrollton": "Dallas", "denton": "Dallas", "grand prairie": "Dallas", "mesquite": "Dallas",
    "lewisville": "Dallas", "flower mound": "Dallas", "grapevine": "Dallas",
    "southlake": "Dallas", "rowlett": "Dallas", "addison": "Dallas",
    # Houston
    "katy": "Houston", "sugar land": "Houston", "the woodlands": "Houston", "pearland": "Houston",
    "pasadena tx": "Houston", "baytown": "Houston", "league city": "Houston",
    "cypress": "Houston", "conroe": "Houston", "missouri city": "Houston",
    "galveston": "Houston", "kingwood": "Houston", "tomball": "Houston",
    # Austin / San Antonio
    "round rock": "Austin", "cedar park": "Austin", "pflugerville": "Austin", "georgetown": "Austin",
    "leander": "Austin", "san marcos": "Austin", "lakeway": "Austin",
    "new braunfels": "San Antonio", "boerne": "San Antonio", "schertz": "San Antonio",
    "seguin": "San Antonio",
    # Los Angeles
    "santa monica": "Los Angeles", "burbank": "Los Angeles", "glendale ca": "Los Angeles",
    "pasadena": "Los Angeles", "pasadena ca": "Los Angeles", "torrance": "Los Angeles",
    "inglewood": "Los Angeles", "anaheim": "Los Angeles", "irvine": "Los Angeles",
    "santa ana": "Los Angeles", "huntington beach": "Los Angeles", "malibu": "Los Angeles",
    "beverly hills": "Los Angeles", "west hollywood": "Los Angeles", "hollywood": "Los Angeles",
    "culver city": "Los Angeles", "pomona": "Los Angeles", "ontario ca": "Los Angeles",
    "riverside": "Los Angeles", "thousand oaks": "Los Angeles", "newport beach": "Los Angeles",
    # Bay Area
    "oakland": "San Francisco", "berkeley": "San Francisco", "daly city": "San Francisco",
    "san mateo": "San Francisco", "palo alto": "San Francisco", "fremont": "San Francisco",
    "hayward": "San Francisco", "walnut creek": "San Francisco", "sausalito": "San Francisco",
    "santa clara": "San Jose", "sunnyvale": "San Jose", "mountain view": "San Jose",
    "cupertino": "San Jose", "milpitas": "San Jose",
    # San Diego
    "chula vista": "San Diego", "oceanside": "San Diego", "escondido": "San Diego",
    "carlsbad": "San Diego", "la jolla": "San Diego", "el cajon": "San Diego", "encinitas": "San Diego",
    # Denver
    "aurora co": "Denver", "lakewood co": "Denver", "boulder": "Denver", "littleton": "Denver",
    "arvada": "Denver", "westminster co": "Denver", "thornton": "Denver", "centennial": "Denver",
    "highlands ranch": "Denver", "castle rock": "Denver", "broomfield": "Denver",
    # Las Vegas
    "henderson": "Las Vegas", "north las vegas": "Las Vegas", "summerlin": "Las Vegas",
    "paradise nv": "Las Vegas", "boulder city": "Las Vegas",
    # Seattle / Portland
    "bellevue": "Seattle", "tacoma": "Seattle", "redmond": "Seattle", "kirkland": "Seattle",
    "renton": "Seattle", "federal way": "Seattle",
    "beaverton": "Portland", "hillsboro": "Portland", "gresham": "Portland", "lake oswego": "Portland",
    "vancouver wa": "Portland", "tigard": "Portland",
    # Atlanta
    "marietta": "Atlanta", "alpharetta": "Atlanta", "sandy springs": "Atlanta", "roswell": "Atlanta",
    "decatur": "Atlanta", "smyrna": "Atlanta", "dunwoody": "Atlanta", "kennesaw": "Atlanta",
    "buckhead": "Atlanta", "duluth ga": "Atlanta", "lawrenceville": "Atlanta",
    # Florida
    "fort lauderdale": "Miami", "hialeah": "Miami", "miami beach": "Miami", "coral gables": "Miami",
    "hollywood fl": "Miami", "boca raton": "Miami", "west palm beach": "Miami", "doral": "Miami",
    "kissimmee": "Orlando", "winter park": "Orlando", "sanford": "Orlando", "lake mary": "Orlando",
    "clermont": "Orlando", "st petersburg": "Tampa", "clearwater": "Tampa",
    "lakeland": "Tampa", "sarasota": "Tampa",
    # Northeast
    "cambridge": "Boston", "somerville": "Boston", "quincy": "Boston", "newton": "Boston",
    "brookline": "Boston", "worcester": "Boston", "salem": "Boston",
    "brooklyn": "New York", "queens": "New York", "bronx": "New York", "staten island": "New York",
    "manhattan": "New York", "jersey city": "New York", "newark": "New York", "hoboken": "New York",
    "yonkers": "New York", "white plains": "New York", "long island": "New York",
    "king of prussia": "Philadelphia", "cherry hill": "Philadelphia",
    "norristown": "Philadelphia", "wilmington": "Philadelphia",
    "arlington va": "Washington", "alexandria": "Washington", "bethesda": "Washington",
    "silver spring": "Washington", "rockville": "Washington", "fairfax": "Washington",
    # Midwest
    "dearborn": "Detroit", "ann arbor": "Detroit",
    "livonia": "Detroit", "novi": "Detroit", "sterling heights": "Detroit",
    "st paul": "Minneapolis", "saint paul": "Minneapolis", "bloomington mn": "Minneapolis",
    "edina": "Minneapolis", "plymouth mn": "Minneapolis", "eden prairie": "Minneapolis",
    "st charles": "St Louis", "chesterfield": "St Louis", "florissant": "St Louis",
    "overland park": "Kansas City", "olathe": "Kansas City",
    "lees summit": "Kansas City",
    "franklin tn": "Nashville", "murfreesboro": "Nashville", "brentwood": "Nashville",
    "hendersonville": "Nashville",
    "gastonia": "Charlotte", "huntersville": "Charlotte",
    "fishers": "Indianapolis", "noblesville": "Indianapolis",
    "dublin oh": "Columbus", "westerville": "Columbus",
    # Mountain / Southwest
    "oro valley": "Tucson", "marana": "Tucson", "sahuarita": "Tucson",
    "rio rancho": "Albuquerque",
    "provo": "Salt Lake City", "ogden": "Salt Lake City",
    "west valley city": "Salt Lake City",
    # Canada
    "mississauga": "Toronto", "brampton": "Toronto", "markham": "Toronto", "vaughan": "Toronto",
    "burnaby": "Vancouver", "surrey": "Vancouver", "richmond bc": "Vancouver",
}
