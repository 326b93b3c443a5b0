"""
Static lookup tables for tag identifier codes.

Each namespace has its own table. Codes are reused across namespaces
("AP" is an avocado tree but also an egg-laying chicken), so the tables
must never be merged; callers pick one through the device-class code.
"""
from types import MappingProxyType

UNKNOWN_LABEL = "Unknown"

# Device-class code that marks a tree tag. Every other class is an animal tag.
TREE_DEVICE_CLASS = "ST"

DEVICE_CLASSES = MappingProxyType({
    "ST": "Smart Tree",
    "SF": "Smart Farm",
})

PRODUCT_TIERS = MappingProxyType({
    "1": "Standard",
    "2": "Pro",
    "3": "Enterprise",
})

# Bali regencies, used as the location prefix of legacy tags
REGENCIES = MappingProxyType({
    "KR": "Karangasem",
    "BA": "Bangli",
    "BU": "Buleleng",
    "GI": "Gianyar",
    "JE": "Jembrana",
    "KL": "Klungkung",
    "TA": "Tabanan",
    "BD": "Badung",
    "DP": "Denpasar",
})

TREE_SPECIES = MappingProxyType({
    "AP": "Alpukat",    # avocado
    "DU": "Durian",
    "MA": "Mangga",     # mango
    "KE": "Kelapa",     # coconut
    "JE": "Jeruk",      # orange
    "PI": "Pisang",     # banana
    "RA": "Rambutan",
    "NA": "Nangka",     # jackfruit
    "SA": "Sawo",       # sapodilla
    "JA": "Jambu",      # guava
    "TR": "Terong",     # eggplant
})

TREE_SUBTYPES = MappingProxyType({
    "M": "Manalagi",
    "H": "Hass",
    "T": "Monthong",
    "A": "Arumanis",
    "C": "Cengkir",
    "S": "Siam",
    "R": "Raja",
    "B": "Bali",
    "K": "Kuning",
    "G": "Gandaria",
})

ANIMAL_SPECIES = MappingProxyType({
    "AP": "Ayam Petelur",   # egg-laying chicken
    "AB": "Ayam Broiler",
    "SA": "Sapi",           # cow
    "KE": "Kambing",        # goat
    "BE": "Bebek",          # duck
    "DO": "Domba",          # sheep
    "BU": "Babi",           # pig
    "KU": "Kelinci",        # rabbit
    "IK": "Ikan",           # fish
})

ANIMAL_SUBTYPES = MappingProxyType({
    "M": "Medium",
    "L": "Large",
    "S": "Small",
    "B": "Bali",
    "K": "Kampung",
    "H": "Holstein",
    "E": "Ekor Panjang",
    "P": "Pekin",
    "G": "Guppy",
})


def lookup(table, code: str) -> str:
    """Resolve a code against a table, falling back to the placeholder label."""
    return table.get(code) or UNKNOWN_LABEL
