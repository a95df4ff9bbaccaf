"""Table-driven merchant categorization.

Matching is a case-insensitive substring test against two ordered tables:
the exact-merchant table first, then the keyword table. Order decides ties,
so both tables are tuples of pairs rather than dicts used for lookup. Editing
the order reclassifies historical statements.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import CategoryResult

DEFAULT_CATEGORY = "Other non-essentials"

# (merchant substring, category)
EXACT_MATCHES: tuple[tuple[str, str], ...] = (
    ("HONE FITNESS", "Gym/fitness"),
    ("PRESTO FARE", "Transit"),
    ("TIM HORTONS", "Just a little treat"),
    ("ED'S REAL SCOOP", "Just a little treat"),
    ("SQ *PILOT COFFEE QUEEN ST", "Just a little treat"),
    ("SQ *BOXCAR SOCIAL", "Just a little treat"),
    ("BOXCAR SOCIAL", "Just a little treat"),
    ("THE SOURCE BULK FOODS", "Groceries"),
    ("SHOPPERS DRUG MART", "Groceries"),
    ("RAISE THE ROOT ORGANIC MA", "Groceries"),
    ("FRESHCO", "Groceries"),
    ("FARM BOY", "Groceries"),
    ("PIONEER", "Gas"),
    ("CO-OP LIFE/VIE", "Insurance"),
    ("COOPERATORS CSI", "Insurance"),
    ("BELL CANADA", "Internet"),
    ("TD BANK", "Mortgage"),
    ("THE GLOBE AND MAIL INC", "News"),
    ("THE NEW YORK TIMES", "News"),
    ("CANADIAN TIRE", "Other Household"),
    ("Queen Books", "Hobbies"),
    ("SQ *JONATHAN SAU PHOTOGRA", "Home furnishings"),
    ("BEST BUY", "Gifts"),
    ("TICKETMASTER CANADA HOST", "Gifts"),
    ("CHERRY ST BBQ", "Gifts"),
    ("Uniqlo Co.", "Clothing"),
    ("Pre-authorized Debit to Trent U", "Family support"),
    ("CANADAHELPS", "Recurring donation"),
    ("COVENANT HOUSE TO", "One-time donation"),
    ("ETSY CANADA LIMITED TORONTO", "Entertainment"),
    ("CINEPLEX", "Entertainment"),
    ("TBJ CONCESSIONS", "Entertainment"),
    ("MCDONALD'S", "Restaurants/takeout"),
    ("REYES FARMS", "Restaurants/takeout"),
    ("UBER CANADA/UBEREATS", "Restaurants/takeout"),
    ("NAME-CHEAP.COM", "Subscriptions"),
    ("PATREON* MEMBERSHIP", "Subscriptions"),
    ("Patreon* Membership", "Subscriptions"),
    ("GOOGLE *YOUTUBEPREMIUM", "Subscriptions"),
    ("GOOGLE *YouTubePremium", "Subscriptions"),
    ("APPLE.COM/BILL", "Subscriptions"),
    ("CLAUDE.AI SUBSCRIPTION", "Subscriptions"),
    ("MAXSOLD INCORPORATED", "Other essentials"),
    ("ROVER.COM* PET SVCS.", "Cats"),
    ("WAYFAIR", "Home furnishings"),
    ("PARKING PERMIT-PERM", "Parking permit"),
    ("THE BROADVIEW HOTEL", "Travel"),
    ("GAP.com", "Clothing"),
    ("FONS-ELITEMUSICACADEMY", "Hobbies"),
    ("MIDJOURNEY INC. SOUTH SAN FRANC", "Subscriptions"),
    ("CUSTOMAT.CA MATBOARDS", "Hobbies"),
    ("MOLSOVAN HAND PULLED NO", "Restaurants/takeout"),
    ("THE SECOND CITY TORONTO", "Entertainment"),
)

# (category, keyword substrings)
KEYWORD_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Transit", ("PRESTO", "TTC", "GO TRANSIT", "TRANSIT", "UBER", "LYFT")),
    ("Just a little treat", ("COFFEE", "STARBUCKS", "TIM HORTONS", "CAFE", "DONUT", "BOXCAR")),
    ("Groceries", ("LOBLAWS", "METRO", "SOBEYS", "WALMART", "COSTCO", "FARMBOY", "FARM BOY")),
    ("Gas", ("PETRO", "SHELL", "ESSO", "PIONEER", "CHEVRON")),
    (
        "Restaurants/takeout",
        ("RESTAURANT", "MCDONALD", "BURGER", "PIZZA", "SUSHI", "CHINESE", "UBER", "UBEREATS"),
    ),
    # Marketplace orders could be anything; the marker check below flags them.
    ("Other Household", ("AMZN", "AMAZON")),
    ("Insurance", ("INSURANCE", "ALLSTATE", "STATE FARM")),
    ("Phone", ("ROGERS", "BELL", "TELUS", "FIDO")),
    ("Internet", ("ROGERS", "BELL", "TELUS")),
    ("Banking fees", ("BANK FEE", "NSF", "OVERDRAFT")),
    ("Entertainment", ("CINEMA", "MOVIE", "THEATRE", "CINEPLEX", "TBJ CONCESSIONS")),
    ("Gym/fitness", ("GYM", "FITNESS", "YOGA", "SPIN")),
    ("Clothing", ("GAP", "H&M", "ZARA", "UNIQLO")),
    ("Home furnishings", ("IKEA", "WAYFAIR", "HOME DEPOT", "CANADIAN TIRE")),
    (
        "Subscriptions",
        ("NETFLIX", "SPOTIFY", "ADOBE", "MICROSOFT", "PATREON", "YOUTUBE", "APPLE.COM"),
    ),
)

MARKETPLACE_MARKERS: tuple[str, ...] = ("AMZN", "AMAZON")


class MerchantCategorizer:
    """Greedy, deterministic classifier over ordered merchant/keyword tables."""

    def __init__(
        self,
        exact_matches: Sequence[tuple[str, str]] = EXACT_MATCHES,
        keyword_patterns: Sequence[tuple[str, Sequence[str]]] = KEYWORD_PATTERNS,
        *,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        # Upper-case once so each lookup only upper-cases the description.
        self._exact = tuple((m.upper(), c) for m, c in exact_matches)
        self._keywords = tuple(
            (c, tuple(k.upper() for k in kws)) for c, kws in keyword_patterns
        )
        self.default_category = default_category

    def categorize(self, description: str) -> CategoryResult:
        text = description.upper()

        for merchant, category in self._exact:
            if merchant in text:
                return CategoryResult(category, needs_review=False)

        for category, keywords in self._keywords:
            if any(k in text for k in keywords):
                marketplace = any(m in text for m in MARKETPLACE_MARKERS)
                return CategoryResult(category, needs_review=marketplace)

        return CategoryResult(self.default_category, needs_review=True)


__all__ = [
    "DEFAULT_CATEGORY",
    "EXACT_MATCHES",
    "KEYWORD_PATTERNS",
    "MARKETPLACE_MARKERS",
    "MerchantCategorizer",
]
