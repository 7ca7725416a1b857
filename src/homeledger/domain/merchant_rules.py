"""Static merchant keyword rules.

Rules are ordered from most to least specific; the first rule with any
keyword contained in a narration wins. Sub-category names refer to the
default household categories seeded by `init-categories`.
"""

from dataclasses import dataclass

from homeledger.domain.entities import Confidence, TransactionType


@dataclass(frozen=True)
class MerchantRule:
    """Keyword substrings mapped to a canonical sub-category name."""

    keywords: tuple[str, ...]
    sub_category: str
    transaction_type: TransactionType
    confidence: Confidence

    def matches(self, narration: str) -> bool:
        text = narration.lower()
        return any(keyword in text for keyword in self.keywords)


def _rule(sub_category: str, confidence: Confidence, *keywords: str, income: bool = False) -> MerchantRule:
    return MerchantRule(
        keywords=tuple(k.lower() for k in keywords),
        sub_category=sub_category,
        transaction_type=TransactionType.INCOME if income else TransactionType.EXPENSE,
        confidence=confidence,
    )


HIGH = Confidence.HIGH
MEDIUM = Confidence.MEDIUM

DEFAULT_MERCHANT_RULES: tuple[MerchantRule, ...] = (
    _rule(
        "Groceries", HIGH,
        "bigbasket", "blinkit", "zepto", "dmart", "more retail", "spar", "reliance smart",
        "jiomart", "nature basket", "fresh to home", "grofers", "dunzo", "instamart",
        "bb instant", "bb now",
    ),
    _rule(
        "Food Ordering", HIGH,
        "swiggy", "zomato", "eatsure", "faasos", "behrouz", "dominos", "domino", "mcdonalds",
        "mcdonald", "kfc", "burger king", "pizza hut", "subway", "box8", "eatfit", "rebel foods",
    ),
    _rule(
        "Dining Out", MEDIUM,
        "restaurant", "cafe", "bistro", "dhaba", "biryani", "bakery", "starbucks", "ccd",
        "chaayos", "third wave",
    ),
    _rule(
        "Fuel", HIGH,
        "indian oil", "bharat petroleum", "bpcl", "hp petrol", "hindustan petroleum", "iocl",
        "petrol", "diesel", "fuel station", "petrol pump", "hpcl",
    ),
    _rule(
        "Shopping", MEDIUM,
        "amazon", "flipkart", "myntra", "ajio", "nykaa", "meesho", "snapdeal", "tatacliq",
        "croma", "reliance digital", "vijay sales", "decathlon",
    ),
    _rule(
        "Entertainment", HIGH,
        "netflix", "hotstar", "prime video", "spotify", "youtube premium", "bookmyshow", "pvr",
        "inox", "cinepolis", "disney", "jiocinema", "apple tv", "sony liv", "zee5",
    ),
    _rule(
        "Subscriptions", MEDIUM,
        "subscription", "apple.com", "google storage", "icloud", "microsoft 365", "adobe",
        "chatgpt", "openai",
    ),
    _rule(
        "Phone Bill", MEDIUM,
        "airtel prepaid", "airtel postpaid", "jio recharge", "jio prepaid", "vodafone",
        "vi telecom", "bsnl", "airtel mobile",
    ),
    _rule(
        "Internet", HIGH,
        "act fibernet", "airtel broadband", "airtel xstream", "jio fiber", "hathway",
        "you broadband", "tata play fiber", "excitel",
    ),
    _rule(
        "Medical", MEDIUM,
        "apollo", "pharmeasy", "netmeds", "medplus", "1mg", "hospital", "clinic", "diagnostic",
        "lab test", "pathology", "pharmacy", "medical store",
    ),
    _rule(
        "Transport", HIGH,
        "uber", "ola", "rapido", "metro", "irctc", "railway", "makemytrip", "goibibo", "redbus",
        "namma yatri", "blablacar", "indigo", "spicejet", "vistara", "air india",
    ),
    _rule(
        "Personal Care", MEDIUM,
        "urban company", "urbanclap", "salon", "spa", "parlour", "parlor", "grooming", "barber",
    ),
    _rule(
        "Electricity", HIGH,
        "electricity", "bescom", "tata power", "adani power", "msedcl", "torrent power", "cesc",
        "bses", "electric bill",
    ),
    _rule(
        "Water", HIGH,
        "water bill", "bwssb", "jal board", "water supply", "water utility",
    ),
    _rule(
        "Society Maintenance", MEDIUM,
        "society", "maintenance charge", "association", "rwa", "apartment maintenance",
        "flat maintenance", "mygate",
    ),
    _rule(
        "Maid/Help", MEDIUM,
        "maid", "helper", "cook salary", "domestic help", "house help",
    ),
    _rule(
        "Health Insurance", MEDIUM,
        "lic", "life insurance", "hdfc life", "icici prudential", "star health", "max life",
        "bajaj allianz", "insurance premium", "health insurance", "term plan",
    ),
    _rule(
        "Home Loan EMI", MEDIUM,
        "emi", "loan repay", "loan emi", "home loan", "car loan", "personal loan",
        "education loan", "equated monthly",
    ),
    _rule(
        "Rent", MEDIUM,
        "rent payment", "house rent", "flat rent", "room rent", "rental",
    ),
    _rule(
        "Salary", MEDIUM,
        "salary", "sal credit", "monthly salary", "employer",
        income=True,
    ),
    _rule(
        "General Savings", MEDIUM,
        "interest credit", "int credit", "fd interest", "rd interest", "savings interest",
        income=True,
    ),
)
