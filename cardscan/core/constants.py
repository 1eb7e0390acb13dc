from typing import Final, FrozenSet, Dict

# Card number length bounds (ISO/IEC 7812 PAN)
CARD_NUMBER_MIN_LENGTH: Final[int] = 13
CARD_NUMBER_MAX_LENGTH: Final[int] = 19

# Embossed cardholder name limit (ISO/IEC 7813 track 1)
HOLDER_NAME_MAX_LENGTH: Final[int] = 26
HOLDER_NAME_MIN_WORDS: Final[int] = 2

# Two-digit years are read as 20YY
YEAR_OFFSET: Final[int] = 2000

# Words printed on cards that are never part of a holder name
HOLDER_DENY_WORDS: Final[FrozenSet[str]] = frozenset({
    # validity boilerplate
    "VALID", "THRU", "THROUGH", "FROM", "GOOD", "UNTIL", "EXPIRES", "EXPIRY",
    "EXPIRATION", "EXP", "END", "DATE", "MONTH", "YEAR", "MEMBER", "SINCE",
    "AUTHORIZED", "SIGNATURE", "NOT", "TRANSFERABLE",
    # card products
    "DEBIT", "CREDIT", "CARD", "PREPAID", "BUSINESS", "CORPORATE", "PLATINUM",
    "GOLD", "SILVER", "CLASSIC", "STANDARD", "PREMIER", "REWARDS", "INFINITE",
    "WORLD", "ELITE", "ELECTRON", "BLACK", "TITANIUM",
    # networks
    "VISA", "MASTERCARD", "MAESTRO", "AMEX", "AMERICAN", "EXPRESS", "DISCOVER",
    "DINERS", "CLUB", "JCB", "UNIONPAY", "MIR", "RUPAY", "CIRRUS",
    # banks
    "BANK", "CHASE", "CITI", "CITIBANK", "BARCLAYS", "HSBC", "SANTANDER",
    "WELLS", "FARGO", "CAPITAL", "REVOLUT", "MONZO", "INTERNATIONAL",
    # months
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "SEPT",
    "OCT", "NOV", "DEC",
})

# Words that introduce a start or membership date rather than the expiry
START_DATE_WORDS: Final[FrozenSet[str]] = frozenset({"FROM", "SINCE", "MEMBER"})

# Leading digit -> card network
CARD_BRANDS: Final[Dict[str, str]] = {
    "3": "American Express",
    "4": "Visa",
    "5": "MasterCard",
    "6": "Discover",
}
