"""Column-name semantics for text columns.

A text column's name decides what kind of value it receives: a column called
``customer_email`` gets email addresses, ``shipping_city`` gets city names.
The decision is an ordered table of rules evaluated top to bottom; the first
rule with a pattern contained in the (lower-cased) column name wins, and
names that match nothing fall through to a single random word.

The order matters because names often match several categories
(``company_email`` matches both email and company) and must stay stable so
that datasets generated from the same schema look alike.

Example:
    >>> classify_column("company_email")
    <SemanticCategory.EMAIL: 'email'>
    >>> classify_column("ShippingCity")
    <SemanticCategory.ADDRESS: 'address'>
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from faker import Faker

# (fake, lower-cased column name) -> value
Producer = Callable[[Faker, str], str]

INDUSTRIES: tuple[str, ...] = (
    "Aerospace",
    "Agriculture",
    "Automotive",
    "Banking",
    "Biotechnology",
    "Construction",
    "Education",
    "Energy",
    "Entertainment",
    "Food & Beverages",
    "Healthcare",
    "Hospitality",
    "Insurance",
    "Logistics",
    "Manufacturing",
    "Media",
    "Pharmaceuticals",
    "Real Estate",
    "Retail",
    "Telecommunications",
)

JOB_FIELDS: tuple[str, ...] = (
    "Accounting",
    "Communications",
    "Data",
    "Design",
    "Engineering",
    "Finance",
    "Infrastructure",
    "Legal",
    "Marketing",
    "Operations",
    "Product",
    "Research",
    "Sales",
    "Security",
    "Support",
)

SENIORITY_LEVELS: tuple[str, ...] = (
    "Intern",
    "Junior",
    "Associate",
    "Mid-level",
    "Senior",
    "Lead",
    "Principal",
    "Director",
    "Chief",
)


class SemanticCategory(str, Enum):
    """Semantic categories a text column can fall into, in priority order."""

    NAME = "name"
    EMAIL = "email"
    ADDRESS = "address"
    COMPANY = "company"
    INTERNET = "internet"
    PAYMENT = "payment"
    PHONE = "phone"
    COLOR = "color"
    TIME = "time"
    JOB = "job"
    LOREM = "lorem"
    DEFAULT = "default"


@dataclass(frozen=True)
class SemanticRule:
    """One row of the dispatch table.

    Attributes:
        category: Category assigned when the rule matches
        patterns: Lower-case substrings; any one of them matching selects the rule
        producer: Builds one value from a Faker instance and the column name
    """

    category: SemanticCategory
    patterns: tuple[str, ...]
    producer: Producer

    def matches(self, column_name: str) -> bool:
        """Check whether any pattern occurs in the column name (case-insensitive)."""
        lowered = column_name.lower()
        return any(pattern in lowered for pattern in self.patterns)


def _pick(
    name: str,
    options: tuple[tuple[str, Callable[[], str]], ...],
    fallback: Callable[[], str],
) -> str:
    for pattern, produce in options:
        if pattern in name:
            return produce()
    return fallback()


def _person_name(fake: Faker, name: str) -> str:
    return fake.name()


def _email(fake: Faker, name: str) -> str:
    return fake.email()


def _address(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("street", fake.street_address),
            ("city", fake.city),
            ("state", fake.state),
            ("country", fake.country),
            ("zip", fake.postcode),
            ("postal", fake.postcode),
        ),
        lambda: (
            f"{fake.street_address()} {fake.secondary_address()}, "
            f"{fake.city()} {fake.postcode()}, {fake.country()}"
        ),
    )


def _company(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("company", fake.company),
            ("industry", lambda: fake.random_element(INDUSTRIES)),
            ("buzzword", fake.bs),
            ("business", fake.company_suffix),
        ),
        fake.company,
    )


def _internet(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("domain", fake.tld),
            ("ip", fake.ipv4),
            ("mac", fake.mac_address),
        ),
        fake.user_name,
    )


def _credit_card(fake: Faker, name: str) -> str:
    return fake.credit_card_number()


def _phone(fake: Faker, name: str) -> str:
    return fake.phone_number()


def _color(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("rgb", fake.rgb_css_color),
            ("hex", fake.hex_color),
        ),
        fake.color_name,
    )


def _time(fake: Faker, name: str) -> str:
    return _pick(name, (("zone", fake.timezone),), fake.word)


def _job(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("field", lambda: fake.random_element(JOB_FIELDS)),
            ("position", fake.job),
            ("seniority", lambda: fake.random_element(SENIORITY_LEVELS)),
        ),
        fake.word,
    )


def _lorem(fake: Faker, name: str) -> str:
    return _pick(
        name,
        (
            ("paragraph", fake.paragraph),
            ("review", fake.paragraph),
            ("post", fake.paragraph),
            ("sentence", fake.sentence),
            ("tweet", fake.sentence),
            ("comment", fake.sentence),
        ),
        fake.word,
    )


def _word(fake: Faker, name: str) -> str:
    return fake.word()


SEMANTIC_RULES: tuple[SemanticRule, ...] = (
    SemanticRule(SemanticCategory.NAME, ("name", "fullname", "username"), _person_name),
    SemanticRule(SemanticCategory.EMAIL, ("email",), _email),
    SemanticRule(
        SemanticCategory.ADDRESS,
        ("address", "street", "city", "state", "country", "zip", "postal"),
        _address,
    ),
    SemanticRule(
        SemanticCategory.COMPANY, ("company", "industry", "buzzword", "business"), _company
    ),
    SemanticRule(SemanticCategory.INTERNET, ("domain", "ip", "mac"), _internet),
    SemanticRule(SemanticCategory.PAYMENT, ("credit", "card", "number"), _credit_card),
    SemanticRule(SemanticCategory.PHONE, ("phone",), _phone),
    SemanticRule(SemanticCategory.COLOR, ("color", "rgb", "hex"), _color),
    SemanticRule(SemanticCategory.TIME, ("time", "zone"), _time),
    SemanticRule(
        SemanticCategory.JOB, ("job", "field", "position", "seniority", "title"), _job
    ),
    SemanticRule(
        SemanticCategory.LOREM,
        ("tweet", "text", "post", "comment", "review", "paragraph", "sentence", "word"),
        _lorem,
    ),
)

DEFAULT_RULE = SemanticRule(SemanticCategory.DEFAULT, (), _word)


def resolve_rule(column_name: str) -> SemanticRule:
    """Return the first rule matching the column name, or the default rule."""
    for rule in SEMANTIC_RULES:
        if rule.matches(column_name):
            return rule
    return DEFAULT_RULE


def classify_column(column_name: str) -> SemanticCategory:
    """Return the semantic category of a text column name."""
    return resolve_rule(column_name).category
