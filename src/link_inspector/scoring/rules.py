"""Heuristic rule set: configurable indicator lists and the ordered rule table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from link_inspector.domain.url.models import NormalizedUrl
from link_inspector.domain.url.normalize import display_domain, is_ip_address

DEFAULT_PHISHING_KEYWORDS: tuple[str, ...] = (
    "login",
    "verify",
    "account",
    "secure",
    "update",
    "confirm",
    "banking",
    "password",
    "suspended",
    "urgent",
    "click",
    "free",
    "winner",
    "prize",
    "claim",
    "limited",
    "expire",
)
DEFAULT_SHORTENER_DOMAINS: tuple[str, ...] = (
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "t.co",
    "ow.ly",
    "is.gd",
    "buff.ly",
    "adf.ly",
    "short.link",
    "tiny.cc",
)
DEFAULT_SUSPICIOUS_TLDS: tuple[str, ...] = (".tk", ".ml", ".ga", ".cf", ".gq", ".xyz", ".top")

KEYWORD_POINTS = 5
KEYWORD_MAX_SCORED = 6
LONG_URL_LENGTH = 200
MAX_SUBDOMAINS = 2
MAX_SCORE = 100
_HOST_ALLOWED = frozenset("abcdefghijklmnopqrstuvwxyz0123456789.-")


def _clean_entries(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"{field_name} must be a list of strings")
    cleaned: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ValueError(f"{field_name}[{index}] must be a string, got {type(item).__name__}")
        entry = item.strip().lower()
        if not entry:
            raise ValueError(f"{field_name}[{index}] is empty")
        cleaned.append(entry)
    if not cleaned:
        raise ValueError(f"{field_name} must not be empty")
    return tuple(dict.fromkeys(cleaned))


class RuleSet(BaseModel):
    """Indicator lists and level thresholds; data only, no scoring behavior."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phishing_keywords: tuple[str, ...] = Field(default=DEFAULT_PHISHING_KEYWORDS)
    shortener_domains: tuple[str, ...] = Field(default=DEFAULT_SHORTENER_DOMAINS)
    suspicious_tlds: tuple[str, ...] = Field(default=DEFAULT_SUSPICIOUS_TLDS)
    medium_threshold: int = Field(default=31, ge=1, le=100)
    high_threshold: int = Field(default=61, ge=1, le=100)

    @field_validator("phishing_keywords", "shortener_domains", mode="before")
    @classmethod
    def _validate_list(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        return _clean_entries(value, info.field_name)

    @field_validator("suspicious_tlds", mode="before")
    @classmethod
    def _validate_tlds(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        entries = _clean_entries(value, info.field_name)
        return tuple(dict.fromkeys(item if item.startswith(".") else f".{item}" for item in entries))

    @model_validator(mode="after")
    def _check_thresholds(self) -> "RuleSet":
        if self.medium_threshold >= self.high_threshold:
            raise ValueError("medium_threshold must be below high_threshold")
        return self


DEFAULT_RULES = RuleSet()


@dataclass(frozen=True)
class RuleHit:
    points: int
    reason: str


@dataclass(frozen=True)
class UrlFeatures:
    """The parsed URL plus the lower-cased full string the keyword rule scans."""

    url: NormalizedUrl
    full_url: str

    @classmethod
    def from_url(cls, url: NormalizedUrl) -> "UrlFeatures":
        return cls(url=url, full_url=url.raw.lower())


def _non_https(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if features.url.scheme != "https":
        return RuleHit(10, "Non-HTTPS connection")
    return None


def _ip_host(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if is_ip_address(features.url.host):
        return RuleHit(30, "IP-based URL (suspicious)")
    return None


def is_url_shortener(host: str, shorteners: tuple[str, ...]) -> bool:
    domain = display_domain(host)
    return any(domain == item or domain.endswith("." + item) for item in shorteners)


def _shortener(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if is_url_shortener(features.url.host, rules.shortener_domains):
        return RuleHit(20, "URL shortener (hidden destination)")
    return None


def matched_keywords(full_url: str, keywords: tuple[str, ...]) -> list[str]:
    return [keyword for keyword in keywords if keyword in full_url]


def _keywords(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    matches = matched_keywords(features.full_url, rules.phishing_keywords)
    if not matches:
        return None
    points = KEYWORD_POINTS * min(len(matches), KEYWORD_MAX_SCORED)
    # Reason reports every match even though scoring stops at the cap.
    return RuleHit(points, f"Contains {len(matches)} suspicious keyword(s)")


def _suspicious_tld(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if any(features.url.host.endswith(tld) for tld in rules.suspicious_tlds):
        return RuleHit(10, "Suspicious top-level domain")
    return None


def subdomain_count(host: str) -> int:
    return len(host.split(".")) - 2


def _subdomains(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if subdomain_count(features.url.host) > MAX_SUBDOMAINS:
        return RuleHit(5, "Multiple subdomains")
    return None


def _long_url(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if len(features.full_url) > LONG_URL_LENGTH:
        return RuleHit(5, "Unusually long URL")
    return None


def _special_characters(features: UrlFeatures, rules: RuleSet) -> RuleHit | None:
    if any(ch not in _HOST_ALLOWED for ch in features.url.host.lower()):
        return RuleHit(10, "Special characters in domain")
    return None


Rule = Callable[[UrlFeatures, RuleSet], "RuleHit | None"]

RULES: tuple[tuple[str, Rule], ...] = (
    ("non_https", _non_https),
    ("ip_host", _ip_host),
    ("url_shortener", _shortener),
    ("phishing_keywords", _keywords),
    ("suspicious_tld", _suspicious_tld),
    ("multiple_subdomains", _subdomains),
    ("long_url", _long_url),
    ("special_characters", _special_characters),
)


def apply_rules(url: NormalizedUrl, rules: RuleSet) -> list[tuple[str, RuleHit]]:
    """Evaluate every rule independently and return the hits in table order."""

    features = UrlFeatures.from_url(url)
    hits: list[tuple[str, RuleHit]] = []
    for name, rule in RULES:
        hit = rule(features, rules)
        if hit is not None:
            hits.append((name, hit))
    return hits
