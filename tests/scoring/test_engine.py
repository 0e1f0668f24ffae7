import pytest

from link_inspector.domain.url.models import Origin, UrlCandidate
from link_inspector.scoring.engine import analyze, analyze_many, classify
from link_inspector.scoring.models import RiskLevel
from link_inspector.scoring.rules import RuleSet


def test_plain_http_url_scores_only_transport():
    result = analyze("http://example.com/")
    assert result.risk_score == 10
    assert result.reasons == ("Non-HTTPS connection",)
    assert result.risk_level is RiskLevel.LOW
    assert result.is_https is False
    assert result.domain == "example.com"
    assert result.scheme == "http"


def test_ip_host_with_login_keyword_is_medium():
    result = analyze(UrlCandidate(raw_text="https://192.168.1.1/login", origin=Origin.HYPERLINK))
    assert result.risk_score == 35
    assert result.reasons == ("IP-based URL (suspicious)", "Contains 1 suspicious keyword(s)")
    assert result.risk_level is RiskLevel.MEDIUM
    assert result.is_https is True


def test_shortener_is_low():
    result = analyze("https://bit.ly/abc")
    assert result.risk_score == 20
    assert result.reasons == ("URL shortener (hidden destination)",)
    assert result.risk_level is RiskLevel.LOW


def test_keyword_heavy_suspicious_tld_url():
    result = analyze("http://secure-verify-account-login.tk/free-prize-winner-claim-now-urgent")
    # 9 keywords match; only 6 are scored.
    assert result.reasons == (
        "Non-HTTPS connection",
        "Contains 9 suspicious keyword(s)",
        "Suspicious top-level domain",
    )
    assert result.risk_score == 50
    assert result.risk_level is RiskLevel.MEDIUM


def test_stacked_indicators_reach_high():
    url = "http://secure_login.verify.account.example.tk/update-confirm/" + "x" * 200
    result = analyze(url)
    assert result.reasons == (
        "Non-HTTPS connection",
        "Contains 6 suspicious keyword(s)",
        "Suspicious top-level domain",
        "Multiple subdomains",
        "Unusually long URL",
        "Special characters in domain",
    )
    assert result.risk_score == 70
    assert result.risk_level is RiskLevel.HIGH


def test_unparsable_input_returns_fallback():
    result = analyze("not a url")
    assert result.risk_score == 50
    assert result.risk_level is RiskLevel.MEDIUM
    assert result.reasons == ("Invalid URL format",)
    assert result.is_https is False
    assert result.domain == "unknown"
    assert result.scheme == "unknown"
    assert result.label == "Unable to analyze"


@pytest.mark.parametrize("raw", ["", "http://", "https://[bad"])
def test_fallback_never_raises(raw):
    assert analyze(raw).reasons == ("Invalid URL format",)


def test_score_is_capped_at_100():
    rules = RuleSet(shortener_domains=["0.0.1"], suspicious_tlds=[".1"])
    url = "http://10.0.0.1/login-verify-account-secure-update-confirm/" + "a" * 200
    result = analyze(url, rules)
    assert len(result.reasons) == 6
    assert result.risk_score == 100
    assert result.risk_level is RiskLevel.HIGH


def test_ipv6_host_trips_ip_and_character_rules():
    result = analyze("http://[2001:db8::1]/")
    assert result.reasons == (
        "Non-HTTPS connection",
        "IP-based URL (suspicious)",
        "Special characters in domain",
    )
    assert result.risk_score == 50


@pytest.mark.parametrize(
    ("url", "is_shortener"),
    [
        ("https://www.bit.ly/x", True),
        ("https://go.bit.ly/x", True),
        ("https://TinyURL.com/x", True),
        ("https://notbit.ly/x", False),
        ("https://bit.ly.example.com/x", False),
    ],
)
def test_shortener_matching(url, is_shortener):
    reasons = analyze(url).reasons
    assert ("URL shortener (hidden destination)" in reasons) is is_shortener


def test_subdomain_threshold():
    assert "Multiple subdomains" not in analyze("https://a.b.example.com/").reasons
    assert "Multiple subdomains" in analyze("https://a.b.c.example.com/").reasons


def test_long_url_threshold_is_strictly_greater_than_200():
    base = "https://example.com/"
    at_limit = base + "a" * (200 - len(base))
    assert len(at_limit) == 200
    assert "Unusually long URL" not in analyze(at_limit).reasons
    assert "Unusually long URL" in analyze(at_limit + "a").reasons


def test_keywords_match_case_insensitively_and_count_once_each():
    result = analyze("https://example.com/LOGIN/login/Login")
    assert result.reasons == ("Contains 1 suspicious keyword(s)",)
    assert result.risk_score == 5


def test_uppercase_host_is_not_special_characters():
    assert analyze("https://EXAMPLE.COM/").risk_score == 0


def test_underscore_host_counts_as_special_characters():
    assert analyze("https://my_host.example.com/").reasons == ("Special characters in domain",)


@pytest.mark.parametrize(
    ("score", "level"),
    [(0, RiskLevel.LOW), (30, RiskLevel.LOW), (31, RiskLevel.MEDIUM), (60, RiskLevel.MEDIUM), (61, RiskLevel.HIGH), (100, RiskLevel.HIGH)],
)
def test_level_boundaries(score, level):
    assert classify(score) is level


def test_level_boundaries_end_to_end():
    assert analyze("https://10.0.0.1/").risk_score == 30
    assert analyze("https://10.0.0.1/").risk_level is RiskLevel.LOW
    at_sixty = analyze("http://10.0.0.1/login-verify-account-secure")
    assert at_sixty.risk_score == 60
    assert at_sixty.risk_level is RiskLevel.MEDIUM
    above = analyze("http://10.0.0.1/login-verify-account-secure-update")
    assert above.risk_score == 65
    assert above.risk_level is RiskLevel.HIGH


def test_custom_thresholds_move_bands():
    rules = RuleSet(medium_threshold=10, high_threshold=20)
    assert analyze("http://example.com/", rules).risk_level is RiskLevel.MEDIUM
    assert analyze("https://bit.ly/x", rules).risk_level is RiskLevel.HIGH


def test_analysis_is_deterministic():
    url = "http://secure-verify-account-login.tk/free-prize-winner-claim-now-urgent"
    first = analyze(url)
    second = analyze(url)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


@pytest.mark.parametrize(
    ("weaker", "stronger"),
    [
        ("https://example.com/", "http://example.com/"),
        ("https://example.com/", "https://example.com/login"),
        ("https://example.com/login", "https://example.com/login-verify"),
        ("https://a.example.com/", "https://a.b.c.example.com/"),
        ("https://example.com/", "https://example.tk/"),
        ("https://example.com/", "https://ex_ample.com/"),
        ("https://example.com/", "https://93.184.216.34/"),
    ],
)
def test_adding_an_indicator_never_lowers_the_score(weaker, stronger):
    assert analyze(stronger).risk_score >= analyze(weaker).risk_score


@pytest.mark.parametrize(
    "raw",
    [
        "http://example.com/",
        "https://192.168.1.1/login",
        "not a url",
        "http://[::1]/" + "login-verify-account-secure-update-confirm-banking" * 10,
    ],
)
def test_score_stays_within_bounds(raw):
    assert 0 <= analyze(raw).risk_score <= 100


def test_analyze_many_pairs_candidates_with_results(link, plain):
    items = analyze_many([link("https://bit.ly/abc"), plain("not a url")])
    assert [item.candidate.origin for item in items] == [Origin.HYPERLINK, Origin.PLAIN_TEXT]
    assert [item.analysis.risk_score for item in items] == [20, 50]


@pytest.mark.parametrize("raw", ["http://2130706433/login", "http://0x7f.0.0.1/login"])
def test_obfuscated_ipv4_hosts_score_as_ip(raw):
    result = analyze(raw)
    assert result.domain == "127.0.0.1"
    assert result.reasons == (
        "Non-HTTPS connection",
        "IP-based URL (suspicious)",
        "Contains 1 suspicious keyword(s)",
    )
    assert result.risk_score == 45
    assert result.risk_level is RiskLevel.MEDIUM


def test_idn_host_is_not_special_characters():
    result = analyze("https://exämple.com/")
    assert result.domain == "xn--exmple-cua.com"
    assert result.reasons == ()
    assert result.risk_score == 0


@pytest.mark.parametrize(
    ("raw", "scheme"),
    [("mailto:someone@example.com", "mailto"), ("javascript:void(0)", "javascript"), ("tel:+15551234567", "tel")],
)
def test_hostless_schemes_are_scored_not_fallback(raw, scheme):
    result = analyze(raw)
    assert result.reasons == ("Non-HTTPS connection",)
    assert result.risk_score == 10
    assert result.risk_level is RiskLevel.LOW
    assert result.domain == ""
    assert result.scheme == scheme
    assert result.label == "Low Risk"
