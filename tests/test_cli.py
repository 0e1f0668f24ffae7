import json

from link_inspector.cli import build_parser, main, run_once

PAGE = """<html><head><title>Shop</title></head><body>
<a href="/cart">Cart</a>
<a href="https://bit.ly/deal">Deal</a>
<a href="https://www.shop.com/help#faq">Help</a>
<p>Mirror: http://198.51.100.7/login and https://partner.org/a</p>
</body></html>
"""


def test_run_once_with_urls():
    payload = json.loads(run_once(urls=["http://example.com/", "https://bit.ly/abc", "http://example.com/"]))
    assert [item["analysis"]["risk_score"] for item in payload["results"]] == [10, 20]
    assert payload["summary"]["total"] == 2
    assert payload["trace"][0]["stage"] == "analyze"


def test_run_once_scans_html_external_only_with_groups(tmp_path):
    page = tmp_path / "page.html"
    page.write_text(PAGE, encoding="utf-8")
    payload = json.loads(
        run_once(html_path=str(page), page_url="https://www.shop.com/", external_only=True, group=True)
    )
    urls = [item["candidate"]["raw_text"] for item in payload["results"]]
    assert urls == ["https://bit.ly/deal", "http://198.51.100.7/login", "https://partner.org/a"]
    assert [item["candidate"]["origin"] for item in payload["results"]] == ["hyperlink", "plain_text", "plain_text"]
    assert [group["count"] for group in payload["groups"]] == [1, 1, 1]


def test_main_prints_csv(capsys):
    code = main(["--url", "https://bit.ly/abc", "--format", "csv"])
    out = capsys.readouterr().out
    assert code == 0
    lines = out.splitlines()
    assert lines[0].startswith("# Exported: ")
    assert lines[1] == "URL,Type,Domain,Risk Level,Risk Score,HTTPS,Risks,Link Text"
    assert "https://bit.ly/abc,clickable,bit.ly,Low Risk,20,Yes,URL shortener (hidden destination)" in out


def test_main_reports_bad_config(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("rules:\n  phishing_keywords: nope\n", encoding="utf-8")
    code = main(["--url", "https://a.com/", "--config", str(bad)])
    assert code == 2
    assert "invalid rule configuration" in capsys.readouterr().err


def test_main_reports_external_only_without_page(capsys):
    code = main(["--url", "https://a.com/", "--external-only"])
    assert code == 2
    assert "reference page url" in capsys.readouterr().err


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.format == "json"
    assert args.url == []
    assert args.external_only is False


def test_main_loads_config_once(monkeypatch, capsys):
    import link_inspector.cli as cli

    calls = []
    real_load = cli.load_config

    def _counting_load(path=None):
        calls.append(path)
        return real_load(path)

    monkeypatch.setattr(cli, "load_config", _counting_load)
    assert main(["--url", "https://a.com/"]) == 0
    assert calls == [None]
    assert json.loads(capsys.readouterr().out)["summary"]["total"] == 1
