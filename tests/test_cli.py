from pathlib import Path

import pytest

from email_scraper import cli


def test_parse_args_with_websites() -> None:
    args = cli.parse_args(["--websites", "https://a.com", "https://b.com"])
    assert args.websites == ["https://a.com", "https://b.com"]
    assert args.max_pages == 40
    assert args.max_crawl_time == 30.0
    assert args.timeout == 10.0


def test_parse_args_with_websites_file() -> None:
    args = cli.parse_args(["--websites-file", "sites.txt"])
    assert args.websites_file == "sites.txt"


def test_parse_args_requires_source() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_namespace_to_config_reads_file_and_budgets(tmp_path: Path) -> None:
    sites = tmp_path / "sites.txt"
    sites.write_text("https://a.com\nhttps://b.com\n", encoding="utf-8")
    args = cli.parse_args(
        ["--websites-file", str(sites), "--max-pages", "5", "--timeout", "3", "--no-progress"]
    )
    config = cli.namespace_to_config(args)
    assert config.websites == ("https://a.com", "https://b.com")
    assert config.crawl.max_pages == 5
    assert config.crawl.request_timeout == 3.0
    assert config.show_progress is False


def test_main_returns_zero_on_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "run_pipeline", lambda config, logger: config.output)
    assert cli.main(["--websites", "https://a.com"]) == 0


def test_main_returns_two_on_invalid_config() -> None:
    assert cli.main(["--websites", "https://a.com", "--workers", "0"]) == 2
    assert cli.main(["--websites", "https://a.com", "--max-pages", "0"]) == 2


def test_main_returns_two_on_missing_websites_file(tmp_path: Path) -> None:
    assert cli.main(["--websites-file", str(tmp_path / "missing.txt")]) == 2
