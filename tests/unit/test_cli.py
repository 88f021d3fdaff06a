import main as entry_point
from recon_spider import cli  # type: ignore[import]

from tests.helpers.recon_imports import DiscoveryReport, config_module


class FakeSpider:
    def __init__(self, config, session=None):
        self.config = config
        self.context = type("Context", (), {"fetch_count": 1})()

    def run(self):
        return DiscoveryReport.build(
            self.config.target_url,
            html_urls=["https://example.com/index.html"],
        )


def test_run_cli_writes_csv_without_probe(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.setattr(cli, "Spider", FakeSpider)
    json_path = tmp_path / "discovery.json"

    exit_code = cli.run_cli(
        [
            "-u",
            "https://example.com/",
            "--config-dir",
            str(tmp_path),
            "--output-dir",
            str(tmp_path / "out"),
            "--report-json",
            str(json_path),
            "--no-probe",
            "--init-config",
        ]
    )

    assert exit_code == 0
    assert (tmp_path / "out" / "example-com.csv").exists()
    assert (tmp_path / "api_core.txt").exists()
    assert DiscoveryReport.load(json_path).html_urls == ("https://example.com/index.html",)
    assert "https://example.com/index.html" in capsys.readouterr().out


def test_run_cli_rejects_invalid_target(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)

    exit_code = cli.run_cli(["-u", "example.com", "--config-dir", str(tmp_path)])

    assert exit_code == 2
    assert "full http(s) URL" in capsys.readouterr().out


def test_source_entry_point_returns_cli_exit_code(monkeypatch):
    received = []

    def fake_run_cli(argv):
        received.append(argv)
        return 2

    monkeypatch.setattr(entry_point, "run_cli", fake_run_cli)

    assert entry_point.main(["-u", "ftp://example.com"]) == 2
    assert received == [["-u", "ftp://example.com"]]
