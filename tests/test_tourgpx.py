import urllib.error

import pytest

import converter
import tourgpx
from conftest import FakeOpener, FakeResponse, tour_page, tour_payload
from fetcher import PageFetcher
from formats import read_gpx

URL = "https://www.komoot.com/tour/123456"


@pytest.fixture
def fake_network(monkeypatch):
    """Route the CLI's downloads through a FakeOpener, without sleeping."""
    opener = FakeOpener()
    seen = {}

    def factory(config, deadline):
        seen["config"] = config
        return PageFetcher(config, deadline, opener=opener, sleep=lambda s: None)

    monkeypatch.setattr(converter, "PageFetcher", factory)
    opener.seen = seen
    return opener


@pytest.mark.parametrize("argv", [
    [],
    [URL],
    ["-o", "out.gpx"],
    ["-o", "out.gpx", URL, "https://www.komoot.com/tour/2"],
])
def test_usage_errors_exit_1(argv, capsys):
    assert tourgpx.main(argv) == 1
    assert "usage: tourgpx" in capsys.readouterr().err


def test_unknown_option_exits_1(capsys):
    with pytest.raises(SystemExit) as exc_info:
        tourgpx.main(["--bogus", "-o", "out.gpx", URL])
    assert exc_info.value.code == 1
    assert "usage: tourgpx" in capsys.readouterr().err


def test_success(fake_network, tmp_path, capsys):
    output = tmp_path / "tour.gpx"
    fake_network.outcomes.append(FakeResponse(tour_page(tour_payload()).encode("utf-8")))

    assert tourgpx.main(["--output", str(output), URL]) == 0

    assert "1 points" in capsys.readouterr().out
    assert read_gpx(str(output)).tracks[0].name == "Test Tour"


def test_info_summary(fake_network, tmp_path, capsys):
    items = [{"lat": 48.1, "lng": 11.6, "alt": 520}, {"lat": 48.2, "lng": 11.7, "alt": 600}]
    fake_network.outcomes.append(FakeResponse(tour_page(tour_payload(items=items)).encode("utf-8")))

    assert tourgpx.main(["-o", str(tmp_path / "tour.gpx"), URL, "--info"]) == 0

    out = capsys.readouterr().out
    assert "Creator: komootgpx  (GPX 1.1)" in out
    assert "Track: Test Tour" in out
    assert "Points: 2" in out
    assert "Distance: 13." in out
    assert "End:   48.200000, 11.700000  600 m" in out


def test_options_override_configuration(fake_network, tmp_path):
    fake_network.outcomes.append(FakeResponse(tour_page(tour_payload()).encode("utf-8")))

    tourgpx.main([
        "-o", str(tmp_path / "tour.gpx"), URL,
        "--user-agent", "tester/1.0", "--timeout", "4", "--retries", "5",
        "--retry-delay", "0.5", "--deadline", "60",
    ])

    config = fake_network.seen["config"]
    assert config.user_agent == "tester/1.0"
    assert config.http_timeout == 4.0
    assert config.max_retries == 5
    assert config.retry_interval == 0.5
    assert config.deadline == 60.0
    assert fake_network.requests[0].get_header("User-agent") == "tester/1.0"
    assert fake_network.timeouts == [4.0]


def test_pipeline_failure_exits_1(fake_network, tmp_path, capsys):
    fake_network.outcomes.extend(urllib.error.URLError("offline") for _ in range(2))
    output = tmp_path / "tour.gpx"

    assert tourgpx.main(["-o", str(output), "--retries", "2", URL]) == 1

    err = capsys.readouterr().err
    assert "Error converting tour: failed to download tour data" in err
    assert "offline" in err
    assert not output.exists()


def test_format_distance():
    assert tourgpx.format_distance(999) == "999 m"
    assert tourgpx.format_distance(12345) == "12.35 km"


@pytest.mark.parametrize("option, value", [
    ("--retry-delay", "-1"),
    ("--retry-delay", "0"),
    ("--timeout", "0"),
    ("--deadline", "-5"),
    ("--deadline", "inf"),
    ("--retries", "0"),
])
def test_non_positive_values_rejected(fake_network, tmp_path, capsys, option, value):
    with pytest.raises(SystemExit) as exc_info:
        tourgpx.main(["-o", str(tmp_path / "tour.gpx"), URL, f"{option}={value}"])

    assert exc_info.value.code == 1
    assert option in capsys.readouterr().err
    assert fake_network.requests == []
