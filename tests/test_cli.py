import json
import logging

import httpx
import pytest

from api_showcase import cli
from api_showcase.api.fetcher import DataFetcher, build_async_client
from api_showcase.cli import build_loader, main, parse_args, run_command
from api_showcase.config import AppConfig
from api_showcase.pipeline.section import ConsoleSurface

POSTS = [{"userId": 1, "id": i, "title": f"title {i}", "body": f"body {i}"} for i in range(1, 4)]


def fetcher_for(handler, config):
    client = build_async_client(config, transport=httpx.MockTransport(handler))
    return DataFetcher(config, client=client)


def test_parse_args_commands():
    args = parse_args(["--max-attempts", "2", "search", "dolor"])
    assert args.command == "search"
    assert args.query == "dolor"
    assert args.max_attempts == 2

    args = parse_args(["comments", "4"])
    assert args.post_id == 4


def test_build_loader_sections():
    client = object()
    section, _, empty = build_loader(parse_args(["search", "x"]), client)
    assert section == "search"
    assert empty == 'No posts found matching "x".'
    assert build_loader(parse_args(["photos", "1"]), client)[0] == "photos"
    assert build_loader(parse_args(["user-posts", "1"]), client)[0] == "posts"


@pytest.mark.asyncio
async def test_run_command_renders_and_writes_jsonl(tmp_path):
    config = AppConfig()
    lines = []
    out = tmp_path / "out" / "posts.jsonl"
    args = parse_args(["--out", str(out), "posts"])

    code = await run_command(
        args, config, ConsoleSurface(write=lines.append), fetcher_for(lambda r: httpx.Response(200, json=POSTS), config)
    )

    assert code == 0
    assert "== posts (3) ==" in lines
    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [record["post_id"] for record in records] == [1, 2, 3]
    assert records[0]["title"] == "Title 1"


@pytest.mark.asyncio
async def test_run_command_reports_terminal_failure(tmp_path):
    config = AppConfig(max_attempts=2, retry_backoff_seconds=0.0)
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    lines = []
    out = tmp_path / "users.jsonl"
    args = parse_args(["--out", str(out), "users"])
    code = await run_command(args, config, ConsoleSurface(write=lines.append), fetcher_for(handler, config))

    assert code == 1
    assert len(calls) == 2
    assert lines[-1] == "[users] Failed to load users. Please try again later."
    assert not out.exists()


@pytest.fixture
def cli_env(monkeypatch):
    """Fixed config, recorded logging setup and no real command run."""
    state = {"levels": [], "runs": []}
    config = AppConfig(api_base_url="http://api.test", log_level="WARNING")
    monkeypatch.setattr(cli, "load_config", lambda: config)
    monkeypatch.setattr(cli, "configure_logging", state["levels"].append)

    async def fake_run_command(args, run_config, surface):
        state["runs"].append((args, run_config))
        return 0

    monkeypatch.setattr(cli, "run_command", fake_run_command)
    return state


def test_main_endpoints_lists_collection_urls(cli_env, capsys):
    main(["endpoints"])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "http://api.test/posts",
        "http://api.test/users",
        "http://api.test/albums",
        "http://api.test/comments",
        "http://api.test/photos",
    ]
    assert cli_env["runs"] == []


def test_main_logs_available_endpoints_on_startup(cli_env, caplog):
    with caplog.at_level(logging.INFO, logger="api_showcase.cli"):
        main(["endpoints"])

    messages = [record.getMessage() for record in caplog.records]
    assert "Available endpoints: /posts, /users, /albums, /comments, /photos" in messages


def test_main_log_level_flag_overrides_config(cli_env):
    main(["endpoints"])
    main(["--log-level", "DEBUG", "endpoints"])
    assert cli_env["levels"] == ["WARNING", "DEBUG"]


def test_main_rejects_non_positive_max_attempts(cli_env):
    with pytest.raises(SystemExit) as excinfo:
        main(["--max-attempts", "0", "posts"])

    assert excinfo.value.code == "Error: --max-attempts must be a positive integer."
    assert cli_env["levels"] == []
    assert cli_env["runs"] == []


def test_main_rejects_negative_count(cli_env):
    with pytest.raises(SystemExit) as excinfo:
        main(["random", "--count", "-1"])

    assert excinfo.value.code == "Error: --count must be zero or positive."
    assert cli_env["runs"] == []


def test_main_runs_command_with_overridden_attempts(cli_env):
    with pytest.raises(SystemExit) as excinfo:
        main(["--max-attempts", "5", "random", "--count", "2"])

    assert excinfo.value.code == 0
    (args, run_config), = cli_env["runs"]
    assert args.command == "random"
    assert args.count == 2
    assert run_config.max_attempts == 5
    assert run_config.api_base_url == "http://api.test"
