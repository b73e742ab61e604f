"""Tests for CLI commands."""

import pytest

from cli.commands import build_parser, main


async def _run(capsys, *argv):
    await main(list(argv))
    return capsys.readouterr().out


def test_parser_accepts_project_after_action(tmp_path):
    args = build_parser().parse_args(["mother", "add", "EWE-1", "--project", str(tmp_path)])
    assert args.command == "mother"
    assert args.mother_action == "add"
    assert args.project == str(tmp_path)


def test_parser_rejects_unknown_sex():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["offspring", "record", "EWE-1-1", "L1", "--sex", "other"])


@pytest.mark.asyncio
async def test_record_and_report_flow(tmp_path, capsys):
    project = str(tmp_path)
    out = await _run(capsys, "mother", "add", "EWE-1", "--project", project)
    assert "Mother EWE-1 registered" in out

    out = await _run(capsys, "litter", "record", "EWE-1", "--born", "2024-03-01", "--size", "2",
                     "--project", project)
    assert "Litter EWE-1-1 recorded" in out

    await _run(capsys, "offspring", "record", "EWE-1-1", "L1", "--sex", "female", "--project", project)
    await _run(capsys, "offspring", "record", "EWE-1-1", "L2", "--sex", "male", "--project", project)
    await _run(capsys, "offspring", "wean", "L1", "--project", project)

    out = await _run(capsys, "report", "generate", "EWE-1", "--start", "2024-01-01",
                     "--end", "2024-12-31", "--name", "spring", "--project", project)
    assert "Weaning Survival: 50.00%" in out

    out = await _run(capsys, "report", "list", "--project", project)
    assert "spring" in out

    out = await _run(capsys, "offspring", "list", "EWE-1-1", "--project", project)
    assert "alive, weaned" in out


@pytest.mark.asyncio
async def test_failure_prints_error_and_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        await main(["offspring", "wean", "L9", "--project", str(tmp_path)])
    assert exc_info.value.code == 1
    assert "Error: Offspring with ID 'L9' not found." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_invalid_date_is_rejected_before_storage(tmp_path, capsys):
    with pytest.raises(SystemExit):
        await main(["litter", "record", "EWE-1", "--born", "someday", "--size", "1",
                    "--project", str(tmp_path)])
    assert "Invalid arguments" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_litter_update_requires_a_field(tmp_path, capsys):
    with pytest.raises(SystemExit):
        await main(["litter", "update", "EWE-1-1", "--project", str(tmp_path)])
    assert "Nothing to update" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_summary_get_prints_sections(tmp_path, capsys, monkeypatch, fake_summarizer):
    project = str(tmp_path)
    await _run(capsys, "mother", "add", "EWE-1", "--project", project)
    await _run(capsys, "report", "generate", "EWE-1", "--start", "2024-01-01",
               "--end", "2024-12-31", "--name", "spring", "--project", project)

    monkeypatch.setattr(
        "cli.commands.LLMSummarizer.from_env",
        lambda model=None, api_key=None: fake_summarizer,
    )
    out = await _run(capsys, "summary", "get", "spring", "--project", project)
    assert "High performers: EWE-1" in out
    assert "Low performers: EWE-2" in out
    assert "Concerning trends: -" in out


@pytest.mark.asyncio
async def test_summary_without_api_key(tmp_path, capsys, monkeypatch):
    project = str(tmp_path)
    await _run(capsys, "mother", "add", "EWE-1", "--project", project)
    await _run(capsys, "report", "generate", "EWE-1", "--start", "2024-01-01",
               "--end", "2024-12-31", "--name", "spring", "--project", project)

    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setattr("cli.commands.load_dotenv", lambda: None)
    with pytest.raises(SystemExit):
        await main(["summary", "get", "spring", "--model", "haiku", "--project", project])
    assert "ANTHROPIC_API_KEY" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_cached_summary_needs_no_api_key(tmp_path, capsys, monkeypatch, fake_summarizer):
    project = str(tmp_path)
    await _run(capsys, "mother", "add", "EWE-1", "--project", project)
    await _run(capsys, "report", "generate", "EWE-1", "--start", "2024-01-01",
               "--end", "2024-12-31", "--name", "spring", "--project", project)
    monkeypatch.setattr(
        "cli.commands.LLMSummarizer.from_env",
        lambda model=None, api_key=None: fake_summarizer,
    )
    await _run(capsys, "summary", "get", "spring", "--project", project)

    def no_key(model=None, api_key=None):
        raise ValueError("No API key for provider 'anthropic'.")

    monkeypatch.setattr("cli.commands.LLMSummarizer.from_env", no_key)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("cli.commands.load_dotenv", lambda: None)

    out = await _run(capsys, "summary", "get", "spring", "--project", project)
    assert "High performers: EWE-1" in out
    assert len(fake_summarizer.calls) == 1

    with pytest.raises(SystemExit):
        await main(["summary", "regenerate", "spring", "--project", project])
    assert "No API key" in capsys.readouterr().out
