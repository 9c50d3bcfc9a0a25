from __future__ import annotations

from pathlib import Path

import pytest

from sori.cli import EXIT_OK, EXIT_USAGE, main
from sori.configuration import SoriConfig, clear_settings_cache

PARAGRAPH = "The former president spoke. He was elected in 2017."


def _lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_context_command(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["context", "former", "--context", PARAGRAPH])

    lines = _lines(capsys)
    assert exit_code == EXIT_OK
    assert lines[0] == "The former president spoke."
    assert "sentence" in lines[2]


def test_context_command_reads_file(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    source = tmp_path / "block.txt"
    source.write_text("Intro line\n\n   The former   president spoke.", encoding="utf-8")

    assert main(["context", "former", "--context-file", str(source)]) == EXIT_OK
    assert _lines(capsys)[0] == "Intro line The former president spoke."


def test_context_command_missing_file(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    exit_code = main(["context", "former", "--context-file", str(tmp_path / "missing.txt")])

    assert exit_code == EXIT_USAGE
    assert "could not be read" in capsys.readouterr().out


def test_translate_with_echo_provider(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["translate", "hello world", "-p", "echo", "-t", "fr"])

    lines = _lines(capsys)
    assert exit_code == EXIT_OK
    assert lines[0] == "hello world"
    assert "French (fr)" in lines[1]


def test_translate_contextual_with_echo_provider(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["translate", "former", "-p", "echo", "-t", "fr", "--context", PARAGRAPH])

    output = capsys.readouterr().out
    assert exit_code == EXIT_OK
    assert output.splitlines()[0] == "former"
    assert "Context type:    sentence" in output
    assert "Context:         The former president spoke." in output


def test_translate_unsupported_language(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["translate", "hello", "-p", "echo", "-t", "xx"])

    assert exit_code == EXIT_USAGE
    assert "not supported" in capsys.readouterr().out


def test_define_rejects_phrases(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["define", "two words", "-p", "echo"])

    assert exit_code == EXIT_USAGE
    assert "single words" in capsys.readouterr().out


def test_define_resolves_page_language_tag(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["define", "bonjour", "-p", "echo", "--page-language", "fr-CA"])

    output = capsys.readouterr().out
    assert exit_code == EXIT_OK
    assert "monolingual" in output
    assert "French (fr)" in output


def test_missing_configuration_is_reported(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    for name in SoriConfig.model_fields:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    try:
        exit_code = main(["translate", "hello"])
    finally:
        clear_settings_cache()

    assert exit_code == EXIT_USAGE
    assert "OPENAI_API_KEY" in capsys.readouterr().out


AZURE_ENVIRONMENT = {
    "AZURE_OPENAI_API_KEY": "azure-key",
    "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com",
    "AZURE_OPENAI_API_VERSION": "2024-06-01",
    "AZURE_OPENAI_DEPLOYMENT_NAME": "sori",
}


@pytest.fixture
def recorded_providers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate settings and record which client kind answers each lookup."""

    from sori.providers import OpenAICompletionProvider

    kinds: list[str] = []

    def fake_complete(self, prompt, *, model=None, timeout=30.0):
        kinds.append(self.provider_kind)
        return "bonjour"

    for name in SoriConfig.model_fields:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(OpenAICompletionProvider, "complete", fake_complete)
    clear_settings_cache()
    yield kinds
    clear_settings_cache()


def test_azure_flag_checks_azure_credentials_only(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    recorded_providers: list[str],
) -> None:
    for name, value in AZURE_ENVIRONMENT.items():
        monkeypatch.setenv(name, value)

    exit_code = main(["translate", "hello", "-p", "azure_openai", "-t", "fr"])

    assert exit_code == EXIT_OK
    assert _lines(capsys)[0] == "bonjour"
    assert recorded_providers == ["azure_openai"]


def test_azure_flag_reports_missing_azure_settings(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    recorded_providers: list[str],
) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    exit_code = main(["translate", "hello", "-p", "azure", "-t", "fr"])

    output = capsys.readouterr().out
    assert exit_code == EXIT_USAGE
    assert "AZURE_OPENAI_ENDPOINT" in output
    assert "OPENAI_API_KEY is required" not in output
    assert recorded_providers == []


def test_openai_flag_overrides_configured_azure_provider(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    recorded_providers: list[str],
) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "azure_openai")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    exit_code = main(["translate", "hello", "-p", "openai", "-t", "fr"])

    assert exit_code == EXIT_OK
    assert _lines(capsys)[0] == "bonjour"
    assert recorded_providers == ["openai"]


def test_configured_provider_is_used_without_flag(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    recorded_providers: list[str],
) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "azure_openai")
    for name, value in AZURE_ENVIRONMENT.items():
        monkeypatch.setenv(name, value)

    assert main(["translate", "hello", "-t", "fr"]) == EXIT_OK
    assert recorded_providers == ["azure_openai"]


def test_unknown_provider_flag(
    capsys: pytest.CaptureFixture[str], recorded_providers: list[str]
) -> None:
    exit_code = main(["translate", "hello", "-p", "carrier-pigeon"])

    assert exit_code == EXIT_USAGE
    assert "Unknown completion provider 'carrier-pigeon'" in capsys.readouterr().out
