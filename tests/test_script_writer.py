from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from videoja.services.script_writer import SYSTEM_INSTRUCTION, ScriptWriter


def _writer(generate_content: AsyncMock) -> ScriptWriter:
    client = MagicMock()
    client.aio.models.generate_content = generate_content
    return ScriptWriter(api_key="test-key", model="gemini-2.5-flash", client=client)


@pytest.mark.asyncio
async def test_draft_script_returns_text():
    generate_content = AsyncMock(return_value=SimpleNamespace(text="  Cena 1: Corra mais longe.\n"))

    script = await _writer(generate_content).draft_script("tênis de corrida")

    assert script == "Cena 1: Corra mais longe."
    kwargs = generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["contents"] == "tênis de corrida"
    assert kwargs["config"].system_instruction == SYSTEM_INSTRUCTION


@pytest.mark.asyncio
async def test_failure_returns_none():
    generate_content = AsyncMock(side_effect=RuntimeError("429 RESOURCE_EXHAUSTED"))

    assert await _writer(generate_content).draft_script("topic") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_empty_response_returns_none(text):
    generate_content = AsyncMock(return_value=SimpleNamespace(text=text))

    assert await _writer(generate_content).draft_script("topic") is None


def test_persona_rules():
    assert "Português do Brasil" in SYSTEM_INSTRUCTION
    assert "até 30 segundos" in SYSTEM_INSTRUCTION
    assert "Sem hashtags" in SYSTEM_INSTRUCTION
