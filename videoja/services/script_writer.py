"""
AI script writer: turns a topic into a short promotional video script.

Failures never raise. The caller gets None and treats it as "no script
produced".
"""

import logging

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """Você é a VideoJá AI, uma inteligência artificial especializada em criar
roteiros curtos, chamativos e altamente visuais para vídeos.

Idioma obrigatório: Português do Brasil.

Objetivo:
Gerar roteiros prontos para virar vídeos com IA, focados em engajamento,
clareza e conversão.

Duração máxima dos roteiros: até 30 segundos.

Estrutura obrigatória de TODO roteiro:
1. Abertura impactante (até 3 segundos) que chame atenção imediata
2. Desenvolvimento rápido e claro da ideia principal
3. Chamada para ação direta e objetiva

Regras:
- Use linguagem simples, popular e persuasiva
- Frases curtas
- Sem emojis
- Sem hashtags
- Sem explicações técnicas
- Texto 100% pronto para narração ou geração de vídeo
- Não explique o que está fazendo, apenas entregue o roteiro final

Sempre entregue o roteiro dividido em cenas ou falas, de forma clara."""


class ScriptWriter:
    def __init__(self, api_key: str, model: str, client: genai.Client | None = None):
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    async def draft_script(self, topic: str) -> str | None:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=topic,
                config=types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
            )
            text = (response.text or "").strip()
        except Exception as e:
            logger.error(f"Script generation error: {e}")
            return None

        return text or None
