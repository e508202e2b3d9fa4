from pathlib import Path

import pytest

from moviola.config import CompilerRules
from moviola.domain.models import CompilerInput, MoviolaRequest, RevealSettings
from moviola.orchestrator import MoviolaCompiler

REPO_ROOT = Path(__file__).resolve().parent.parent

MERCADO = (
    "El mercado despierta con el olor a café. "
    "Las mujeres tejen historias mientras venden. "
    "El sol cae sobre Chilpancingo."
)

FIXED_CLOCK_MS = 1_700_000_000_000


def long_narrative(words: int) -> str:
    """Texto de prueba con una oración cada seis palabras."""
    tokens = []
    for i in range(words):
        token = f"palabra{i}"
        if (i + 1) % 6 == 0:
            token += "."
        tokens.append(token)
    return " ".join(tokens)


@pytest.fixture
def rules():
    return CompilerRules()


@pytest.fixture
def compiler(rules):
    return MoviolaCompiler(rules=rules, clock=lambda: FIXED_CLOCK_MS)


@pytest.fixture
def make_input():
    def _make(
        narrative=MERCADO,
        duration=9,
        engine="Veo",
        ratio="16:9",
        cultural=("textiles bordados", "café de olla"),
        visual_prompt="",
        **settings,
    ):
        reveal = {"aspect_ratio": ratio, "negative_prompt": "blur, distortion"}
        reveal.update(settings)
        return CompilerInput(
            trace_id="trace-001",
            created_at=FIXED_CLOCK_MS,
            analysis_context="Mercado tradicional al amanecer, puestos de madera",
            narrative_text=narrative,
            cultural_elements=list(cultural),
            compiled_visual_prompt=visual_prompt,
            reveal_settings=RevealSettings(**reveal),
            moviola=MoviolaRequest(engine=engine, duration_sec=duration, intent="Teaser documental"),
        )

    return _make
