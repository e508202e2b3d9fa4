"""
Adaptador de paquetes por motor.
Agrega a cada prompt base un sufijo de estilo propio del motor destino.

La tabla de perfiles es heurística: no proviene de ninguna negociación real de
capacidades con los motores. Agregar un motor es agregar una fila.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..domain import catalog
from ..domain.models import (
    AspectRatio,
    CompatibilityNotes,
    EnginePacket,
    OptimizedPrompt,
    PacketStatus,
    TimelineClip,
)

logger = logging.getLogger(__name__)

OPTIMAL_NOTE = "Optimal configuration."


@dataclass(frozen=True)
class EngineProfile:
    """Fila de la tabla de motores."""
    match: str
    suffix: str
    prefers_widescreen: bool = False


ENGINE_PROFILES = (
    EngineProfile(
        match="veo",
        suffix=", cinematic camera movement, smooth motion, coherent scene, HDR, high fidelity, stable 24fps look",
        prefers_widescreen=True,
    ),
    EngineProfile(
        match="sora",
        suffix=", physics-consistent, detailed material behavior, natural dynamics, complex interactions, photorealistic",
    ),
    EngineProfile(
        match="wan",
        suffix=", movement-forward, dynamic camera move emphasized, strong contrast, dramatic lighting",
    ),
)

GENERIC_PROFILE = EngineProfile(match="", suffix=", high quality video, 4k")


def resolve_profile(engine: str) -> EngineProfile:
    """Primer perfil cuyo nombre aparece en el motor (sin distinguir mayúsculas)."""
    name = (engine or "").lower()
    for profile in ENGINE_PROFILES:
        if profile.match in name:
            return profile
    return GENERIC_PROFILE


def optimize_prompt(base_prompt: str, engine: str, aspect_ratio: AspectRatio) -> str:
    """Prompt base + sufijo del motor + palabras clave del formato."""
    profile = resolve_profile(engine)
    return f"{base_prompt}{profile.suffix}{catalog.RATIO_KEYWORDS[aspect_ratio]}"


def assess_compatibility(engine: str, aspect_ratio: AspectRatio) -> tuple[PacketStatus, CompatibilityNotes]:
    profile = resolve_profile(engine)
    if profile.prefers_widescreen and aspect_ratio in catalog.VERTICAL_RATIOS:
        note = (
            f"WARNING: {engine} performs best in 16:9. A {aspect_ratio.value} vertical crop "
            f"may lose essential details (heuristic, not verified against the engine)."
        )
        return PacketStatus.WARNING, CompatibilityNotes(ratio_supported=False, notes=note)
    return PacketStatus.READY, CompatibilityNotes(ratio_supported=True, notes=OPTIMAL_NOTE)


def adapt_packet(
    timeline: Sequence[TimelineClip],
    engine: str,
    aspect_ratio: AspectRatio,
) -> EnginePacket:
    """
    Genera el paquete de un motor: un prompt optimizado por clip,
    mismos ids y mismo orden que la línea de tiempo.

    Args:
        timeline: Clips compilados
        engine: Nombre del motor destino
        aspect_ratio: Formato del revelado

    Returns:
        EnginePacket con estado y notas de compatibilidad
    """
    status, notes = assess_compatibility(engine, aspect_ratio)
    if status is PacketStatus.WARNING:
        logger.warning(notes.notes)

    prompts: List[OptimizedPrompt] = [
        OptimizedPrompt(
            clip_id=clip.id,
            prompt=optimize_prompt(clip.gen_prompt_base, engine, aspect_ratio),
        )
        for clip in timeline
    ]
    return EnginePacket(
        engine=engine,
        status=status,
        optimized_prompts=prompts,
        compatibility_notes=notes,
    )
