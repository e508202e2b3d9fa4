"""
Constructor de la línea de tiempo.
Convierte los segmentos en clips con timecode, encuadre y un prompt base
agnóstico al motor de video.
"""

import logging
import re
from typing import List, Optional, Sequence

from ..config import CompilerRules
from ..domain import catalog
from ..domain.models import (
    ClipAudio,
    ClipVisuals,
    CompilerInput,
    Segment,
    TimelineClip,
    Timecode,
)

logger = logging.getLogger(__name__)

# Patrón de encuadre: el clip 0 establece, luego se repite el ciclo
ESTABLISHING_SHOT = "Wide Establishing Shot"
SHOT_CYCLE = ("Medium Shot", "Close Up", "Macro Detail")
CAMERA_CYCLE = ("Slow Pan", "Tracking Shot", "Dolly In", "Static Hold")

ESTABLISHING_ACTION = "Establishing scene, ambient atmosphere"
AMBIENT_SFX = "Ambience match"
UNDERSCORE_MUSIC = "Subtle underscore"

_WHITESPACE = re.compile(r"\s+")


def compact(text: Optional[str]) -> str:
    """Colapsa espacios y saltos de línea en un solo espacio."""
    return _WHITESPACE.sub(" ", text or "").strip()


def _sentence(text: str) -> str:
    """Cierra la frase con punto si no termina en puntuación."""
    text = text.rstrip()
    if not text or text.endswith((".", "!", "?", "…")):
        return text
    return f"{text}."


def format_timecode(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def shot_type_for(index: int) -> str:
    if index == 0:
        return ESTABLISHING_SHOT
    return SHOT_CYCLE[(index - 1) % len(SHOT_CYCLE)]


def camera_move_for(index: int) -> str:
    return CAMERA_CYCLE[index % len(CAMERA_CYCLE)]


def technical_line(data: CompilerInput) -> str:
    """Ajustes del revelado traducidos a instrucciones en lenguaje natural."""
    rs = data.reveal_settings
    parts = [
        catalog.lens_phrase(rs.lens),
        catalog.lighting_phrase(rs.lighting),
        catalog.FILM_STYLES[rs.film_style],
        f"Target aspect ratio: {rs.aspect_ratio.value}",
        catalog.FIDELITY[rs.fidelity],
        catalog.reference_weight_phrase(rs.reference_weight),
        catalog.template_phrase(rs.template_preset),
        catalog.watermark_phrase(rs.watermark),
    ]
    manual = compact(rs.manual_override)
    if manual:
        parts.append(f"Manual override (user): {manual}")
    clauses = [part.rstrip(".") for part in parts if part]
    return "Technical: " + "; ".join(clauses) + "."


def prompt_context(data: CompilerInput, rules: CompilerRules) -> List[str]:
    """Líneas comunes a todos los clips que van antes del encuadre."""
    lines = []
    scene = compact(data.analysis_context)[: rules.scene_max_chars]
    if scene:
        lines.append(_sentence(f"Scene: {scene}"))
    elements = [compact(e) for e in data.cultural_elements if compact(e)]
    if elements:
        lines.append(f"Cultural context ({rules.cultural_region}): {', '.join(elements)}.")
    intent = compact(data.moviola.intent) or rules.default_intent
    lines.append(_sentence(f"Intent: {intent}"))
    return lines


def build_prompt_base(
    segment: Segment,
    index: int,
    context: Sequence[str],
    data: CompilerInput,
) -> str:
    """
    Prompt base de un clip, en orden fijo:
    escena, contexto cultural, intención, encuadre, acción, visuales,
    línea técnica y exclusiones.
    """
    lines = list(context)
    lines.append(f"Shot: {shot_type_for(index)}, {camera_move_for(index)}.")
    lines.append(_sentence(f"Action: {compact(segment.text) or ESTABLISHING_ACTION}"))

    visuals = compact(data.compiled_visual_prompt)
    if visuals:
        lines.append(f"Visuals: {visuals}")

    lines.append(technical_line(data))

    negative = compact(data.reveal_settings.negative_prompt)
    if negative:
        lines.append(_sentence(f"Exclude: {negative}"))

    return compact(" ".join(lines))


def build_timeline(
    segments: Sequence[Segment],
    data: CompilerInput,
    rules: Optional[CompilerRules] = None,
) -> List[TimelineClip]:
    """
    Genera un clip por segmento, contiguos y empezando en 00:00.

    Args:
        segments: Segmentos producidos por segment_narrative
        data: Input del compilador
        rules: Reglas de compilación (usa las de por defecto si no se indican)

    Returns:
        Lista de TimelineClip en el mismo orden que los segmentos
    """
    rules = rules or CompilerRules()
    context = prompt_context(data, rules)
    focus = catalog.FIDELITY_FOCUS[data.reveal_settings.fidelity]

    clips: List[TimelineClip] = []
    cursor = 0
    for index, segment in enumerate(segments):
        text = compact(segment.text)
        clip = TimelineClip(
            id=f"clip_{index + 1:02d}",
            timecode=Timecode(
                in_=format_timecode(cursor),
                out=format_timecode(cursor + segment.duration_sec),
                duration_sec=segment.duration_sec,
            ),
            visuals=ClipVisuals(
                shot_type=shot_type_for(index),
                camera_move=camera_move_for(index),
                description=(text or ESTABLISHING_ACTION)[: rules.description_max_chars],
                focus=focus,
            ),
            audio=ClipAudio(
                voiceover=text or None,
                sfx=AMBIENT_SFX,
                music=UNDERSCORE_MUSIC,
            ),
            gen_prompt_base=build_prompt_base(segment, index, context, data),
        )
        clips.append(clip)
        cursor += segment.duration_sec

    logger.debug(f"Línea de tiempo: {len(clips)} clips, {cursor}s")
    return clips
