"""
Compilador del prompt visual (inglés) y plantillas de uso.
Arma el prompt por bloques que el revelado envía al generador de imágenes y
que la Moviola recibe como compiledVisualPrompt.
"""

import logging
from typing import Optional, Sequence

from ..domain import catalog
from ..domain.models import (
    DEFAULT_WATERMARK_TEXT,
    CompilerInput,
    RevealSettings,
    UsageTemplate,
    WatermarkConfig,
)
from .timeline import compact

logger = logging.getLogger(__name__)

KERNEL_MAX_CHARS = 220


def compile_visual_prompt(
    analysis_context: str,
    narrative_text: str,
    cultural_elements: Sequence[str],
    settings: RevealSettings,
    reference_attached: bool = False,
    cultural_region: str = "Guerrero, Mexico",
) -> str:
    """
    Compila el prompt visual técnico, un bloque por línea.

    Args:
        analysis_context: Descripción de la escena
        narrative_text: Narrativa aprobada
        cultural_elements: Etiquetas culturales
        settings: Ajustes del revelado
        reference_attached: Si hay imagen de referencia cargada
        cultural_region: Región usada en la línea cultural

    Returns:
        Prompt multilínea sin bloques vacíos
    """
    scene = compact(analysis_context)[:KERNEL_MAX_CHARS]
    kernel = compact(narrative_text)[:KERNEL_MAX_CHARS]
    elements = [compact(e) for e in cultural_elements if compact(e)]

    watermark = catalog.watermark_phrase(settings.watermark)
    template = catalog.template_phrase(settings.template_preset)
    manual = compact(settings.manual_override)
    negative = compact(settings.negative_prompt)
    tech = [
        catalog.lens_phrase(settings.lens),
        catalog.lighting_phrase(settings.lighting),
        f"Target aspect ratio: {settings.aspect_ratio.value}.",
    ]

    blocks = [
        "[SCENE]:",
        f"{scene}." if scene else "No scene context provided.",
        f"[NARRATIVE KERNEL]: {kernel}..." if kernel else "",
        f"[CULTURE]: Cultural context ({cultural_region}): {', '.join(elements)}." if elements else "",
        f"[TEMPLATE]: {template}" if template else "",
        "[TECH SPECS]:",
        "; ".join(part for part in tech if part),
        "[STYLE]:",
        f"{catalog.FILM_STYLES[settings.film_style]}.",
        "[FIDELITY]:",
        f"{catalog.FIDELITY[settings.fidelity]}.",
        "[REFERENCE WEIGHT]:",
        catalog.reference_weight_phrase(settings.reference_weight),
        "[REFERENCE]: Use provided reference image as composition/background guide." if reference_attached else "",
        f"[WATERMARK]: {watermark}" if watermark else "",
        f"[MANUAL]: Manual override (user): {manual}" if manual else "",
        f"[NEGATIVE]: Exclude: {negative}." if negative else "",
    ]
    return "\n".join(block for block in blocks if block)


def apply_template(settings: RevealSettings, template: UsageTemplate) -> RevealSettings:
    """
    Aplica una plantilla de uso y devuelve un snapshot nuevo.
    El texto de la marca de agua del usuario se conserva.
    """
    preset = catalog.TEMPLATE_PRESETS[template]
    text = settings.watermark.text if settings.watermark.text.strip() else DEFAULT_WATERMARK_TEXT

    logger.debug(f"Aplicando plantilla {template.value}")
    return settings.model_copy(update={
        "template_preset": template,
        "aspect_ratio": preset.aspect_ratio,
        "lens": preset.lens,
        "lighting": preset.lighting,
        "film_style": preset.film_style,
        "fidelity": preset.fidelity,
        "reference_weight": preset.reference_weight,
        "watermark": WatermarkConfig(
            enabled=preset.watermark_enabled,
            text=text,
            position=preset.watermark_position,
            opacity=preset.watermark_opacity,
        ),
    })


def with_visual_prompt(
    data: CompilerInput,
    reference_attached: bool = False,
    cultural_region: Optional[str] = None,
) -> CompilerInput:
    """Devuelve una copia del input con compiledVisualPrompt compilado si venía vacío."""
    if compact(data.compiled_visual_prompt):
        return data
    prompt = compile_visual_prompt(
        data.analysis_context,
        data.narrative_text,
        data.cultural_elements,
        data.reveal_settings,
        reference_attached=reference_attached,
        cultural_region=cultural_region or "Guerrero, Mexico",
    )
    return data.model_copy(update={"compiled_visual_prompt": prompt})
