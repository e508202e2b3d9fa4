"""
Catálogo de frases técnicas.
Tablas cerradas que traducen los ajustes del revelado a instrucciones en inglés
para los motores generativos. Cada enum tiene una entrada por miembro.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from .models import (
    AspectRatio,
    FidelityLock,
    FilmStyle,
    UsageTemplate,
    WatermarkConfig,
    WatermarkPosition,
    clamp_percent,
)

LENSES: Dict[str, str] = {
    "24mm": "shot on 24mm wide angle lens, environmental context, expansive background",
    "35mm": "shot on 35mm lens, natural perspective, documentary street photography",
    "85mm": "shot on 85mm portrait lens, shallow depth of field, creamy bokeh, subject isolation",
}

LIGHTING: Dict[str, str] = {
    "natural": "soft natural lighting, warm tones, realistic shadows",
    "studio": "controlled studio lighting, rim light, high contrast, clean highlights",
    "neon": "cinematic neon lighting, night atmosphere, colored practical lights, subtle haze",
    "overcast": "overcast diffuse lighting, soft shadows, misty atmosphere",
}

FILM_STYLES: Dict[FilmStyle, str] = {
    FilmStyle.RAW: "photorealistic raw photo, detailed texture, natural skin texture, no beauty filter",
    FilmStyle.DOCUMENTARY: "documentary realism, candid moment, honest imperfection, natural grain",
    FilmStyle.EDITORIAL: "editorial photography, clean composition, premium detail, magazine look",
    FilmStyle.CINEMATIC: "cinematic frame, filmic contrast, subtle halation, narrative lighting",
    FilmStyle.STUDIO: "high-end studio photo, crisp detail, controlled highlights, clean background separation",
    FilmStyle.PORTRAIT_SKIN: "portrait with natural skin texture, pores visible, realistic specular highlights",
    FilmStyle.HYPERREAL: "hyperreal detail, micro-texture, realistic materials, high fidelity",
    FilmStyle.ANALOG: "analog film look, film grain, slight vignette, nostalgic color science",
    FilmStyle.CYBER: "cyber cinematic realism, neon accents, metallic textures, controlled glow",
    FilmStyle.OIL: "oil painting style, impasto brushstrokes, painterly texture, classical composition",
    FilmStyle.SKETCH: "sketch illustration, pencil lines, cross-hatching, paper texture",
    FilmStyle.WATERCOLOR: "watercolor illustration, soft washes, bleeding pigments, textured paper",
}

FIDELITY: Dict[FidelityLock, str] = {
    FidelityLock.LOCK_A: "identity lock: preserve face/body identity if present, minimal deviation",
    FidelityLock.LOCK_B: "narrative lock: keep character consistent and story-coherent",
    FidelityLock.LOCK_C: "atmosphere lock: match mood, palette, lighting, ignore strict identity",
}

# Nota de foco por clip según el nivel de fidelidad
FIDELITY_FOCUS: Dict[FidelityLock, str] = {
    FidelityLock.LOCK_A: "Sharp focus on subject identity",
    FidelityLock.LOCK_B: "Focus on the narrative action",
    FidelityLock.LOCK_C: "Soft atmospheric focus",
}

WATERMARK_POSITIONS: Dict[WatermarkPosition, str] = {
    WatermarkPosition.TOP_LEFT: "top-left",
    WatermarkPosition.TOP_RIGHT: "top-right",
    WatermarkPosition.BOTTOM_LEFT: "bottom-left",
    WatermarkPosition.BOTTOM_RIGHT: "bottom-right",
    WatermarkPosition.CENTER: "center",
}

TEMPLATE_NOTES: Dict[UsageTemplate, Optional[str]] = {
    UsageTemplate.NONE: None,
    UsageTemplate.NEWS: "prioritize clarity and credibility",
    UsageTemplate.SOCIAL_ORGANIC: "vertical, emotional, fast-paced",
    UsageTemplate.POSTER: "visual impact and strong composition",
    UsageTemplate.THUMBNAIL: "strong readability, high contrast",
    UsageTemplate.CATALOG: "clean product presentation",
    UsageTemplate.ARCHIVE: "neutral documentation",
    UsageTemplate.CINEMA: "widescreen cinematic storytelling",
}

# Palabras clave de composición para formatos poco estándar (vacío = sin ajuste)
RATIO_KEYWORDS: Dict[AspectRatio, str] = {
    AspectRatio.SQUARE: ", square composition, album cover style",
    AspectRatio.WIDESCREEN: "",
    AspectRatio.VERTICAL: ", vertical video composition, social media frame",
    AspectRatio.CLASSIC: "",
    AspectRatio.CLASSIC_VERTICAL: "",
    AspectRatio.ULTRAWIDE: ", ultrawide anamorphic format, movie bars",
    AspectRatio.FEED: ", vertical feed composition, centered subject",
    AspectRatio.PHOTO_VERTICAL: "",
    AspectRatio.PHOTO: "",
    AspectRatio.EDITORIAL: "",
}

VERTICAL_RATIOS = frozenset({
    AspectRatio.VERTICAL,
    AspectRatio.CLASSIC_VERTICAL,
    AspectRatio.FEED,
    AspectRatio.PHOTO_VERTICAL,
})


@dataclass(frozen=True)
class TemplatePreset:
    """Valores que aplica una plantilla de uso sobre el revelado."""
    aspect_ratio: AspectRatio
    lens: str
    lighting: str
    film_style: FilmStyle
    fidelity: FidelityLock
    reference_weight: int
    watermark_enabled: bool
    watermark_position: WatermarkPosition
    watermark_opacity: int


TEMPLATE_PRESETS: Dict[UsageTemplate, TemplatePreset] = {
    UsageTemplate.NONE: TemplatePreset(
        AspectRatio.SQUARE, "35mm", "natural", FilmStyle.RAW, FidelityLock.LOCK_B,
        50, False, WatermarkPosition.BOTTOM_RIGHT, 20,
    ),
    UsageTemplate.NEWS: TemplatePreset(
        AspectRatio.WIDESCREEN, "35mm", "overcast", FilmStyle.DOCUMENTARY, FidelityLock.LOCK_B,
        70, True, WatermarkPosition.BOTTOM_RIGHT, 18,
    ),
    UsageTemplate.SOCIAL_ORGANIC: TemplatePreset(
        AspectRatio.VERTICAL, "35mm", "natural", FilmStyle.CINEMATIC, FidelityLock.LOCK_B,
        55, True, WatermarkPosition.TOP_RIGHT, 14,
    ),
    UsageTemplate.POSTER: TemplatePreset(
        AspectRatio.CLASSIC_VERTICAL, "24mm", "studio", FilmStyle.EDITORIAL, FidelityLock.LOCK_C,
        40, True, WatermarkPosition.BOTTOM_LEFT, 16,
    ),
    UsageTemplate.THUMBNAIL: TemplatePreset(
        AspectRatio.WIDESCREEN, "24mm", "studio", FilmStyle.HYPERREAL, FidelityLock.LOCK_C,
        35, True, WatermarkPosition.TOP_LEFT, 20,
    ),
    UsageTemplate.CATALOG: TemplatePreset(
        AspectRatio.FEED, "85mm", "studio", FilmStyle.STUDIO, FidelityLock.LOCK_A,
        80, True, WatermarkPosition.BOTTOM_RIGHT, 12,
    ),
    UsageTemplate.ARCHIVE: TemplatePreset(
        AspectRatio.PHOTO, "35mm", "natural", FilmStyle.DOCUMENTARY, FidelityLock.LOCK_B,
        75, False, WatermarkPosition.BOTTOM_RIGHT, 15,
    ),
    UsageTemplate.CINEMA: TemplatePreset(
        AspectRatio.ULTRAWIDE, "35mm", "natural", FilmStyle.CINEMATIC, FidelityLock.LOCK_B,
        60, False, WatermarkPosition.BOTTOM_RIGHT, 15,
    ),
}


def lens_phrase(lens: str) -> str:
    key = lens.strip()
    if not key:
        return ""
    return LENSES.get(key) or f"shot on {key} lens"


def lighting_phrase(lighting: str) -> str:
    key = lighting.strip()
    if not key:
        return ""
    return LIGHTING.get(key) or f"lighting: {key}"


def reference_weight_phrase(weight: int) -> str:
    """Traduce el peso de la referencia a una instrucción en lenguaje natural."""
    n = clamp_percent(weight, default=50)
    if n >= 80:
        return "Reference influence: very strong (minimal deviation)."
    if n <= 20:
        return "Reference influence: loose (inspiration only)."
    return "Reference influence: balanced."


def watermark_phrase(watermark: WatermarkConfig) -> str:
    """
    Instrucción de marca de agua. Vacía si está desactivada o sin texto.
    El motor destino puede ignorarla: es una sugerencia, no una garantía.
    """
    text = watermark.text.strip()
    if not watermark.enabled or not text:
        return ""
    position = WATERMARK_POSITIONS[watermark.position]
    return (
        f'Composition note: include a subtle watermark text "{text}" at {position}, '
        f"approx {watermark.opacity}% opacity (best-effort)."
    )


def template_phrase(template: UsageTemplate) -> str:
    note = TEMPLATE_NOTES[template]
    if not note:
        return ""
    return f"Usage template: {template.value} (optimize composition for this destination: {note})."
