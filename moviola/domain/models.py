"""
Modelos de Dominio (Clean Architecture)
Definen el contrato de entrada del compilador Moviola y la estructura del
guion técnico maestro que entrega.

Los nombres de campo en JSON (camelCase) son el contrato de intercambio con la
UI y otras herramientas: no se cambian.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_DURATION_SEC = 8.0
DEFAULT_WATERMARK_TEXT = "Focus Guerrero"


class AspectRatio(str, Enum):
    """Formatos de salida admitidos por el revelado."""
    SQUARE = "1:1"
    WIDESCREEN = "16:9"
    VERTICAL = "9:16"
    CLASSIC = "4:3"
    CLASSIC_VERTICAL = "3:4"
    ULTRAWIDE = "21:9"
    FEED = "4:5"
    PHOTO_VERTICAL = "2:3"
    PHOTO = "3:2"
    EDITORIAL = "5:4"


class FidelityLock(str, Enum):
    """Nivel de preservación de identidad frente a narrativa/atmósfera."""
    LOCK_A = "LOCK_A"
    LOCK_B = "LOCK_B"
    LOCK_C = "LOCK_C"


class FilmStyle(str, Enum):
    # Realismo
    RAW = "raw"
    DOCUMENTARY = "documentary"
    EDITORIAL = "editorial"
    CINEMATIC = "cinematic"
    STUDIO = "studio"
    PORTRAIT_SKIN = "portrait_skin"
    HYPERREAL = "hyperreal"
    # Arte
    ANALOG = "analog"
    CYBER = "cyber"
    OIL = "oil"
    SKETCH = "sketch"
    WATERCOLOR = "watercolor"


class UsageTemplate(str, Enum):
    NONE = "none"
    NEWS = "news"
    SOCIAL_ORGANIC = "social_organic"
    POSTER = "poster"
    THUMBNAIL = "thumbnail"
    CATALOG = "catalog"
    ARCHIVE = "archive"
    CINEMA = "cinema"


class WatermarkPosition(str, Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    CENTER = "center"


class PacketStatus(str, Enum):
    READY = "READY"
    WARNING = "WARNING"
    UNSUPPORTED = "UNSUPPORTED"
    UNKNOWN = "UNKNOWN"


def sanitize_duration(value: Any, default: float = DEFAULT_DURATION_SEC) -> float:
    """
    Convierte una duración recibida de la UI en segundos válidos.

    Valores no numéricos, infinitos o no positivos se reemplazan por el
    default en lugar de lanzar una excepción.
    """
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(seconds) or seconds <= 0:
        return default
    return seconds


def clamp_percent(value: Any, default: int) -> int:
    """Redondea y acota un porcentaje a [0, 100]."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return max(0, min(100, int(round(number))))


class _WireModel(BaseModel):
    """Base con alias camelCase para el contrato JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _SnapshotModel(_WireModel):
    """Base inmutable para los datos de entrada."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Entrada
# ---------------------------------------------------------------------------

class WatermarkConfig(_SnapshotModel):
    """Instrucción de marca de agua (solo texto, best-effort)."""
    enabled: bool = False
    text: str = DEFAULT_WATERMARK_TEXT
    position: WatermarkPosition = WatermarkPosition.BOTTOM_RIGHT
    opacity: int = Field(18, description="Opacidad aproximada en %")

    @field_validator("opacity", mode="before")
    @classmethod
    def _clamp_opacity(cls, value: Any) -> int:
        return clamp_percent(value, default=18)


class RevealSettings(_SnapshotModel):
    """Snapshot inmutable de los ajustes del revelado."""
    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    fidelity: FidelityLock = FidelityLock.LOCK_B
    lens: str = "35mm"
    lighting: str = "natural"
    film_style: FilmStyle = FilmStyle.RAW
    template_preset: UsageTemplate = UsageTemplate.NONE
    reference_weight: int = Field(50, description="Influencia de la referencia (0-100)")
    negative_prompt: str = ""
    watermark: WatermarkConfig = Field(default_factory=WatermarkConfig)
    manual_override: Optional[str] = None

    @field_validator("reference_weight", mode="before")
    @classmethod
    def _clamp_weight(cls, value: Any) -> int:
        return clamp_percent(value, default=50)


class MoviolaRequest(_SnapshotModel):
    """Parámetros de la Moviola elegidos por el usuario."""
    engine: str = Field("", description="Motor de video destino (texto libre)")
    duration_sec: float = Field(DEFAULT_DURATION_SEC, description="Duración total objetivo en segundos")
    intent: str = Field("", description="Intención creativa del guion")

    @field_validator("duration_sec", mode="before")
    @classmethod
    def _sanitize_duration(cls, value: Any) -> float:
        return sanitize_duration(value)


class CompilerInput(_SnapshotModel):
    """Todo lo que el compilador necesita, fijado antes de compilar."""
    trace_id: str = Field(..., description="Identificador único de la petición")
    created_at: int = Field(0, description="Timestamp de creación (epoch ms)")
    analysis_context: str = ""
    narrative_text: str = ""
    cultural_elements: List[str] = Field(default_factory=list)
    compiled_visual_prompt: str = Field("", description="Prompt visual en inglés ya compilado")
    reveal_settings: RevealSettings = Field(default_factory=RevealSettings)
    moviola: MoviolaRequest = Field(default_factory=MoviolaRequest)


# ---------------------------------------------------------------------------
# Salida
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Segment:
    """Fragmento de narrativa con su duración asignada."""
    text: str
    duration_sec: int


class Timecode(_WireModel):
    in_: str = Field(..., alias="in")
    out: str
    duration_sec: int


class ClipVisuals(_WireModel):
    shot_type: str
    camera_move: str
    description: str
    focus: Optional[str] = None


class ClipAudio(_WireModel):
    voiceover: Optional[str] = None
    sfx: Optional[str] = None
    music: Optional[str] = None


class TimelineClip(_WireModel):
    """Un clip del guion técnico."""
    id: str
    timecode: Timecode
    visuals: ClipVisuals
    audio: ClipAudio = Field(default_factory=ClipAudio)
    gen_prompt_base: str = Field(..., description="Prompt agnóstico al motor")


class OptimizedPrompt(_WireModel):
    clip_id: str
    prompt: str


class CompatibilityNotes(_WireModel):
    ratio_supported: Optional[bool] = None
    notes: Optional[str] = None


class EnginePacket(_WireModel):
    """Prompts adaptados para un motor de video concreto."""
    engine: str
    status: PacketStatus = PacketStatus.READY
    optimized_prompts: List[OptimizedPrompt] = Field(default_factory=list)
    compatibility_notes: Optional[CompatibilityNotes] = None


class ScriptMeta(_WireModel):
    trace_id: str
    input_snapshot_hash: str
    created_at: int
    format_ratio: AspectRatio
    total_duration_sec: int
    intent: str


class ScriptRules(_WireModel):
    language: str
    negatives_global: str
    constraints: List[str] = Field(default_factory=list)


class EditScriptMaster(_WireModel):
    """Guion técnico maestro (JSON) listo para mostrar, copiar o exportar."""
    meta: ScriptMeta
    rules: ScriptRules
    timeline: List[TimelineClip]
    engine_packets: List[EnginePacket]

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    def packet_for(self, engine: str) -> Optional[EnginePacket]:
        """Busca el paquete de un motor (sin distinguir mayúsculas)."""
        wanted = engine.strip().lower()
        for packet in self.engine_packets:
            if packet.engine.lower() == wanted:
                return packet
        return None
