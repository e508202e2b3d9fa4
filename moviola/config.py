"""
Configuración del compilador Moviola.
Reglas por defecto que se pueden sobrescribir desde YAML.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Optional

import yaml
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = "./config/moviola.yaml"

DEFAULT_CONSTRAINTS = [
    "This script does not produce video directly; it is a technical guide for external engines.",
    "Maintain character consistency across clips.",
    "No abrupt cuts between contiguous clips.",
    "Composition notes are best-effort hints, not guarantees.",
]

DEFAULT_VALIDATION_RULES = {
    "min_clip_sec": 3,
    "max_clip_sec": 6,
    "duration_tolerance_sec": 1,
    "max_clips": 40,
}


@dataclass
class CompilerRules:
    """Reglas fijas que el compilador incrusta en cada guion."""
    language: str = "es-MX"
    default_engine: str = "Veo"
    default_intent: str = "Technical script"
    default_negatives: str = "blur, distortion, bad anatomy, low quality"
    constraints: list[str] = field(default_factory=lambda: list(DEFAULT_CONSTRAINTS))
    cultural_region: str = "Guerrero, Mexico"
    description_max_chars: int = 150
    scene_max_chars: int = 220
    validation: dict = field(default_factory=lambda: dict(DEFAULT_VALIDATION_RULES))


def resolve_rules_path(path: Optional[str] = None) -> str:
    """Ruta explícita, luego MOVIOLA_RULES_PATH, luego la ruta por defecto."""
    return path or os.getenv("MOVIOLA_RULES_PATH") or DEFAULT_RULES_PATH


def load_rules(path: Optional[str] = None) -> CompilerRules:
    """
    Carga las reglas desde YAML, combinándolas con los valores por defecto.

    Args:
        path: Ruta al archivo YAML (opcional)

    Returns:
        CompilerRules con los valores efectivos
    """
    rules_path = resolve_rules_path(path)
    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Archivo de reglas no encontrado: {rules_path}")
        return CompilerRules()

    known = {f.name for f in fields(CompilerRules)} - {"validation"}
    compiler = config.get("compiler") or {}
    unknown = sorted(set(compiler) - known)
    if unknown:
        logger.warning(f"Claves de compilador desconocidas ignoradas: {', '.join(unknown)}")

    overrides = {key: value for key, value in compiler.items() if key in known}
    validation = {**DEFAULT_VALIDATION_RULES, **(config.get("validation_rules") or {})}

    logger.debug(f"Reglas cargadas desde {rules_path}")
    return CompilerRules(**overrides, validation=validation)
