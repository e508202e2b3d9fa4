"""
Validador de guiones maestros compilados.
Verifica timecodes, límites por clip y alineación de los paquetes por motor.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_VALIDATION_RULES
from ..domain.models import EditScriptMaster

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Resultado de la validación."""
    is_valid: bool
    errors: list[str]
    warnings: list[str]

    def __bool__(self):
        return self.is_valid


def _parse_timecode(value: str) -> Optional[int]:
    try:
        minutes, seconds = value.split(":")
        return int(minutes) * 60 + int(seconds)
    except (AttributeError, ValueError):
        return None


class ScriptValidator:
    """Validador de guiones compilados."""

    def __init__(self, rules: Optional[dict] = None):
        """
        Inicializa el validador.

        Args:
            rules: Reglas de validación (se combinan con las de por defecto)
        """
        self.rules = {**DEFAULT_VALIDATION_RULES, **(rules or {})}

    def _validate_timeline(self, master: EditScriptMaster) -> tuple[list[str], list[str]]:
        """Valida duración, orden y contigüidad de los clips."""
        errors = []
        warnings = []

        timeline = master.timeline
        if not timeline:
            errors.append("La línea de tiempo está vacía")
            return errors, warnings

        if len(timeline) > self.rules["max_clips"]:
            warnings.append(f"Demasiados clips ({len(timeline)}, máximo recomendado {self.rules['max_clips']})")

        min_sec = self.rules["min_clip_sec"]
        max_sec = self.rules["max_clip_sec"]
        expected_start = 0

        for i, clip in enumerate(timeline):
            expected_id = f"clip_{i + 1:02d}"
            if clip.id != expected_id:
                warnings.append(f"IDs de clip desordenados. Esperado {expected_id}, encontrado {clip.id}")

            duration = clip.timecode.duration_sec
            if not min_sec <= duration <= max_sec:
                errors.append(f"{clip.id}: duración {duration}s fuera de [{min_sec}, {max_sec}]")

            start = _parse_timecode(clip.timecode.in_)
            end = _parse_timecode(clip.timecode.out)
            if start is None or end is None:
                errors.append(f"{clip.id}: timecode inválido ({clip.timecode.in_} - {clip.timecode.out})")
                continue

            if start != expected_start:
                errors.append(f"{clip.id}: empieza en {clip.timecode.in_}, se esperaba contigüidad")
            if end - start != duration:
                errors.append(f"{clip.id}: out - in ({end - start}s) no coincide con durationSec ({duration}s)")

            if not clip.gen_prompt_base.strip():
                errors.append(f"{clip.id}: prompt base vacío")
            elif "\n" in clip.gen_prompt_base:
                errors.append(f"{clip.id}: el prompt base contiene saltos de línea")

            expected_start = end

        total = sum(clip.timecode.duration_sec for clip in timeline)
        if master.meta.total_duration_sec != total:
            errors.append(
                f"meta.totalDurationSec ({master.meta.total_duration_sec}) no coincide con la suma de clips ({total})"
            )

        return errors, warnings

    def _validate_packets(self, master: EditScriptMaster) -> tuple[list[str], list[str]]:
        """Valida que cada paquete tenga un prompt por clip y en el mismo orden."""
        errors = []
        warnings = []

        if not master.engine_packets:
            errors.append("No hay paquetes de motor")
            return errors, warnings

        clip_ids = [clip.id for clip in master.timeline]
        for packet in master.engine_packets:
            packet_ids = [p.clip_id for p in packet.optimized_prompts]
            if packet_ids != clip_ids:
                errors.append(f"Paquete {packet.engine}: los clipId no coinciden con la línea de tiempo")
            if packet.status.value != "READY":
                notes = packet.compatibility_notes.notes if packet.compatibility_notes else ""
                warnings.append(f"Paquete {packet.engine}: {packet.status.value} {notes}".strip())

        return errors, warnings

    def validate(self, master: EditScriptMaster, requested_sec: Optional[float] = None) -> ValidationResult:
        """
        Valida un guion maestro completo.

        Args:
            master: Guion compilado
            requested_sec: Duración pedida originalmente (opcional)

        Returns:
            ValidationResult con el resultado de la validación
        """
        all_errors = []
        all_warnings = []

        for validator in (self._validate_timeline, self._validate_packets):
            errors, warnings = validator(master)
            all_errors.extend(errors)
            all_warnings.extend(warnings)

        if requested_sec is not None:
            drift = abs(master.meta.total_duration_sec - requested_sec)
            if drift > self.rules["duration_tolerance_sec"]:
                all_warnings.append(
                    f"Duración total {master.meta.total_duration_sec}s lejos de los {requested_sec}s pedidos"
                )

        if all_errors:
            logger.warning(f"Guion {master.meta.trace_id} inválido: {len(all_errors)} error(es)")

        return ValidationResult(
            is_valid=len(all_errors) == 0,
            errors=all_errors,
            warnings=all_warnings,
        )
