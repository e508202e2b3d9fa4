"""
Orquestador de la Moviola
Coordina los pasos del compilador: huella → segmentos → línea de tiempo →
paquetes por motor.
"""
import logging
import time
from typing import Callable, Iterable, List, Optional

from .config import CompilerRules
from .director.engines import adapt_packet
from .director.hasher import hash_input, hash_input_sync
from .director.segmenter import segment_narrative
from .director.timeline import build_timeline, compact
from .domain.models import (
    CompilerInput,
    EditScriptMaster,
    ScriptMeta,
    ScriptRules,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class MoviolaCompiler:
    """
    Compilador del guion técnico maestro.
    No guarda estado entre llamadas: cada compilación depende solo de su input.
    """

    def __init__(
        self,
        rules: Optional[CompilerRules] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        """
        Args:
            rules: Reglas de compilación (si es None se usan las reglas por defecto)
            clock: Fuente del timestamp de creación en epoch ms
        """
        self.rules = rules or CompilerRules()
        self.clock = clock

    def resolve_engines(self, data: CompilerInput, engines: Optional[Iterable[str]] = None) -> List[str]:
        """Motores a empaquetar, sin duplicados y con el default si no hay ninguno."""
        if engines is None:
            requested = [data.moviola.engine]
        elif isinstance(engines, str):
            requested = [engines]
        else:
            requested = list(engines)
        resolved: List[str] = []
        seen = set()
        for engine in requested:
            name = compact(engine)
            if name and name.lower() not in seen:
                seen.add(name.lower())
                resolved.append(name)
        if not resolved:
            logger.info(f"Sin motor destino; usando {self.rules.default_engine}")
            resolved.append(self.rules.default_engine)
        return resolved

    def compile(
        self,
        data: CompilerInput,
        engines: Optional[Iterable[str]] = None,
        input_hash: Optional[str] = None,
    ) -> EditScriptMaster:
        """
        Compila el guion técnico maestro.

        Args:
            data: Input inmutable del compilador
            engines: Motores destino (por defecto el de la petición)
            input_hash: Huella ya calculada (se calcula si no se indica)

        Returns:
            EditScriptMaster listo para serializar
        """
        logger.info(f"Compilando guion {data.trace_id}")
        snapshot_hash = input_hash or hash_input_sync(data)

        segments = segment_narrative(data.narrative_text, data.moviola.duration_sec)
        timeline = build_timeline(segments, data, self.rules)

        ratio = data.reveal_settings.aspect_ratio
        packets = [adapt_packet(timeline, engine, ratio) for engine in self.resolve_engines(data, engines)]

        total = sum(clip.timecode.duration_sec for clip in timeline)
        logger.info(f"Guion {data.trace_id}: {len(timeline)} clips, {total}s, {len(packets)} paquete(s)")

        return EditScriptMaster(
            meta=ScriptMeta(
                trace_id=data.trace_id,
                input_snapshot_hash=snapshot_hash,
                created_at=self.clock(),
                format_ratio=ratio,
                total_duration_sec=total,
                intent=compact(data.moviola.intent) or self.rules.default_intent,
            ),
            rules=ScriptRules(
                language=self.rules.language,
                negatives_global=compact(data.reveal_settings.negative_prompt) or self.rules.default_negatives,
                constraints=list(self.rules.constraints),
            ),
            timeline=timeline,
            engine_packets=packets,
        )

    async def compile_async(
        self,
        data: CompilerInput,
        engines: Optional[Iterable[str]] = None,
    ) -> EditScriptMaster:
        """Igual que compile(); la huella es el único punto de espera."""
        snapshot_hash = await hash_input(data)
        return self.compile(data, engines=engines, input_hash=snapshot_hash)


async def compile_master_script(
    data: CompilerInput,
    engines: Optional[Iterable[str]] = None,
    rules: Optional[CompilerRules] = None,
) -> EditScriptMaster:
    """Punto de entrada principal para la UI."""
    return await MoviolaCompiler(rules=rules).compile_async(data, engines=engines)
