"""Pasos del compilador: huella, segmentación, línea de tiempo y paquetes por motor."""

from .engines import adapt_packet
from .hasher import hash_input, hash_input_sync
from .parser import InputParser
from .segmenter import segment_narrative
from .timeline import build_timeline
from .validator import ScriptValidator, ValidationResult
from .visual_prompt import apply_template, compile_visual_prompt

__all__ = [
    "adapt_packet",
    "apply_template",
    "build_timeline",
    "compile_visual_prompt",
    "hash_input",
    "hash_input_sync",
    "InputParser",
    "ScriptValidator",
    "segment_narrative",
    "ValidationResult",
]
