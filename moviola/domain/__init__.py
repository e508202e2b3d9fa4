"""Modelos de dominio y catálogo de frases técnicas."""

from .models import (
    AspectRatio,
    CompilerInput,
    EditScriptMaster,
    EnginePacket,
    FidelityLock,
    FilmStyle,
    MoviolaRequest,
    PacketStatus,
    RevealSettings,
    Segment,
    TimelineClip,
    UsageTemplate,
    WatermarkConfig,
    WatermarkPosition,
)

__all__ = [
    "AspectRatio",
    "CompilerInput",
    "EditScriptMaster",
    "EnginePacket",
    "FidelityLock",
    "FilmStyle",
    "MoviolaRequest",
    "PacketStatus",
    "RevealSettings",
    "Segment",
    "TimelineClip",
    "UsageTemplate",
    "WatermarkConfig",
    "WatermarkPosition",
]
