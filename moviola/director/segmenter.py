"""
Segmentador de narrativa.
Divide el texto aprobado en fragmentos con duración de 3 a 6 segundos,
ajustando la suma a la duración total pedida.
"""

import logging
import math
from typing import List, Sequence

from ..domain.models import Segment, sanitize_duration

logger = logging.getLogger(__name__)

MIN_CLIP_SEC = 3
MAX_CLIP_SEC = 6
WORDS_PER_SECOND = 2.5
SECONDS_PER_CLIP = 3.5
MIN_WORDS_PER_CLIP = 8
DURATION_TOLERANCE_SEC = 1
SENTENCE_SNAP_WORDS = 3

SENTENCE_ENDINGS = (".", "!", "?", "…")
_CLOSING_MARKS = "\"'»”)]"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_clip(seconds: int) -> int:
    return max(MIN_CLIP_SEC, min(MAX_CLIP_SEC, seconds))


def _is_sentence_end(word: str) -> bool:
    return word.rstrip(_CLOSING_MARKS).endswith(SENTENCE_ENDINGS)


def target_clip_count(total_sec: float, word_count: int) -> int:
    """Un clip cada ~3.5 s, con al menos ~8 palabras por clip cuando el texto alcanza."""
    by_duration = max(1, _round_half_up(total_sec / SECONDS_PER_CLIP))
    by_words = max(1, word_count // MIN_WORDS_PER_CLIP)
    return min(by_duration, by_words)


def _snap_to_sentence(words: Sequence[str], ideal: int, low: int, high: int) -> int:
    """Mueve el corte al final de oración más cercano dentro de la ventana."""
    best = ideal
    best_distance = None
    for cut in range(max(low, ideal - SENTENCE_SNAP_WORDS), min(high, ideal + SENTENCE_SNAP_WORDS) + 1):
        if not _is_sentence_end(words[cut - 1]):
            continue
        distance = abs(cut - ideal)
        if best_distance is None or distance < best_distance:
            best, best_distance = cut, distance
    return best


def _chunk_bounds(words: Sequence[str], count: int) -> List[int]:
    n = len(words)
    bounds = [0]
    for i in range(1, count):
        # cada fragmento restante necesita al menos una palabra
        low = bounds[-1] + 1
        high = n - (count - i)
        ideal = min(max(_round_half_up(i * n / count), low), high)
        bounds.append(_snap_to_sentence(words, ideal, low, high))
    bounds.append(n)
    return bounds


def _reconcile(durations: List[int], total_sec: float) -> List[int]:
    """
    Ajusta las duraciones en pasos de 1 s (round-robin) hasta quedar a ±1 s
    del total, sin salir nunca de [3, 6].
    """
    adjusted = list(durations)

    changed = True
    while changed and sum(adjusted) - total_sec > DURATION_TOLERANCE_SEC:
        changed = False
        for i, seconds in enumerate(adjusted):
            if sum(adjusted) - total_sec <= DURATION_TOLERANCE_SEC:
                break
            if seconds > MIN_CLIP_SEC:
                adjusted[i] -= 1
                changed = True

    changed = True
    while changed and total_sec - sum(adjusted) > DURATION_TOLERANCE_SEC:
        changed = False
        for i, seconds in enumerate(adjusted):
            if total_sec - sum(adjusted) <= DURATION_TOLERANCE_SEC:
                break
            if seconds < MAX_CLIP_SEC:
                adjusted[i] += 1
                changed = True

    if abs(sum(adjusted) - total_sec) > DURATION_TOLERANCE_SEC:
        logger.debug(
            f"Duración no alcanzable dentro de los límites por clip: "
            f"{sum(adjusted)}s para {total_sec}s pedidos"
        )
    return adjusted


def segment_narrative(text: str, total_duration_sec: float) -> List[Segment]:
    """
    Segmenta la narrativa en fragmentos temporizados.

    Args:
        text: Narrativa aprobada
        total_duration_sec: Duración total objetivo (valores inválidos usan el default)

    Returns:
        Lista no vacía de Segment en orden de lectura
    """
    total = sanitize_duration(total_duration_sec)
    words = str(text or "").split()

    if not words:
        return [Segment(text="", duration_sec=_clamp_clip(_round_half_up(total)))]

    count = target_clip_count(total, len(words))
    bounds = _chunk_bounds(words, count)
    chunks = [words[start:end] for start, end in zip(bounds, bounds[1:])]

    durations = [_clamp_clip(_round_half_up(len(chunk) / WORDS_PER_SECOND)) for chunk in chunks]
    durations = _reconcile(durations, total)

    return [
        Segment(text=" ".join(chunk), duration_sec=seconds)
        for chunk, seconds in zip(chunks, durations)
    ]
