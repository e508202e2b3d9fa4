"""
Huella del input canonicalizado.
Permite trazar y deduplicar guiones: el mismo contenido produce siempre el
mismo hash, sin importar el orden de las claves.
"""

import asyncio
import hashlib
import json
import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from ..domain.models import CompilerInput

logger = logging.getLogger(__name__)

SECURE_ALGORITHM = "sha256"

# Campos de sobre de la petición: no forman parte del contenido
ENVELOPE_FIELDS = ("traceId", "createdAt", "trace_id", "created_at")

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193
_DJB_SEED = 5381
_MASK32 = 0xFFFFFFFF

HashableInput = Union[CompilerInput, Mapping[str, Any]]


def canonicalize(value: Any) -> Any:
    """Ordena recursivamente las claves de los diccionarios. Las listas conservan su orden."""
    if isinstance(value, Mapping):
        return {str(key): canonicalize(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    return value


def canonical_json(value: Any) -> str:
    """Serializa la forma canónica en un string compacto."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )


def _snapshot(data: HashableInput) -> dict:
    """
    Vista del input usada para la huella (sin campos de sobre).
    Un mapping que valida como CompilerInput se normaliza a su forma de cable,
    así snake_case y camelCase producen la misma huella.
    """
    if isinstance(data, CompilerInput):
        payload = data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, Mapping):
        candidate = dict(data)
        if not any(key in candidate for key in ("traceId", "trace_id")):
            candidate["traceId"] = ""
        try:
            payload = CompilerInput.model_validate(candidate).model_dump(mode="json", by_alias=True)
        except ValidationError:
            logger.debug("Mapping no válido como CompilerInput; se usa tal cual")
            payload = dict(data)
    else:
        return {"input": data}
    for key in ENVELOPE_FIELDS:
        payload.pop(key, None)
    return payload


def fallback_digest(payload: str) -> str:
    """
    Digest determinista no criptográfico: FNV-1a y djb2 de 32 bits concatenados.
    """
    fnv = _FNV_OFFSET
    djb = _DJB_SEED
    for byte in payload.encode("utf-8"):
        fnv = ((fnv ^ byte) * _FNV_PRIME) & _MASK32
        djb = ((djb * 33) + byte) & _MASK32
    return f"{fnv:08x}{djb:08x}"


def digest(payload: str) -> str:
    """SHA-256 del payload; si el runtime no lo ofrece, usa el digest de respaldo."""
    try:
        hasher = hashlib.new(SECURE_ALGORITHM)
    except ValueError as e:
        logger.warning(f"Hash seguro no disponible ({e}); usando digest de respaldo")
        return fallback_digest(payload)
    hasher.update(payload.encode("utf-8"))
    return hasher.hexdigest()


def hash_input_sync(data: HashableInput) -> str:
    """
    Calcula la huella del input.

    Args:
        data: CompilerInput o diccionario equivalente

    Returns:
        Digest hexadecimal
    """
    return digest(canonical_json(_snapshot(data)))


async def hash_input(data: HashableInput) -> str:
    """Versión asíncrona: el digest corre fuera del event loop."""
    payload = canonical_json(_snapshot(data))
    return await asyncio.to_thread(digest, payload)
