"""
Input Parser
Se encarga de validar y convertir la petición de la UI en un CompilerInput.
"""
import json
import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from ..domain.models import CompilerInput

logger = logging.getLogger(__name__)


class InputParser:
    """Validador y parseador de peticiones de compilación."""

    def parse(self, raw_input: Union[str, Dict[str, Any]]) -> CompilerInput:
        """
        Convierte un JSON (string o dict) en un CompilerInput validado.
        """
        try:
            # 1. Normalizar entrada
            if isinstance(raw_input, str):
                # Limpiar bloques de código markdown si existen
                clean_input = raw_input.replace("```json", "").replace("```", "").strip()
                data = json.loads(clean_input)
            else:
                data = raw_input

            # 2. Validación estricta con Pydantic
            compiler_input = CompilerInput.model_validate(data)

            # 3. Validaciones de negocio adicionales
            self._validate_logic(compiler_input)

            return compiler_input

        except json.JSONDecodeError as e:
            logger.error(f"Error decodificando JSON de la petición: {e}")
            raise ValueError("La petición no es un JSON válido") from e
        except ValidationError as e:
            logger.error(f"Petición inválida: {e.error_count()} error(es)")
            raise ValueError(f"Petición inválida: {e}") from e

    def _validate_logic(self, data: CompilerInput):
        """Avisos que no bloquean la compilación."""
        if not data.narrative_text.strip():
            logger.warning("Narrativa vacía: se generará un único clip de establecimiento.")
        if not data.moviola.engine.strip():
            logger.warning("Sin motor destino: se usará el motor por defecto.")
        if not data.trace_id.strip():
            logger.warning("traceId vacío: el guion no será trazable.")
