"""
Entrada principal de la Moviola
Compila un guion técnico (JSON) a partir de una petición exportada por la UI.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import load_rules
from .director.parser import InputParser
from .director.validator import ScriptValidator
from .director.visual_prompt import with_visual_prompt
from .orchestrator import MoviolaCompiler


DEMO_INPUT = """
{
    "traceId": "demo-mercado-001",
    "createdAt": 0,
    "analysisContext": "Mercado tradicional al amanecer, puestos de madera y telas bordadas",
    "narrativeText": "El mercado despierta con el olor a café. Las mujeres tejen historias mientras venden. El sol cae sobre Chilpancingo.",
    "culturalElements": ["textiles bordados", "café de olla"],
    "compiledVisualPrompt": "",
    "revealSettings": {
        "aspectRatio": "16:9",
        "fidelity": "LOCK_B",
        "lens": "35mm",
        "lighting": "natural",
        "filmStyle": "documentary",
        "templatePreset": "news",
        "referenceWeight": 70,
        "negativePrompt": "blur, distortion",
        "watermark": {"enabled": true, "text": "Focus Guerrero", "position": "bottom_right", "opacity": 18}
    },
    "moviola": {
        "engine": "Veo",
        "durationSec": 9,
        "intent": "Teaser documental, movimiento lento, claridad narrativa"
    }
}
"""


def _print_summary(console: Console, master) -> None:
    meta = master.meta
    console.print(Panel(
        f"[bold]{meta.trace_id}[/bold]\n"
        f"Hash: {meta.input_snapshot_hash}\n"
        f"Formato: {meta.format_ratio.value} | Duración: {meta.total_duration_sec}s\n"
        f"Intención: {meta.intent}",
        title="🎬 Guion técnico",
    ))

    table = Table(title="Línea de tiempo")
    table.add_column("Clip")
    table.add_column("In")
    table.add_column("Out")
    table.add_column("Plano")
    table.add_column("Cámara")
    table.add_column("Descripción", overflow="fold")
    for clip in master.timeline:
        table.add_row(
            clip.id,
            clip.timecode.in_,
            clip.timecode.out,
            clip.visuals.shot_type,
            clip.visuals.camera_move,
            clip.visuals.description,
        )
    console.print(table)

    for packet in master.engine_packets:
        color = "green" if packet.status.value == "READY" else "yellow"
        notes = packet.compatibility_notes.notes if packet.compatibility_notes else ""
        console.print(f"[{color}]{packet.engine}: {packet.status.value}[/{color}] {notes}")


def main(argv=None) -> int:
    """Función principal del CLI."""
    parser = argparse.ArgumentParser(description="Moviola - compilador de guiones técnicos")
    parser.add_argument("input", nargs="?", help="Archivo JSON con la petición (usa una demo si se omite)")
    parser.add_argument("--engine", action="append", help="Motor destino (repetible)")
    parser.add_argument("--output", type=str, help="Ruta donde exportar el guion maestro (JSON)")
    parser.add_argument("--rules", type=str, help="Archivo YAML de reglas")
    parser.add_argument("--check", action="store_true", help="Valida el guion compilado")
    parser.add_argument("--build-prompt", action="store_true", help="Compila el prompt visual si viene vacío")
    parser.add_argument("--json", action="store_true", help="Imprime el JSON en lugar del resumen")
    parser.add_argument("-v", "--verbose", action="store_true", help="Logging detallado")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    console = Console()

    if args.input:
        try:
            raw = Path(args.input).read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Error leyendo archivo: {e}[/red]")
            return 1
    else:
        raw = DEMO_INPUT

    try:
        data = InputParser().parse(raw)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1

    rules = load_rules(args.rules)
    if args.build_prompt:
        data = with_visual_prompt(data, cultural_region=rules.cultural_region)

    compiler = MoviolaCompiler(rules=rules)
    master = asyncio.run(compiler.compile_async(data, engines=args.engine))

    if args.json:
        console.print_json(master.to_json())
    else:
        _print_summary(console, master)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(master.to_json(), encoding="utf-8")
        console.print(f"[green]✓ Guion exportado en {output_path}[/green]")

    if args.check:
        result = ScriptValidator(rules.validation).validate(master, requested_sec=data.moviola.duration_sec)
        if result.is_valid:
            console.print(Panel("[green]✓ Guion válido[/green]", title="Resultado"))
        else:
            console.print(Panel("[red]✗ Guion inválido[/red]", title="Resultado"))
        for error in result.errors:
            console.print(f"  [red]• {error}[/red]")
        for warning in result.warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")
        if not result.is_valid:
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
