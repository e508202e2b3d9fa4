import asyncio
import json

from moviola.config import CompilerRules
from moviola.director.engines import resolve_profile
from moviola.domain.models import MoviolaRequest, PacketStatus
from moviola.orchestrator import MoviolaCompiler, compile_master_script

from conftest import FIXED_CLOCK_MS, MERCADO


def test_mercado_scenario(compiler, make_input):
    master = compiler.compile(make_input())

    assert 2 <= len(master.timeline) <= 3
    assert all(3 <= c.timecode.duration_sec <= 6 for c in master.timeline)
    assert 8 <= master.meta.total_duration_sec <= 10

    for clip in master.timeline:
        assert clip.audio.voiceover in clip.gen_prompt_base
    prompts = " ".join(c.gen_prompt_base for c in master.timeline)
    for sentence in MERCADO.split(". "):
        assert sentence.rstrip(".") in prompts

    packet = master.packet_for("Veo")
    suffix = resolve_profile("Veo").suffix
    assert packet.status is PacketStatus.READY
    assert all(p.prompt.endswith(suffix) for p in packet.optimized_prompts)


def test_meta_and_rules(compiler, make_input):
    data = make_input()
    master = compiler.compile(data)
    assert master.meta.trace_id == "trace-001"
    assert master.meta.created_at == FIXED_CLOCK_MS
    assert master.meta.format_ratio.value == "16:9"
    assert master.meta.total_duration_sec == sum(c.timecode.duration_sec for c in master.timeline)
    assert master.meta.intent == "Teaser documental"
    assert master.rules.language == "es-MX"
    assert master.rules.negatives_global == "blur, distortion"
    assert any("does not produce video" in c for c in master.rules.constraints)


def test_default_negatives_when_prompt_empty(compiler, make_input, rules):
    master = compiler.compile(make_input(negative_prompt=""))
    assert master.rules.negatives_global == rules.default_negatives


def test_compilation_is_deterministic_except_created_at(rules, make_input):
    data = make_input()
    first = MoviolaCompiler(rules=rules, clock=lambda: 1).compile(data).to_dict()
    second = MoviolaCompiler(rules=rules, clock=lambda: 2).compile(data).to_dict()
    assert first["meta"].pop("createdAt") != second["meta"].pop("createdAt")
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_input_is_not_mutated(compiler, make_input):
    data = make_input()
    before = data.model_dump()
    compiler.compile(data)
    assert data.model_dump() == before


def test_blank_engine_uses_default_packet(compiler, make_input, rules):
    master = compiler.compile(make_input(engine="  "))
    assert [p.engine for p in master.engine_packets] == [rules.default_engine]
    assert len(master.engine_packets[0].optimized_prompts) == len(master.timeline)


def test_multiple_engines_are_deduplicated(compiler, make_input):
    master = compiler.compile(make_input(), engines=["Veo", "sora", "VEO", "", "Wan"])
    assert [p.engine for p in master.engine_packets] == ["Veo", "sora", "Wan"]
    clip_ids = [c.id for c in master.timeline]
    for packet in master.engine_packets:
        assert [p.clip_id for p in packet.optimized_prompts] == clip_ids


def test_single_engine_string(compiler, make_input):
    master = compiler.compile(make_input(), engines="Sora")
    assert [p.engine for p in master.engine_packets] == ["Sora"]


def test_watermark_enabled_reaches_every_prompt(compiler, make_input):
    watermark = {"enabled": True, "text": "Focus Guerrero", "position": "bottom_right", "opacity": 18}
    master = compiler.compile(make_input(watermark=watermark))
    for clip in master.timeline:
        assert "Focus Guerrero" in clip.gen_prompt_base
        assert "bottom-right" in clip.gen_prompt_base


def test_watermark_disabled_leaves_no_trace(compiler, make_input):
    watermark = {"enabled": False, "text": "Focus Guerrero", "position": "bottom_right", "opacity": 18}
    output = compiler.compile(make_input(watermark=watermark)).to_json()
    assert "watermark" not in output.lower()
    assert "Focus Guerrero" not in output


def test_vertical_veo_warning(compiler, make_input):
    vertical = compiler.compile(make_input(ratio="9:16")).engine_packets[0]
    assert vertical.status is PacketStatus.WARNING
    assert vertical.compatibility_notes.notes

    widescreen = compiler.compile(make_input(ratio="16:9")).engine_packets[0]
    assert widescreen.status is PacketStatus.READY


def test_empty_narrative_yields_one_clip(compiler, make_input):
    master = compiler.compile(make_input(narrative=""))
    assert len(master.timeline) == 1
    assert master.timeline[0].timecode.in_ == "00:00"
    assert master.meta.total_duration_sec == 6


def test_invalid_duration_is_defaulted_not_raised():
    assert MoviolaRequest(duration_sec=-3).duration_sec == 8.0
    assert MoviolaRequest(duration_sec="abc").duration_sec == 8.0
    assert MoviolaRequest(duration_sec=float("nan")).duration_sec == 8.0
    assert MoviolaRequest(duration_sec="12").duration_sec == 12.0


def test_wire_names_are_camel_case(compiler, make_input):
    data = json.loads(compiler.compile(make_input()).to_json())
    assert set(data) == {"meta", "rules", "timeline", "enginePackets"}
    assert "inputSnapshotHash" in data["meta"]
    assert "negativesGlobal" in data["rules"]
    clip = data["timeline"][0]
    assert set(clip["timecode"]) == {"in", "out", "durationSec"}
    assert "genPromptBase" in clip
    assert "shotType" in clip["visuals"]
    assert "clipId" in data["enginePackets"][0]["optimizedPrompts"][0]
    assert "ratioSupported" in data["enginePackets"][0]["compatibilityNotes"]


def test_async_entry_point(make_input, rules):
    data = make_input()
    master = asyncio.run(compile_master_script(data, rules=rules))
    sync_master = MoviolaCompiler(rules=rules).compile(data)
    assert master.meta.input_snapshot_hash == sync_master.meta.input_snapshot_hash
    assert len(master.meta.input_snapshot_hash) == 64
    assert master.timeline == sync_master.timeline


def test_library_entry_point_ignores_rules_environment(tmp_path, monkeypatch, make_input):
    data = make_input()
    baseline = asyncio.run(compile_master_script(data)).to_dict()

    rules_file = tmp_path / "moviola.yaml"
    rules_file.write_text("compiler:\n  language: en-US\n  default_negatives: grain\n", encoding="utf-8")
    monkeypatch.setenv("MOVIOLA_RULES_PATH", str(rules_file))
    monkeypatch.chdir(tmp_path)

    assert MoviolaCompiler().rules == CompilerRules()
    master = asyncio.run(compile_master_script(data)).to_dict()
    assert master["rules"]["language"] == "es-MX"
    baseline["meta"].pop("createdAt")
    master["meta"].pop("createdAt")
    assert master == baseline
