import json

import pytest

from moviola.director.parser import InputParser
from moviola.director.validator import ScriptValidator


def test_parse_fenced_json(make_input):
    payload = make_input().model_dump(mode="json", by_alias=True)
    raw = "```json\n" + json.dumps(payload) + "\n```"
    parsed = InputParser().parse(raw)
    assert parsed == make_input()


def test_parse_dict_with_defaults():
    parsed = InputParser().parse({"traceId": "t-1", "narrativeText": "Hola."})
    assert parsed.reveal_settings.aspect_ratio.value == "1:1"
    assert parsed.moviola.duration_sec == 8.0
    assert parsed.cultural_elements == []


def test_parse_invalid_json_raises_value_error():
    with pytest.raises(ValueError):
        InputParser().parse("{no es json")


def test_parse_unknown_aspect_ratio_raises_value_error():
    with pytest.raises(ValueError):
        InputParser().parse({"traceId": "t-1", "revealSettings": {"aspectRatio": "7:3"}})


def test_compiled_master_is_valid(compiler, make_input):
    master = compiler.compile(make_input(), engines=["Veo", "Sora"])
    result = ScriptValidator().validate(master, requested_sec=9)
    assert result
    assert result.errors == []


def test_validator_reports_gap_in_timeline(compiler, make_input):
    master = compiler.compile(make_input())
    master.timeline[1].timecode.in_ = "00:09"
    result = ScriptValidator().validate(master)
    assert not result.is_valid
    assert any("contigüidad" in error for error in result.errors)


def test_validator_reports_misaligned_packet(compiler, make_input):
    master = compiler.compile(make_input())
    master.engine_packets[0].optimized_prompts.pop()
    result = ScriptValidator().validate(master)
    assert not result.is_valid
    assert any("clipId" in error for error in result.errors)


def test_validator_warns_on_packet_warning_and_duration_drift(compiler, make_input):
    master = compiler.compile(make_input(ratio="9:16"))
    result = ScriptValidator().validate(master, requested_sec=30)
    assert result.is_valid
    assert any("WARNING" in warning for warning in result.warnings)
    assert any("30" in warning for warning in result.warnings)


def test_validator_rules_override(compiler, make_input):
    master = compiler.compile(make_input())
    result = ScriptValidator({"max_clip_sec": 3}).validate(master)
    assert not result.is_valid
