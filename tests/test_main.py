import json

from moviola.main import main

from conftest import REPO_ROOT

RULES = str(REPO_ROOT / "config" / "moviola.yaml")


def test_demo_compiles_exports_and_validates(tmp_path):
    output = tmp_path / "out" / "master.json"
    assert main(["--rules", RULES, "--check", "--output", str(output)]) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["meta"]["traceId"] == "demo-mercado-001"
    assert [p["engine"] for p in data["enginePackets"]] == ["Veo"]


def test_engines_from_command_line(tmp_path):
    output = tmp_path / "master.json"
    assert main(["--rules", RULES, "--engine", "Sora", "--engine", "Wan", "--output", str(output)]) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [p["engine"] for p in data["enginePackets"]] == ["Sora", "Wan"]


def test_build_prompt_fills_visuals(tmp_path):
    output = tmp_path / "master.json"
    assert main(["--rules", RULES, "--build-prompt", "--json", "--output", str(output)]) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert "Visuals: [SCENE]:" in data["timeline"][0]["genPromptBase"]


def test_input_file_and_errors(tmp_path):
    request = tmp_path / "request.json"
    request.write_text(json.dumps({"traceId": "t-9", "narrativeText": ""}), encoding="utf-8")
    assert main(["--rules", RULES, str(request)]) == 0

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert main(["--rules", RULES, str(broken)]) == 1
    assert main(["--rules", RULES, str(tmp_path / "missing.json")]) == 1
