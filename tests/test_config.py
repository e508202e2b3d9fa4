from moviola.config import CompilerRules, load_rules

from conftest import REPO_ROOT


def test_missing_file_yields_defaults(tmp_path):
    rules = load_rules(str(tmp_path / "no-existe.yaml"))
    assert rules == CompilerRules()


def test_yaml_overrides_are_merged(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "compiler:\n"
        "  language: es-ES\n"
        "  default_engine: Sora\n"
        "  unknown_key: 1\n"
        "validation_rules:\n"
        "  max_clips: 10\n",
        encoding="utf-8",
    )
    rules = load_rules(str(path))
    assert rules.language == "es-ES"
    assert rules.default_engine == "Sora"
    assert rules.cultural_region == "Guerrero, Mexico"
    assert rules.validation["max_clips"] == 10
    assert rules.validation["min_clip_sec"] == 3


def test_env_var_selects_rules_file(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("compiler:\n  language: en-US\n", encoding="utf-8")
    monkeypatch.setenv("MOVIOLA_RULES_PATH", str(path))
    assert load_rules().language == "en-US"


def test_empty_yaml_yields_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_rules(str(path)) == CompilerRules()


def test_shipped_rules_file_matches_defaults():
    assert load_rules(str(REPO_ROOT / "config" / "moviola.yaml")) == CompilerRules()
