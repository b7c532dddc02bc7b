import json
from pathlib import Path

import pytest

from licensematch.io import load_config, build_from_config
from licensematch.core import TemplateEvent, compare_template
from licensematch.core.errors import TemplateFormatError

def test_build_from_json_config(tmp_path: Path):
    cfg = {
        "tokenizer": {
            "skippable_tokens": ["#"],
            "extra_skippable_tokens": ["%"],
            "equivalent_words": {"colour": "color"},
        },
        "patterns": {"ignore_case": False},
    }
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    loaded = load_config(cfg_path)
    tokenizer, pattern_matcher = build_from_config(loaded)
    assert tokenizer.can_skip("#")
    assert tokenizer.can_skip("%")
    assert not tokenizer.can_skip(",")
    assert tokenizer.tokens_equivalent("colour", "color")
    assert pattern_matcher.match_prefix("acme", "ACME") is None

    # commas are no longer skippable under this config
    events = [TemplateEvent.literal("Hello world")]
    assert not compare_template(events, "Hello, world", tokenizer=tokenizer).matches()
    assert compare_template(events, "% Hello world", tokenizer=tokenizer).matches()

def test_build_from_yaml_config(tmp_path: Path):
    pytest.importorskip("yaml")
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "tokenizer:\n"
        "  extra_skippable_tokens: ['%']\n"
        "patterns:\n"
        "  ignore_case: true\n",
        encoding="utf-8",
    )
    tokenizer, pattern_matcher = build_from_config(load_config(cfg_path))
    assert tokenizer.can_skip("%")
    assert tokenizer.can_skip(",")
    assert pattern_matcher.match_prefix("acme", "ACME") == 4

def test_empty_config_uses_defaults(tmp_path: Path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text("", encoding="utf-8")
    tokenizer, _ = build_from_config(load_config(cfg_path))
    assert tokenizer.can_skip(",")

def test_config_must_be_mapping(tmp_path: Path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(TemplateFormatError):
        load_config(cfg_path)
