from __future__ import annotations
from typing import Any, Dict, Tuple
import json
from pathlib import Path

from licensematch.core.errors import TemplateFormatError
from licensematch.core.patterns import PatternMatcher, RegexPatternMatcher
from licensematch.core.tokens import DEFAULT_SKIPPABLE_TOKENS, Tokenizer


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    suffix = p.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            import yaml  # type: ignore
        except Exception as e:
            raise ImportError("PyYAML is required to load YAML config files. Install with `pip install pyyaml`.") from e
        cfg = yaml.safe_load(text) or {}
    else:
        # default to JSON
        cfg = json.loads(text or "{}")
    if not isinstance(cfg, dict):
        raise TemplateFormatError(f"Config file {p} must contain a mapping at the top level")
    return cfg


def _make_tokenizer(spec: Dict[str, Any] | None) -> Tokenizer:
    if not spec:
        return Tokenizer()
    skippable = spec.get("skippable_tokens")
    if skippable is None:
        tokens = set(DEFAULT_SKIPPABLE_TOKENS)
    else:
        tokens = {str(t) for t in skippable}
    tokens.update(str(t) for t in (spec.get("extra_skippable_tokens") or []))
    words = spec.get("equivalent_words") or {}
    if not isinstance(words, dict):
        raise TemplateFormatError("tokenizer.equivalent_words must be a mapping")
    return Tokenizer(skippable_tokens=tokens, equivalent_words={str(k): str(v) for k, v in words.items()})


def _make_pattern_matcher(spec: Dict[str, Any] | None) -> PatternMatcher:
    if not spec:
        return RegexPatternMatcher()
    return RegexPatternMatcher(ignore_case=bool(spec.get("ignore_case", True)))


def build_from_config(cfg: Dict[str, Any]) -> Tuple[Tokenizer, PatternMatcher]:
    tokenizer = _make_tokenizer(cfg.get("tokenizer"))
    pattern_matcher = _make_pattern_matcher(cfg.get("patterns"))
    return tokenizer, pattern_matcher
