from licensematch.core.differences import LineColumn
from licensematch.core.tokens import (
    DEFAULT_SKIPPABLE_TOKENS,
    Tokenizer,
    normalize_text,
    tokenize,
    can_skip,
    tokens_equivalent,
    locate_original_text,
)

def test_normalize_quotes_dashes_and_line_breaks():
    s = normalize_text("Don’t “quote” — here\r\nnext")
    assert s == "Don't \"quote\" - here\nnext"

def test_normalize_keeps_case_and_collapses_spaces():
    assert normalize_text("Some   Text\tHere") == "Some Text Here"
    assert normalize_text("see http://example.com") == "see https://example.com"

def test_tokenize_words_and_punctuation_with_locations():
    tokens, locations = tokenize("Hello, World.\n  (c) 2024")
    assert tokens == ["hello", ",", "world", ".", "(", "c", ")", "2024"]
    assert locations[0] == LineColumn(1, 0, 5)
    assert locations[2] == LineColumn(1, 7, 5)
    assert locations[4] == LineColumn(2, 2, 1)
    assert locations[7] == LineColumn(2, 6, 4)

def test_can_skip_defaults():
    assert can_skip(",")
    assert can_skip("#")
    assert can_skip("----")
    assert can_skip("====")
    assert not can_skip("word")
    assert not can_skip(None)
    for t in DEFAULT_SKIPPABLE_TOKENS:
        assert tokenize(t)[0] == [t]

def test_custom_skippable_tokens():
    tk = Tokenizer(skippable_tokens=["#"])
    assert tk.can_skip("#")
    assert not tk.can_skip(",")

def test_tokens_equivalent():
    assert tokens_equivalent("ABC", "abc")
    assert tokens_equivalent("Licence", "license")
    assert tokens_equivalent(None, None)
    assert not tokens_equivalent("a", None)
    assert tokens_equivalent("wilful", "willful")
    assert not tokens_equivalent("colour", "color")
    tk = Tokenizer(equivalent_words={"colour": "color"})
    assert tk.tokens_equivalent("colour", "color")

def test_locate_original_text_keeps_casing():
    text = "Copyright 2024 Example Corp\nAll Rights"
    _, locations = tokenize(text)
    assert locate_original_text(text, 1, 3, locations) == "2024 Example Corp"
    assert locate_original_text(text, 1, 4, locations) == "2024 Example Corp\nAll"
    assert locate_original_text(text, 2, 10, locations) == "Example Corp\nAll Rights"
    assert locate_original_text(text, 3, 2, locations) == ""
