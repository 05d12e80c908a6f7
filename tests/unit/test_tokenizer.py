import pytest

from services.drug_formatting import (
    Alias,
    DrugDisplay,
    Token,
    TokenType,
    format_text,
    ignore_term,
    render_plain_text,
    replace_term,
    tokenize,
)


def _known(tokens):
    return [t.content for t in tokens if t.type == TokenType.KNOWN]


def _unknown(tokens):
    return [t.content for t in tokens if t.type == TokenType.UNKNOWN]


def test_brand_mention_is_formatted(drug_dictionary):
    tokens = tokenize("Start keytruda treatment.", drug_dictionary)

    assert render_plain_text(tokens) == "Start KEYTRUDA (Pembrolizumab) treatment."
    assert _known(tokens) == ["KEYTRUDA (Pembrolizumab)"]
    assert _unknown(tokens) == ["Start"]


@pytest.mark.parametrize("mention", ["keytruda", "Keytruda", "PEMBROLIZUMAB", "pembrolizumab"])
def test_matching_is_case_insensitive(drug_dictionary, mention):
    tokens = tokenize(mention, drug_dictionary)

    assert len(tokens) == 1
    assert tokens[0].type == TokenType.KNOWN
    assert tokens[0].content == "KEYTRUDA (Pembrolizumab)"


def test_longest_match_wins():
    dictionary = {
        "darzalex": {"brand": "DARZALEX", "generic": "Daratumumab"},
        "darzalex faspro": {"brand": "DARZALEX FASPRO", "generic": "Daratumumab and hyaluronidase-fihj"},
    }

    tokens = tokenize("darzalex faspro", dictionary)

    assert len(tokens) == 1
    assert tokens[0].content == "DARZALEX FASPRO (Daratumumab and hyaluronidase-fihj)"


def test_already_formatted_text_is_left_alone(drug_dictionary):
    text = "KEYTRUDA (Pembrolizumab) is good."

    tokens = tokenize(text, drug_dictionary)

    assert render_plain_text(tokens) == text
    assert _known(tokens) == []


def test_generic_followed_by_its_own_parenthetical_is_not_double_wrapped(drug_dictionary):
    text = "pembrolizumab (Pembrolizumab) was administered."

    assert format_text(text, drug_dictionary) == text


def test_formatting_is_idempotent(drug_dictionary, korean_aliases):
    text = "Start keytruda and opdivo, then Nivolumab; 키트루다 later. Darzalex Faspro too."

    once = format_text(text, drug_dictionary, korean_aliases)
    twice = format_text(once, drug_dictionary, korean_aliases)

    assert once == (
        "Start KEYTRUDA (Pembrolizumab) and OPDIVO (Nivolumab), then OPDIVO (Nivolumab); "
        "KEYTRUDA (Pembrolizumab) later. DARZALEX FASPRO (Daratumumab and hyaluronidase-fihj) too."
    )
    assert twice == once


def test_passthrough_text_is_reconstructed_exactly(drug_dictionary):
    text = "The patient, Mr. Smith (age 54), was stable!\n\tNext visit: \"Monday\" [tbd]? {ok}"

    tokens = tokenize(text, drug_dictionary, {"smith"})

    assert render_plain_text(tokens) == text
    assert _known(tokens) == []
    assert _unknown(tokens) == ["The", "Mr", "Next", "Monday"]


def test_typo_becomes_unknown_with_suggestion(drug_dictionary):
    tokens = tokenize("Ketruda is prescribed.", drug_dictionary)

    assert tokens[0].type == TokenType.UNKNOWN
    assert tokens[0].content == "Ketruda"
    assert tokens[0].suggestion == DrugDisplay("KEYTRUDA", "Pembrolizumab")
    assert tokens[0].to_dict() == {
        "type": "unknown",
        "content": "Ketruda",
        "data": {"suggestion": {"brand": "KEYTRUDA", "generic": "Pembrolizumab"}},
    }


def test_exact_brand_never_becomes_a_suggestion(drug_dictionary):
    tokens = tokenize("Keytruda is prescribed.", drug_dictionary)

    assert tokens[0].type == TokenType.KNOWN
    assert _unknown(tokens) == []


def test_ignored_terms_are_not_flagged(drug_dictionary):
    assert _unknown(tokenize("Foobar helps.", drug_dictionary)) == ["Foobar"]

    ignored = ignore_term(set(), "Foobar")
    tokens = tokenize("Foobar helps.", drug_dictionary, ignored)

    assert _unknown(tokens) == []
    assert tokens[0] == Token(TokenType.TEXT, "Foobar")


def test_alias_is_formatted_with_linked_entry(drug_dictionary, korean_aliases):
    tokens = tokenize("키트루다 투여 시작", drug_dictionary, set(), korean_aliases)

    assert tokens[0].type == TokenType.KNOWN
    assert tokens[0].content == "KEYTRUDA (Pembrolizumab)"
    assert render_plain_text(tokens) == "KEYTRUDA (Pembrolizumab) 투여 시작"


def test_dangling_alias_uses_fallback_display(drug_dictionary):
    aliases = [
        Alias(alias_term="임핀지", language="ko", english_brand="Imfinzi", generic_name="durvalumab"),
        Alias(alias_term="리브타요", language="ko", english_brand="Libtayo"),
    ]

    tokens = tokenize("임핀지 또는 리브타요", drug_dictionary, set(), aliases)

    assert _known(tokens) == ["IMFINZI (Durvalumab)", "LIBTAYO (LIBTAYO)"]


def test_legacy_dictionary_values_are_supported():
    dictionary = {"keytruda": "pembrolizumab", "opdivo": "nivolumab"}

    assert format_text("Start pembrolizumab treatment.", dictionary) == "Start KEYTRUDA (Pembrolizumab) treatment."


def test_empty_dictionary_passes_text_to_scanner():
    tokens = tokenize("Aspirin daily", {})

    assert [(t.type, t.content) for t in tokens] == [
        (TokenType.UNKNOWN, "Aspirin"),
        (TokenType.TEXT, " "),
        (TokenType.TEXT, "daily"),
    ]


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_yields_no_tokens(drug_dictionary, text):
    assert tokenize(text, drug_dictionary) == []
    assert format_text(text, drug_dictionary) == ""


def test_ignore_term_returns_new_set():
    original = {"alpha"}

    updated = ignore_term(original, "  Beta ")

    assert updated == {"alpha", "beta"}
    assert original == {"alpha"}
    assert ignore_term(original, "   ") == {"alpha"}


def test_shared_generic_is_rewrapped_on_second_pass():
    dictionary = {
        "alpha": {"brand": "ALPHA", "generic": "Sharedine"},
        "beta": {"brand": "BETA", "generic": "Sharedine"},
    }

    once = format_text("beta", dictionary)

    assert once == "BETA (Sharedine)"
    assert format_text(once, dictionary) == "BETA (ALPHA (Sharedine))"


def test_replace_term_replaces_whole_words_only():
    text = "Ketruda daily. Ketrudas stays, ketruda stays, (Ketruda) changes."

    assert replace_term(text, "Ketruda", "KEYTRUDA") == (
        "KEYTRUDA daily. Ketrudas stays, ketruda stays, (KEYTRUDA) changes."
    )


def test_replace_term_treats_input_literally():
    assert replace_term("Dose a.b now, axb later", "a.b", r"\1") == r"Dose \1 now, axb later"
    assert replace_term("", "Ketruda", "KEYTRUDA") == ""
    assert replace_term("Ketruda", "", "KEYTRUDA") == "Ketruda"
