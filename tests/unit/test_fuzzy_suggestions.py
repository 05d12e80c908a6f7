from services.drug_formatting import DrugDisplay, build_index, find_suggestion, suggest_from_index
from services.drug_formatting.fuzzy import max_distance_for


def test_threshold_formula():
    assert max_distance_for("keytruda") == 5
    assert max_distance_for("opdivo") == 4
    assert max_distance_for("ab") == 2


def test_single_deletion_is_suggested(drug_dictionary):
    assert find_suggestion("Ketruda", drug_dictionary) == DrugDisplay("KEYTRUDA", "Pembrolizumab")


def test_generic_typo_resolves_to_brand_pair(drug_dictionary):
    assert find_suggestion("  pembrolizumb ", drug_dictionary) == DrugDisplay("KEYTRUDA", "Pembrolizumab")


def test_truncation_within_length_window(drug_dictionary):
    assert find_suggestion("Nivolum", drug_dictionary) == DrugDisplay("OPDIVO", "Nivolumab")


def test_exact_term_matches_itself(drug_dictionary):
    assert find_suggestion("OPDIVO", drug_dictionary) == DrugDisplay("OPDIVO", "Nivolumab")


def test_length_prefilter_rejects_short_fragments(drug_dictionary):
    assert find_suggestion("Key", drug_dictionary) is None


def test_first_letter_must_match(drug_dictionary):
    assert find_suggestion("eytruda", drug_dictionary) is None


def test_distance_above_threshold_is_rejected(drug_dictionary):
    assert find_suggestion("kzzzzzzz", drug_dictionary) is None


def test_blank_candidate_has_no_suggestion(drug_dictionary):
    assert find_suggestion("   ", drug_dictionary) is None


def test_ties_keep_first_seen_entry():
    dictionary = {
        "abcd": {"brand": "ABCD", "generic": "Xylo"},
        "abce": {"brand": "ABCE", "generic": "Yylo"},
    }

    assert find_suggestion("abcf", dictionary) == DrugDisplay("ABCD", "Xylo")


def test_closest_key_wins_over_earlier_key():
    dictionary = {
        "tecenta": {"brand": "TECENTA", "generic": "Alphamab"},
        "tecentriq": {"brand": "TECENTRIQ", "generic": "Atezolizumab"},
    }

    assert find_suggestion("tecentriw", dictionary) == DrugDisplay("TECENTRIQ", "Atezolizumab")


def test_standalone_lookup_ignores_aliases(drug_dictionary):
    alias = {"alias_term": "kxyz", "language": "ko", "english_brand": "KXYZ"}
    index = build_index(drug_dictionary, [alias])

    assert suggest_from_index("kxyy", index) == DrugDisplay("KXYZ", "KXYZ")
    assert find_suggestion("kxyy", drug_dictionary) is None
