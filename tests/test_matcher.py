from medsafety.matcher import generic_query, names_refer, pair_key


def test_names_refer_is_two_way_and_case_insensitive():
    assert names_refer("Lisinopril 10mg", "lisinopril")
    assert names_refer("lisinopril", "  LISINOPRIL 10MG ")
    assert not names_refer("Losartan 50mg", "lisinopril")


def test_empty_names_never_match():
    assert not names_refer("", "aspirin")
    assert not names_refer("aspirin", "   ")
    assert not names_refer(None, "aspirin")


def test_pair_key_ignores_order_and_case():
    assert pair_key("Warfarin 5mg", "Aspirin 81mg") == pair_key("aspirin 81mg", "WARFARIN 5mg")
    assert pair_key("a", "b") != pair_key("a", "c")


def test_generic_query_strips_strength_and_form():
    assert generic_query("Metformin 500mg ER tablet") == "metformin"
    assert generic_query("Warfarin 5 mg") == "warfarin"
    assert generic_query("Valproic Acid 250mg (capsule)") == "valproic acid"
