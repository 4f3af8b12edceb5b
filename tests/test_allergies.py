from conftest import allergies, meds

from medsafety.allergies import AllergyConflictEvaluator
from medsafety.models import ConflictReason, MedicationStatus


def check(medications, allergy_list):
    return AllergyConflictEvaluator().evaluate(medications, allergy_list)


def test_same_class_conflict():
    result = check(meds("Amoxicillin 500mg"), allergies("Penicillin"))

    assert len(result) == 1
    assert result[0].reason is ConflictReason.SAME_CLASS
    assert result[0].allergy == "Penicillin (same drug class)"


def test_cross_reactive_conflict():
    result = check(meds("Cephalexin 500mg"), allergies("Penicillin"))

    assert [c.reason for c in result] == [ConflictReason.CROSS_REACTIVE]
    assert result[0].allergy == "Penicillin (cross-reactivity)"


def test_transitive_conflict():
    result = check(meds("Warfarin 5mg"), allergies("Amoxicillin"))

    assert [c.reason for c in result] == [ConflictReason.TRANSITIVE_INTERACTION]
    assert result[0].allergy.startswith("Amoxicillin (known interaction: ")
    assert result[0].rule_description


def test_passes_report_in_order():
    result = check(meds("Aspirin 81mg", "Ibuprofen 200mg", "Warfarin 5mg"), allergies("Aspirin"))

    assert [(c.medication, c.reason) for c in result] == [
        ("Aspirin 81mg", ConflictReason.DIRECT),
        ("Ibuprofen 200mg", ConflictReason.CROSS_REACTIVE),
        ("Warfarin 5mg", ConflictReason.TRANSITIVE_INTERACTION),
    ]
    assert result[0].allergy == "Aspirin"


def test_direct_and_class_reported_separately():
    result = check(meds("Augmentin (amoxicillin/clavulanate)"), allergies("Amoxicillin"))
    assert [c.reason for c in result] == [ConflictReason.DIRECT, ConflictReason.SAME_CLASS]


def test_duplicate_allergies_collapse():
    result = check(meds("Amoxicillin 500mg"), allergies("Penicillin", "penicillin "))
    assert len(result) == 1


def test_unrelated_medications():
    assert check(meds("Metformin 500mg", "Levothyroxine"), allergies("Penicillin")) == []


def test_empty_inputs():
    assert check([], allergies("Penicillin")) == []
    assert check(meds("Amoxicillin"), []) == []


def test_discontinued_medications_are_still_checked():
    medications = meds("Amoxicillin 500mg", "Cephalexin")
    medications[0].discontinue()

    result = check(medications, allergies("Amoxicillin"))

    assert medications[0].status is MedicationStatus.DISCONTINUED
    assert [(c.medication, c.reason) for c in result] == [
        ("Amoxicillin 500mg", ConflictReason.DIRECT),
        ("Cephalexin", ConflictReason.CROSS_REACTIVE),
    ]


def test_repeat_evaluation_gives_same_conflicts():
    evaluator = AllergyConflictEvaluator()
    medications = meds("Aspirin 81mg", "Ibuprofen 200mg", "Warfarin 5mg")
    allergy_list = allergies("Aspirin", "Penicillin")

    first = evaluator.evaluate(medications, allergy_list)
    second = evaluator.evaluate(medications, allergy_list)

    assert first == second
    assert len(first) == 3
