from datetime import date, datetime

from medsafety.models import AllergyConflict, ConflictReason, Medication, MedicationStatus


def test_refill_date_accepts_iso_string():
    med = Medication(id="1", name="Lisinopril 10mg", refill_date="2026-10-26")
    assert med.refill_date == date(2026, 10, 26)

    med = Medication(id="2", name="Aspirin", refill_date=datetime(2026, 10, 26, 15, 30))
    assert med.refill_date == date(2026, 10, 26)


def test_reasons_split_comma_joined_text():
    med = Medication(id="1", name="Metformin", reason="type 2 diabetes, weight,  ")
    assert med.reasons == ["type 2 diabetes", "weight"]


def test_status_progression_and_discontinue():
    med = Medication(id="1", name="Metformin")
    assert med.status is MedicationStatus.PRESCRIBED
    assert med.advance_status() is MedicationStatus.SENT_TO_PHARMACY
    assert med.advance_status() is MedicationStatus.PICKED_UP
    assert med.advance_status() is MedicationStatus.ACTIVE
    assert med.advance_status() is MedicationStatus.ACTIVE

    med.discontinue()
    assert med.status is MedicationStatus.DISCONTINUED
    assert med.advance_status() is MedicationStatus.DISCONTINUED


def test_status_accepts_string_value():
    med = Medication(id="1", name="Metformin", status="picked_up")
    assert med.status is MedicationStatus.PICKED_UP


def test_annotated_allergy_text_per_reason():
    assert AllergyConflict("Amoxicillin", "Penicillin", ConflictReason.DIRECT).allergy == "Penicillin"
    assert AllergyConflict("Amoxicillin", "Penicillin", ConflictReason.SAME_CLASS).allergy == \
        "Penicillin (same drug class)"
    assert AllergyConflict("Cephalexin", "Penicillin", ConflictReason.CROSS_REACTIVE).allergy == \
        "Penicillin (cross-reactivity)"
    conflict = AllergyConflict("Warfarin 5mg", "Amoxicillin", ConflictReason.TRANSITIVE_INTERACTION,
                               rule_description="Bleeding risk.")
    assert conflict.allergy == "Amoxicillin (known interaction: Bleeding risk.)"
