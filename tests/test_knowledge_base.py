import pytest

from medsafety.exceptions import KnowledgeBaseError
from medsafety.knowledge_base import (
    CROSS_REACTIVE_CLASS_PAIRS,
    DRUG_CLASS_FAMILIES,
    INTERACTION_RULES,
    cross_reactive_families,
    family_for,
    load_interaction_rules,
)
from medsafety.models import Severity


def test_rules_load_and_are_immutable():
    assert len(INTERACTION_RULES) >= 45
    assert isinstance(INTERACTION_RULES, tuple)
    assert all(rule.drug1 and rule.drug2 for rule in INTERACTION_RULES)
    assert {rule.severity for rule in INTERACTION_RULES} <= {Severity.MAJOR, Severity.MODERATE}


def test_rule_matches_both_orientations():
    rule = next(r for r in INTERACTION_RULES if (r.drug1, r.drug2) == ("warfarin", "aspirin"))
    assert rule.severity is Severity.MAJOR
    assert rule.matches("Warfarin 5mg", "Aspirin 81mg")
    assert rule.matches("Aspirin 81mg", "Warfarin 5mg")
    assert not rule.matches("Warfarin 5mg", "Warfarin 10mg")


def test_families_are_read_only():
    with pytest.raises(TypeError):
        DRUG_CLASS_FAMILIES["new"] = None


def test_family_lookup():
    assert family_for("Penicillin").name == "penicillin"
    assert family_for("Amoxicillin 500mg").name == "penicillin"
    assert family_for("Keflex").name == "cephalosporin"
    assert family_for("Metformin") is None


def test_cross_reactive_families_are_unordered():
    assert ("penicillin", "cephalosporin") in CROSS_REACTIVE_CLASS_PAIRS
    assert cross_reactive_families("penicillin") == ("cephalosporin",)
    assert cross_reactive_families("cephalosporin") == ("penicillin",)
    assert cross_reactive_families("statin") == ()


def test_malformed_severity_raises(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("drug1,drug2,severity,description,info\nwarfarin,aspirin,severe,x,y\n")
    with pytest.raises(KnowledgeBaseError):
        load_interaction_rules(path)


def test_missing_column_raises(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("drug1,drug2,severity\nwarfarin,aspirin,major\n")
    with pytest.raises(KnowledgeBaseError):
        load_interaction_rules(path)


def test_blank_drug_term_raises(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("drug1,drug2,severity,description,info\nwarfarin,,major,x,y\n")
    with pytest.raises(KnowledgeBaseError):
        load_interaction_rules(path)
