"""Tests pour l'extraction des caractéristiques d'une carte."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chartmatch.domain.entities import Chart
from chartmatch.domain.features import (
    StructureFamily,
    StructureRarity,
    classify_structure_families,
    classify_structure_rarity,
    extract_features,
)

from tests.factories import build_chart

EXPECTED_STAR_COUNT = 4


def test_extract_features_full_chart() -> None:
    """Teste l'extraction des attributs d'une carte complète."""
    features = extract_features(build_chart(stem="丙", star_count=EXPECTED_STAR_COUNT))
    assert features.day_master_stem == "丙"
    assert features.day_master_element == "Fire"
    assert features.day_master_polarity == "Yang"
    assert features.strength == "Balanced"
    assert features.structure == "Direct Officer"
    assert features.element_percentages == (60.0, 10.0, 10.0, 10.0, 10.0)
    assert features.day_pillar_stem == "丙"
    assert features.pillar_stem_elements == ("Fire", "Earth", "Fire", "Metal")
    assert features.star_count == EXPECTED_STAR_COUNT


def test_extract_features_empty_chart_uses_neutral_defaults() -> None:
    """Teste qu'une carte vide ne lève pas d'erreur et produit des valeurs neutres."""
    features = extract_features(Chart())
    assert features.day_master_stem == ""
    assert features.strength == ""
    assert features.element_percentages == (0.0, 0.0, 0.0, 0.0, 0.0)
    assert features.structure_families == frozenset()
    assert features.structure_rarity is StructureRarity.COMMON
    assert features.day_pillar_stem == ""
    assert features.pillar_stem_elements == ()
    assert features.star_count == 0


def test_extract_features_missing_element_reads_as_zero() -> None:
    """Teste qu'un élément absent de la distribution vaut zéro."""
    features = extract_features(build_chart(percentages={"Wood": 50, "Fire": 50}))
    assert features.percentages_by_element == {
        "Wood": 50.0,
        "Fire": 50.0,
        "Earth": 0.0,
        "Metal": 0.0,
        "Water": 0.0,
    }
    assert features.reported_elements == frozenset({"Wood", "Fire"})
    assert features.reported_percentages == {"Wood": 50.0, "Fire": 50.0}


def test_extract_features_stars_none() -> None:
    """Teste qu'une liste d'étoiles absente compte pour zéro."""
    chart = Chart.model_validate({"stars": None})
    assert extract_features(chart).star_count == 0


def test_day_pillar_found_by_label_regardless_of_position() -> None:
    """Teste que le pilier du jour est trouvé par son libellé."""
    chart = Chart.model_validate(
        {"pillars": [{"label": "Hour", "gan": "癸"}, {"label": "day", "gan": "庚"}]}
    )
    assert extract_features(chart).day_pillar_stem == "庚"


def test_day_pillar_falls_back_to_third_of_four_unlabelled() -> None:
    """Teste le repli sur le troisième pilier quand aucun n'est libellé."""
    chart = Chart.model_validate({"pillars": [{"gan": g} for g in ("甲", "乙", "丙", "丁")]})
    assert extract_features(chart).day_pillar_stem == "丙"


def test_extra_upstream_fields_are_ignored() -> None:
    """Teste que les champs inconnus du service de calcul sont ignorés."""
    chart = Chart.model_validate({"luck_cycle": {"pillars": []}, "summary": {"zodiac": "Rat"}})
    assert extract_features(chart).day_master_stem == ""


def test_classify_structure_families() -> None:
    """Teste le classement d'un libellé de structure en familles."""
    assert classify_structure_families("Direct Officer") == frozenset({StructureFamily.OFFICER})
    assert classify_structure_families("Seven Killings") == frozenset({StructureFamily.KILLING})
    assert classify_structure_families("Indirect Wealth") == frozenset({StructureFamily.WEALTH})
    assert classify_structure_families("Eating God") == frozenset()


def test_classify_structure_rarity_priority() -> None:
    """Teste que les mots-clés rares priment sur les mots-clés peu communs."""
    assert classify_structure_rarity("Follow the Killing") is StructureRarity.RARE
    assert classify_structure_rarity("Seven Killings") is StructureRarity.UNCOMMON
    assert classify_structure_rarity("Hurting Officer") is StructureRarity.UNCOMMON
    assert classify_structure_rarity("Direct Officer") is StructureRarity.COMMON
    assert classify_structure_rarity("Transformation Earth") is StructureRarity.RARE


def test_reported_elements_keep_explicit_zero() -> None:
    """Teste qu'un zéro transmis reste un élément présent."""
    features = extract_features(build_chart(percentages={"Wood": 100, "Water": 0}))
    assert features.reported_percentages == {"Wood": 100.0, "Water": 0.0}


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_percentage_is_rejected(value: str) -> None:
    """Teste le rejet des pourcentages non finis."""
    payload = (
        '{"elements": {"percentages": {"Wood": %s, "Fire": 10, "Earth": 10, '
        '"Metal": 10, "Water": 10}}}' % value
    )
    with pytest.raises(ValidationError):
        Chart.model_validate_json(payload)


def test_negative_percentage_is_rejected() -> None:
    """Teste le rejet d'un pourcentage négatif."""
    with pytest.raises(ValidationError):
        Chart.model_validate({"elements": {"percentages": {"Wood": -1}}})
