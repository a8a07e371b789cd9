"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `chartmatch` et `tests` en ajoutant la
racine du projet au sys.path, et fournit une carte et un petit corpus de référence.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from chartmatch...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from chartmatch.domain.entities import Chart, ReferencePerson  # noqa: E402
from tests.factories import build_chart, build_person  # noqa: E402


@pytest.fixture
def chart() -> Chart:
    """Carte de référence: Jia Wood équilibré, Direct Officer, Wood à 60%."""
    return build_chart()


@pytest.fixture
def small_corpus() -> list[ReferencePerson]:
    """Corpus de trois fiches aux profils contrastés."""
    return [
        build_person(
            "alpha", stem="壬", strength="Weak", structure="Seven Killings",
            dominant=("Water", "Metal"),
        ),
        build_person(
            "bravo", stem="甲", strength="Balanced", structure="Direct Officer",
            dominant=("Wood", "Fire"),
        ),
        build_person(
            "charlie", stem="乙", strength="Strong", structure="Indirect Wealth",
            dominant=("Wood", "Water"), category="leader",
        ),
    ]
