"""Random psychological patient profile generation.

Profiles are drawn from the fixed reference tables in
``virtual_patient.domain.catalogs``. The random source is injected so tests
can pass a seeded ``random.Random``.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, TypeVar

from virtual_patient.domain import catalogs
from virtual_patient.domain.enums import Gender
from virtual_patient.domain.value_objects import PatientProfile

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")


def sample_distinct(
    rng: random.Random,
    population: Sequence[T],
    min_k: int,
    max_k: int,
) -> tuple[T, ...]:
    """Sample between ``min_k`` and ``max_k`` distinct items, inclusive.

    The sample size is uniform over the range; items are drawn without
    replacement so the result never repeats a position of ``population``.

    Raises:
        ValueError: If the range is invalid or exceeds the population size.
    """
    if min_k < 0 or min_k > max_k:
        raise ValueError(f"Invalid sample range [{min_k}, {max_k}]")
    if max_k > len(population):
        raise ValueError(f"Cannot sample {max_k} items from a population of {len(population)}")
    k = rng.randint(min_k, max_k)
    return tuple(rng.sample(population, k))


class ProfileGenerator:
    """Generates randomized patient profiles.

    Example:
        >>> generator = ProfileGenerator(random.Random(7))
        >>> profile = generator.generate()
        >>> 3 <= len(profile.symptoms) <= 5
        True
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def generate(self) -> PatientProfile:
        rng = self._rng

        age = rng.randint(catalogs.MIN_AGE, catalogs.MAX_AGE)
        gender = rng.choice(list(Gender))
        name = rng.choice(catalogs.FIRST_NAMES[gender])
        occupation = rng.choice(catalogs.OCCUPATIONS)
        marital_status = rng.choice(catalogs.MARITAL_STATUSES)

        condition = rng.choice(catalogs.CONDITIONS)
        symptoms = sample_distinct(rng, condition.symptoms, 3, 5)
        duration = rng.choice(catalogs.DURATIONS)

        life_stressors = sample_distinct(rng, catalogs.LIFE_STRESSORS, 1, 3)
        previous_treatment = sample_distinct(rng, catalogs.PREVIOUS_TREATMENTS, 0, 1)
        family_history = sample_distinct(rng, catalogs.FAMILY_HISTORIES, 0, 1)
        personality_traits = sample_distinct(rng, catalogs.PERSONALITY_TRAITS, 2, 4)
        coping_mechanisms = sample_distinct(rng, catalogs.COPING_MECHANISMS, 1, 3)

        chief_complaint = rng.choice(catalogs.chief_complaints_for(condition.name))

        return PatientProfile(
            name=name,
            age=age,
            gender=gender.value,
            occupation=occupation,
            marital_status=marital_status,
            chief_complaint=chief_complaint,
            condition=condition.name,
            symptoms=symptoms,
            duration=duration,
            life_stressors=life_stressors,
            previous_treatment=previous_treatment,
            family_history=family_history,
            personality_traits=personality_traits,
            coping_mechanisms=coping_mechanisms,
        )


def generate_random_profile(rng: random.Random | None = None) -> PatientProfile:
    """Generate one random patient profile."""
    return ProfileGenerator(rng).generate()
