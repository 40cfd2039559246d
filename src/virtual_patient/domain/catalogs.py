"""Reference tables for random patient profiles.

Every generated profile draws its values from these fixed catalogs.
"""

from __future__ import annotations

from dataclasses import dataclass

from virtual_patient.domain.enums import Gender


@dataclass(frozen=True, slots=True)
class Condition:
    """A psychological condition with its candidate symptoms."""

    name: str
    symptoms: tuple[str, ...]


CONDITIONS: tuple[Condition, ...] = (
    Condition(
        name="Major Depressive Disorder",
        symptoms=(
            "Persistent sadness",
            "Loss of interest in activities",
            "Changes in appetite or weight",
            "Sleep disturbances",
            "Fatigue",
            "Feelings of worthlessness or guilt",
            "Difficulty concentrating",
            "Thoughts of death or suicide",
        ),
    ),
    Condition(
        name="Generalized Anxiety Disorder",
        symptoms=(
            "Excessive worry",
            "Restlessness",
            "Fatigue",
            "Difficulty concentrating",
            "Irritability",
            "Muscle tension",
            "Sleep disturbances",
            "Feeling on edge",
        ),
    ),
    Condition(
        name="Post-Traumatic Stress Disorder",
        symptoms=(
            "Intrusive memories of traumatic event",
            "Flashbacks",
            "Nightmares",
            "Avoidance of trauma-related stimuli",
            "Negative changes in thinking and mood",
            "Hypervigilance",
            "Exaggerated startle response",
            "Sleep disturbances",
        ),
    ),
    Condition(
        name="Obsessive-Compulsive Disorder",
        symptoms=(
            "Intrusive, unwanted thoughts (obsessions)",
            "Repetitive behaviors or mental acts (compulsions)",
            "Excessive cleaning or handwashing",
            "Ordering and arranging things",
            "Repeatedly checking things",
            "Counting compulsions",
            "Anxiety when rituals cannot be performed",
            "Time-consuming rituals that interfere with daily activities",
        ),
    ),
    Condition(
        name="Bipolar Disorder",
        symptoms=(
            "Mood episodes alternating between depression and mania/hypomania",
            "Elevated or irritable mood during manic episodes",
            "Increased energy and activity",
            "Racing thoughts",
            "Decreased need for sleep",
            "Impulsive behavior",
            "Grandiose beliefs",
            "Depressive episodes with symptoms of major depression",
        ),
    ),
    Condition(
        name="Social Anxiety Disorder",
        symptoms=(
            "Intense fear of social situations",
            "Worry about being judged negatively",
            "Avoidance of social situations",
            "Physical symptoms like blushing, sweating, trembling",
            "Racing heart in social settings",
            "Mind going blank during conversations",
            "Anticipatory anxiety before social events",
            "Self-consciousness in everyday situations",
        ),
    ),
    Condition(
        name="Insomnia Disorder",
        symptoms=(
            "Difficulty falling asleep",
            "Difficulty staying asleep",
            "Waking up too early",
            "Non-restorative sleep",
            "Daytime fatigue",
            "Irritability",
            "Difficulty concentrating",
            "Worry about sleep",
        ),
    ),
    Condition(
        name="Adjustment Disorder",
        symptoms=(
            "Emotional or behavioral symptoms in response to an identifiable stressor",
            "Distress out of proportion to the severity of the stressor",
            "Significant impairment in social or occupational functioning",
            "Anxiety",
            "Depressed mood",
            "Conduct disturbances",
            "Mixed emotional features",
            "Symptoms developing within 3 months of stressor onset",
        ),
    ),
)

FIRST_NAMES: dict[Gender, tuple[str, ...]] = {
    Gender.MALE: (
        "James", "Michael", "David", "John", "Robert", "William", "Thomas", "Daniel",
        "Matthew", "Joseph", "Christopher", "Andrew", "Ethan", "Joshua", "Anthony",
    ),
    Gender.FEMALE: (
        "Mary", "Jennifer", "Linda", "Patricia", "Elizabeth", "Susan", "Jessica", "Sarah",
        "Karen", "Nancy", "Lisa", "Margaret", "Betty", "Sandra", "Ashley",
    ),
    Gender.NON_BINARY: (
        "Alex", "Jordan", "Taylor", "Casey", "Riley", "Avery", "Quinn", "Morgan",
        "Skyler", "Reese", "Dakota", "Hayden", "Parker", "Peyton", "Cameron",
    ),
}  # fmt: skip

OCCUPATIONS: tuple[str, ...] = (
    "Teacher",
    "Office worker",
    "Retail employee",
    "Healthcare worker",
    "Student",
    "Engineer",
    "Artist",
    "Unemployed",
    "Service industry worker",
    "IT professional",
    "Retired",
    "Self-employed",
    "Manager",
    "Construction worker",
    "Homemaker",
)

MARITAL_STATUSES: tuple[str, ...] = (
    "Single",
    "Married",
    "Divorced",
    "Widowed",
    "Separated",
    "In a relationship",
    "Engaged",
)

DURATIONS: tuple[str, ...] = (
    "a few weeks",
    "about a month",
    "several months",
    "about six months",
    "nearly a year",
    "over a year",
    "several years",
    "since childhood",
)

LIFE_STRESSORS: tuple[str, ...] = (
    "Recent job loss or career change",
    "Divorce or relationship breakup",
    "Death of a loved one",
    "Moving to a new city",
    "Financial difficulties",
    "Academic pressure or failure",
    "Workplace bullying or harassment",
    "Childhood trauma or abuse",
    "Domestic violence",
    "Major illness or health scare",
    "Identity or sexuality struggles",
    "Family conflict",
    "Becoming a parent",
    "Empty nest syndrome",
    "Retirement adjustment",
    "Cultural adjustment after immigration",
    "Victim of crime or assault",
    "Military service or combat exposure",
    "Natural disaster survivor",
    "Pandemic-related isolation or loss",
)

PREVIOUS_TREATMENTS: tuple[str, ...] = (
    "None",
    "Therapy briefly",
    "Medication (discontinued)",
    "Counseling through work",
    "Self-help books",
    "Online therapy",
    "Support group",
    "Hospitalization",
    "Tried meditation apps",
)

FAMILY_HISTORIES: tuple[str, ...] = (
    "Depression in mother",
    "Father with alcohol use disorder",
    "Sibling with anxiety",
    "Grandparent with bipolar disorder",
    "No known family history",
    "Uncle with schizophrenia",
    "Family history unknown (adopted)",
)

PERSONALITY_TRAITS: tuple[str, ...] = (
    "Perfectionist",
    "People-pleaser",
    "Introverted",
    "Extroverted",
    "Cautious",
    "Risk-taker",
    "Analytical",
    "Creative",
    "Sensitive",
    "Resilient",
    "Organized",
    "Spontaneous",
    "Ambitious",
    "Laid-back",
    "Empathetic",
)

COPING_MECHANISMS: tuple[str, ...] = (
    "Exercise",
    "Isolation",
    "Overworking",
    "Substance use",
    "Creative outlets",
    "Seeking social support",
    "Avoidance",
    "Distraction through media",
    "Journaling",
    "Mindfulness practices",
    "Unhealthy eating patterns",
)

# Patient-voiced phrasing of each condition, used as the chief complaint.
CHIEF_COMPLAINTS: dict[str, tuple[str, ...]] = {
    "Major Depressive Disorder": (
        "feeling sad all the time",
        "lost interest in everything",
        "can't get out of bed most days",
        "feeling empty inside",
    ),
    "Generalized Anxiety Disorder": (
        "constant worry about everything",
        "can't stop my racing thoughts",
        "always feeling on edge",
        "overwhelming anxiety",
    ),
    "Post-Traumatic Stress Disorder": (
        "flashbacks to a traumatic event",
        "nightmares that won't stop",
        "feeling constantly on guard",
        "triggered by everyday situations",
    ),
    "Obsessive-Compulsive Disorder": (
        "intrusive thoughts I can't control",
        "compulsive behaviors taking over my life",
        "constant need to check things",
        "rituals that consume hours of my day",
    ),
    "Bipolar Disorder": (
        "extreme mood swings",
        "periods of high energy followed by crashes",
        "impulsive decisions I later regret",
        "unstable moods",
    ),
    "Social Anxiety Disorder": (
        "paralyzing fear in social situations",
        "avoiding people and social events",
        "extreme self-consciousness around others",
        "panic attacks before social gatherings",
    ),
    "Insomnia Disorder": (
        "can't sleep no matter how tired I am",
        "waking up throughout the night",
        "exhausted but mind won't shut off",
        "sleep problems ruining my life",
    ),
    "Adjustment Disorder": (
        "can't cope since a recent life change",
        "overwhelmed by recent events",
        "not handling stress well lately",
        "emotional since my life changed",
    ),
}

GENERIC_CHIEF_COMPLAINTS: tuple[str, ...] = ("feeling unwell mentally",)

MIN_AGE = 18
MAX_AGE = 75


def chief_complaints_for(condition_name: str) -> tuple[str, ...]:
    """Return complaint phrases for a condition, or the generic fallback."""
    return CHIEF_COMPLAINTS.get(condition_name, GENERIC_CHIEF_COMPLAINTS)
