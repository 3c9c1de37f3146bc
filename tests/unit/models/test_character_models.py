"""Tests for character sheet enums and value records."""

from __future__ import annotations

import pydantic
import pytest

from dnd_party.models import (
    DEFAULT_RACE,
    SKILL_ABILITY_MAP,
    Ability,
    AbilityScore,
    CharacterInit,
    ExtraAbility,
    Race,
    Skill,
    SkillValue,
    calculate_modifier,
)


class TestEnums:
    """Tests for the closed identifier sets."""

    def test_six_abilities(self) -> None:
        """Test the canonical ability list."""
        assert [ability.value for ability in Ability] == ["STR", "DEX", "CON", "INT", "WIS", "CHA"]

    def test_ability_full_name(self) -> None:
        """Test ability display names."""
        assert Ability.WIS.full_name == "Wisdom"
        assert Ability.CON.full_name == "Constitution"

    def test_eighteen_skills_mapped(self) -> None:
        """Test every skill has exactly one driving ability."""
        assert len(Skill) == 18
        assert set(SKILL_ABILITY_MAP) == set(Skill)

    @pytest.mark.parametrize(
        ("skill", "ability"),
        [
            (Skill.ATHLETICS, Ability.STR),
            (Skill.STEALTH, Ability.DEX),
            (Skill.ARCANA, Ability.INT),
            (Skill.PERCEPTION, Ability.WIS),
            (Skill.PERSUASION, Ability.CHA),
        ],
    )
    def test_skill_ability(self, skill: Skill, ability: Ability) -> None:
        """Test sample entries of the skill table."""
        assert skill.ability == ability

    def test_table_is_read_only(self) -> None:
        """Test the skill table cannot be mutated."""
        with pytest.raises(TypeError):
            SKILL_ABILITY_MAP[Skill.STEALTH] = Ability.STR  # type: ignore[index]

    def test_skill_display_name(self) -> None:
        """Test skill display names."""
        assert Skill.SLEIGHT_OF_HAND.display_name == "Sleight Of Hand"

    def test_race_values(self) -> None:
        """Test races use display names on the wire."""
        assert DEFAULT_RACE == Race.HUMAN
        assert Race("Half-Orc") == Race.HALF_ORC
        assert Race.YUAN_TI_PUREBLOOD.value == "Yuan-ti Pureblood"


class TestAbilityScore:
    """Tests for AbilityScore."""

    def test_bonus_from_raw(self) -> None:
        """Test the bonus is filled from raw when omitted."""
        assert AbilityScore(raw=15).bonus == 2
        assert AbilityScore(raw=3).bonus == -4

    def test_explicit_bonus_kept(self) -> None:
        """Test a supplied bonus is not recomputed."""
        assert AbilityScore(raw=10, bonus=3).bonus == 3

    def test_from_bare_int(self) -> None:
        """Test a bare integer validates as a raw score."""
        score = AbilityScore.model_validate(8)

        assert score.raw == 8
        assert score.bonus == -1

    def test_from_raw(self) -> None:
        """Test the consistent constructor."""
        assert AbilityScore.from_raw(18) == AbilityScore(raw=18, bonus=4)

    def test_missing_raw_rejected(self) -> None:
        """Test a score needs a raw value."""
        with pytest.raises(pydantic.ValidationError):
            AbilityScore.model_validate({"bonus": 2})

    def test_calculate_modifier(self) -> None:
        """Test the modifier helper."""
        assert [calculate_modifier(raw) for raw in (3, 8, 10, 18)] == [-4, -1, 0, 4]


class TestSkillValue:
    """Tests for SkillValue serialization."""

    def test_camel_case_dump(self) -> None:
        """Test wire names use camelCase."""
        value = SkillValue(driving_ability=Ability.DEX, proficient=True, value=5, passive_value=15)

        assert value.model_dump(mode="json", by_alias=True) == {
            "drivingAbility": "DEX",
            "proficient": True,
            "value": 5,
            "passiveValue": 15,
        }


class TestExtraAbility:
    """Tests for ExtraAbility."""

    def test_accepts_wire_names(self) -> None:
        """Test camelCase input."""
        ability = ExtraAbility.model_validate({"name": "Rage", "usesLeft": 2})

        assert ability.uses_left == 2
        assert ability.description == ""

    def test_empty_name_rejected(self) -> None:
        """Test an ability needs a name."""
        with pytest.raises(pydantic.ValidationError):
            ExtraAbility(name="")


class TestCharacterInit:
    """Tests for the creation payload."""

    @pytest.fixture
    def minimal(self) -> dict[str, object]:
        return {
            "name": "Kaelin",
            "alignment": "Lawful Good",
            "backStory": "",
            "hitPoints": 12,
            "movementSpeed": 30,
        }

    def test_minimal_defaults(self, minimal: dict[str, object]) -> None:
        """Test optional fields stay unset."""
        init = CharacterInit.model_validate(minimal)

        assert init.stats == {}
        assert init.extra_abilities == {}
        assert init.race is None
        assert init.proficiency_bonus is None
        assert init.skill_proficiencies is None
        assert init.physical_description is None

    @pytest.mark.parametrize(
        "missing",
        ["name", "alignment", "backStory", "hitPoints", "movementSpeed"],
    )
    def test_required_fields(self, minimal: dict[str, object], missing: str) -> None:
        """Test each required field is enforced."""
        del minimal[missing]

        with pytest.raises(pydantic.ValidationError):
            CharacterInit.model_validate(minimal)

    def test_null_stats_means_roll(self, minimal: dict[str, object]) -> None:
        """Test null stats become an empty set."""
        init = CharacterInit.model_validate({**minimal, "stats": None})

        assert init.stats == {}

    def test_stats_keyed_by_ability(self, minimal: dict[str, object]) -> None:
        """Test stat keys and raw-only scores are normalized."""
        init = CharacterInit.model_validate({**minimal, "stats": {"DEX": {"raw": 14}, "STR": 9}})

        assert init.stats[Ability.DEX] == AbilityScore(raw=14, bonus=2)
        assert init.stats[Ability.STR].bonus == -1

    def test_unknown_ability_rejected(self, minimal: dict[str, object]) -> None:
        """Test a non-canonical ability key is rejected."""
        with pytest.raises(pydantic.ValidationError):
            CharacterInit.model_validate({**minimal, "stats": {"LUCK": 10}})

    @pytest.mark.parametrize(
        "proficiencies",
        [
            ["STEALTH", "ARCANA"],
            ["stealth", "arcana"],
            {"STEALTH": True, "ARCANA": True},
        ],
    )
    def test_proficiency_shapes(
        self,
        minimal: dict[str, object],
        proficiencies: object,
    ) -> None:
        """Test proficiencies accept lists and mappings in any case."""
        init = CharacterInit.model_validate({**minimal, "skillProficiencies": proficiencies})

        assert init.skill_proficiencies == frozenset({Skill.STEALTH, Skill.ARCANA})

    def test_proficiencies_alias(self, minimal: dict[str, object]) -> None:
        """Test the short field name is accepted."""
        init = CharacterInit.model_validate({**minimal, "proficiencies": ["ANIMAL HANDLING"]})

        assert init.skill_proficiencies == frozenset({Skill.ANIMAL_HANDLING})

    def test_abilities_list_keyed_by_name(self, minimal: dict[str, object]) -> None:
        """Test a list of special abilities is keyed by name."""
        init = CharacterInit.model_validate(
            {**minimal, "abilities": [{"name": "Rage", "usesLeft": 2}, {"name": "Dash"}]}
        )

        assert set(init.extra_abilities) == {"Rage", "Dash"}
        assert init.extra_abilities["Rage"].uses_left == 2

    def test_snake_case_input(self) -> None:
        """Test field names are accepted as well as wire names."""
        init = CharacterInit(
            name="Kaelin",
            alignment="Chaotic Good",
            back_story="",
            hit_points=8,
            movement_speed=25,
            race=Race.HALFLING,
        )

        assert init.race == Race.HALFLING
        assert init.movement_speed == 25

    def test_unknown_race_rejected(self, minimal: dict[str, object]) -> None:
        """Test race is a closed set."""
        with pytest.raises(pydantic.ValidationError):
            CharacterInit.model_validate({**minimal, "race": "Martian"})
