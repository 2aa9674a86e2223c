"""Tests for daily target derivation."""

import pytest

from services import derive_targets, mifflin_st_jeor
from services.records import MacroTarget, Profile


def make_profile(**overrides):
    fields = dict(age=30, sex='male', height=180, weight=80, activity_level='moderate', goal='maintenance')
    fields.update(overrides)
    return Profile(**fields)


def test_mifflin_st_jeor_sex_offsets():
    assert mifflin_st_jeor('male', 30, 180, 80) == pytest.approx(1780)
    assert mifflin_st_jeor('female', 30, 180, 80) == pytest.approx(1614)


def test_maintenance_targets():
    result = derive_targets(make_profile())

    # BMR 1780 x 1.55 = 2759; protein 160 g, fats 64 g, carbs (2759 - 640 - 576) / 4
    assert result.kcal == 2759
    assert result.protein == 160
    assert result.fats == 64
    assert result.carbs == 386
    assert result.bmr == pytest.approx(1780)
    assert result.tdee == pytest.approx(2759)
    assert result.warnings == []


def test_fat_loss_female_sedentary():
    profile = make_profile(age=25, sex='female', height=165, weight=60,
                           activity_level='sedentary', goal='fat_loss')
    result = derive_targets(profile)

    # BMR 1345.25 x 1.2 = 1614.3; -500 -> 1114.3
    assert result.kcal == 1114
    assert result.protein == 120
    assert result.fats == 48
    assert result.carbs == 51


def test_muscle_gain_rounds_half_up():
    result = derive_targets(make_profile(activity_level='very_active', goal='muscle_gain'))

    # 1780 x 1.9 + 300 = 3682; carbs (3682 - 640 - 576) / 4 = 616.5
    assert result.kcal == 3682
    assert result.carbs == 617


def test_negative_carbs_floored_with_warning(caplog):
    profile = make_profile(age=80, sex='female', height=150, weight=150,
                           activity_level='sedentary', goal='fat_loss')
    with caplog.at_level('WARNING'):
        result = derive_targets(profile)

    assert result.carbs == 0
    assert result.protein == 300
    assert result.fats == 120
    assert len(result.warnings) == 1
    assert 'floored at 0 g' in result.warnings[0]
    assert 'floored at 0 g' in caplog.text
    assert result.to_dict()['warnings'] == result.warnings


def test_derivation_converts_to_target():
    target = derive_targets(make_profile()).to_target()
    assert isinstance(target, MacroTarget)
    assert (target.kcal, target.protein, target.carbs, target.fats) == (2759, 160, 386, 64)


def test_to_dict_shape():
    data = derive_targets(make_profile()).to_dict()
    assert data == {'calories': 2759, 'protein': 160, 'carbs': 386, 'fats': 64}
