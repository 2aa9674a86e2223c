"""
Nutrition Constants

Activity multipliers, goal adjustments and energy densities used when
deriving daily macro targets (Mifflin-St Jeor based).
"""

# Multiplier applied to BMR to get maintenance calories
ACTIVITY_FACTORS = {
    'sedentary': 1.2,
    'light': 1.375,
    'moderate': 1.55,
    'active': 1.725,
    'very_active': 1.9,
}

# Flat kcal adjustment per goal
GOAL_ADJUSTMENTS = {
    'fat_loss': -500,
    'maintenance': 0,
    'muscle_gain': 300,
}

# Energy per gram of macro
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

# Bodyweight-based macro targets (grams per kg)
PROTEIN_G_PER_KG = 2.0
FAT_G_PER_KG = 0.8

# Mifflin-St Jeor sex offsets
BMR_SEX_OFFSET = {
    'male': 5,
    'female': -161,
}
