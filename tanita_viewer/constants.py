"""
Constants for the Tanita Viewer.

Centralises the device folder layout, file-name patterns, the table
column definitions, colour palettes, and matplotlib style dicts.
"""

# ── Device folder layout ─────────────────────────────────────────────────
PROFILE_FOLDER_NAME = "SYSTEM"
DATA_FOLDER_NAME = "DATA"
PROFILE_FILE_PREFIX = "PROF"
DATA_FILE_PREFIX = "DATA"
CSV_SUFFIX = ".CSV"

# ── Record line format ───────────────────────────────────────────────────
TOKEN_SEPARATOR = ","
DATE_SEPARATOR = "/"
TIME_SEPARATOR = ":"

# Largest values of the device's unsigned integer fields
U8_MAX = 255
U16_MAX = 65535

# ── Gender codes ─────────────────────────────────────────────────────────
GENDER_CODE_MALE = 1
GENDER_CODE_FEMALE = 2

# Rendered in place of an absent optional measurement value
MISSING_VALUE_TEXT = "-"

# ── Measurement table columns ────────────────────────────────────────────
# (header, Measurement attribute).  ``date_time`` is rendered specially.
MEASUREMENT_COLUMNS = [
    ("Date and time", "date_time"),
    ("Age", "age_years"),
    ("Activity level", "activity_level_code"),
    ("Body type", "body_type_code"),
    ("Weight (kg)", "weight_kg"),
    ("BMI", "bmi"),
    ("Fat (%)", "fat_percent"),
    ("Fat (%) trunk", "fat_trunk_pct"),
    ("Fat (%) r arm", "fat_right_arm_pct"),
    ("Fat (%) l arm", "fat_left_arm_pct"),
    ("Fat (%) r leg", "fat_right_leg_pct"),
    ("Fat (%) l leg", "fat_left_leg_pct"),
    ("Muscle (%)", "muscle_percent"),
    ("Muscle (%) trunk", "muscle_trunk_pct"),
    ("Muscle (%) r arm", "muscle_right_arm_pct"),
    ("Muscle (%) l arm", "muscle_left_arm_pct"),
    ("Muscle (%) r leg", "muscle_right_leg_pct"),
    ("Muscle (%) l leg", "muscle_left_leg_pct"),
    ("Bone (kg)", "bone_kg"),
    ("Water (%)", "water_percent"),
    ("Visceral fat rating", "visceral_fat_rating"),
    ("Metabolic age", "metabolic_age_years"),
    ("Daily calorie intake (kcal)", "daily_calorie_intake_kcal"),
]

# ── Profile header fields ────────────────────────────────────────────────
PROFILE_FIELDS = [
    "Birth date",
    "Gender",
    "Height (cm)",
    "Activity level",
    "Body type",
]

# ── Font family fallback chain ───────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark Catppuccin-inspired GUI colour palette ──────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'surface0':     '#313244',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'overlay0':     '#6c7086',
    'selection':    '#45475a',
}

# ── Trend chart series colours ───────────────────────────────────────────
TREND_PALETTE = {
    'weight':  '#4472C4',
    'fat':     '#ED7D31',
    'muscle':  '#70AD47',
    'water':   '#5B9BD5',
}

# ── Export / light-theme colours (for for_export branches) ───────────────
EXPORT_BG_COLOR = '#ffffff'

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 300
EXPORT_WIDTH_INCHES = 8.0
CLIPBOARD_DPI = 150
ALL_USERS_WORKBOOK_NAME = "Tanita_measurements.xlsx"

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   7,
    'grid.color':        DARK_COLORS['border'],
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ──────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   7,
    'grid.color':        '#cccccc',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
