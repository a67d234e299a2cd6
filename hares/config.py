"""
Configuration module: paths, dataset vocabulary, and global settings.
"""

from dataclasses import dataclass, field
from pathlib import Path

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

# Detect PROJECT_ROOT: either cwd or parent if in notebooks/scripts
def get_project_root():
    """Auto-detect project root by checking for data/ and hares/ folders."""
    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "hares").exists():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "hares").exists():
        return cwd.parent

    # Fallback: the checkout this module lives in
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
PROCESSED_DIR = DATA_DIR / "processed"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
TABLES_DIR = OUTPUTS_DIR / "tables"
FIGURES_DIR = OUTPUTS_DIR / "figures"

# Input files (raw data)
INPUT_FILES = {
    "hares": ORIGINAL_DIR / "bonanza_hares.csv",
}

# Output files
OUTPUT_FILES = {
    "juveniles": PROCESSED_DIR / "juvenile_hares.csv",
    "parse_errors": PROCESSED_DIR / "parse_errors.csv",
    "annual_counts": TABLES_DIR / "annual_juvenile_counts.csv",
    "weight_sex_site": TABLES_DIR / "weight_by_sex_site.csv",
    "weight_sex": TABLES_DIR / "weight_by_sex.csv",
    "weight_comparison": TABLES_DIR / "weight_comparison.csv",
    "regression": TABLES_DIR / "weight_hindfoot_regression.csv",
    "report": OUTPUTS_DIR / "report.md",
}

# ============================================================================
# DATASET VOCABULARY
# ============================================================================

# Columns that must be present in the raw header
REQUIRED_COLUMNS = ("date", "grid", "age", "sex", "hindft", "weight")

# Capture dates are month/day/year, e.g. 11/26/1998
DATE_FORMAT = "%m/%d/%Y"

JUVENILE_MARKER = "j"

SEX_LABELS = {"m": "Male", "f": "Female"}
SEX_UNKNOWN = "unknown"
SEX_ORDER = ("Female", "Male", SEX_UNKNOWN)

# Trapping grids (sites)
SITE_LABELS = {
    "bonrip": "Bonanza Riparian",
    "bonmat": "Bonanza Mature",
    "bonbs": "Lowland Black Spruce",
}
GRID_ORDER = ("bonrip", "bonmat", "bonbs")
SITE_ORDER = tuple(SITE_LABELS[g] for g in GRID_ORDER)

# ============================================================================
# ANALYSIS & FIGURES
# ============================================================================

MIN_COMPARISON_SAMPLE = 2   # per group, variance undefined below
MIN_REGRESSION_PAIRS = 3    # residual variance undefined below

FIGURE_DPI = 300
SEX_PALETTE = {"Female": "#8E44AD", "Male": "#16A085", SEX_UNKNOWN: "#7F8C8D"}

# ============================================================================
# VERBOSITY
# ============================================================================

VERBOSE = True  # print stage log lines in scripts


@dataclass(frozen=True)
class Settings:
    """Domain constants passed explicitly through the pipeline stages."""

    required_columns: tuple = REQUIRED_COLUMNS
    date_format: str = DATE_FORMAT
    juvenile_marker: str = JUVENILE_MARKER
    sex_labels: dict = field(default_factory=lambda: dict(SEX_LABELS))
    sex_unknown: str = SEX_UNKNOWN
    site_labels: dict = field(default_factory=lambda: dict(SITE_LABELS))
    category_orders: dict = field(default_factory=lambda: {
        "sex": SEX_ORDER,
        "site": SITE_ORDER,
        "grid": GRID_ORDER,
    })


DEFAULT_SETTINGS = Settings()


def ensure_output_dirs():
    """Create processed/output folders if missing."""
    for path in (PROCESSED_DIR, TABLES_DIR, FIGURES_DIR):
        path.mkdir(parents=True, exist_ok=True)


def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("PIPELINE CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📂 DATA DIR: {DATA_DIR}")
    print(f"📂 INPUT FILE: {INPUT_FILES['hares']}")
    print(f"📂 OUTPUTS DIR: {OUTPUTS_DIR}")
    print(f"\n🐇 Dataset vocabulary:")
    print(f"   Juvenile marker: '{JUVENILE_MARKER}'")
    print(f"   Sex labels: {SEX_LABELS} (other → '{SEX_UNKNOWN}')")
    print(f"   Sites: {', '.join(SITE_ORDER)}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")
