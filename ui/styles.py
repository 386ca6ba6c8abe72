from rich.style import Style
from rich.text import Text

from models import Level

BRAND_BLUE = "#3B82F6"
BRAND_YELLOW = "#F59E0B"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
WARNING_ORANGE = "#E67E22"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

LEVEL_COLORS: dict[Level, str] = {
    Level.CP: "#F472B6",
    Level.CE1: "#34D399",
    Level.CE2: "#60A5FA",
}


def get_level_style(level: Level | str) -> Style:
    """Get the badge color for a level."""
    return Style(color=LEVEL_COLORS.get(Level(level), TEXT_WHITE), bold=True)


def create_status_label(errors: int, warnings: int) -> Text:
    """Create the ✓ / ⚠ / ✗ marker for one validated file."""
    if errors:
        return Text("✗", Style(color=ERROR_RED, bold=True))
    if warnings:
        return Text("⚠", Style(color=WARNING_ORANGE, bold=True))
    return Text("✓", Style(color=SUCCESS_GREEN, bold=True))
