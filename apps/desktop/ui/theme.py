"""
Design tokens and QSS generation for the smoke alert window.
Provides light/dark palettes plus the safe and warning status backgrounds.
"""

from __future__ import annotations

from typing import Literal

# Design tokens: spacing (8px grid)
SPACING = {
    "xs": "4px",
    "sm": "8px",
    "md": "12px",
    "lg": "16px",
    "xl": "24px",
}

# Design tokens: typography
TYPOGRAPHY = {
    "font_family": "Segoe UI, -apple-system, BlinkMacSystemFont, sans-serif",
    "font_size_sm": "13px",
    "font_size_base": "15px",
    "font_size_lg": "17px",
    "font_size_2xl": "28px",
    "font_size_status": "34px",
    "font_weight_normal": "400",
    "font_weight_medium": "500",
    "font_weight_semibold": "600",
    "font_weight_bold": "700",
}

COLOR_ACCENTS = {
    "blue": "#007AFF",
    "red": "#FF3B30",
    "orange": "#FF9500",
    "green": "#34C759",
    "gray": "#8E8E93",
}

# Status panel backgrounds; the warning pair alternates while smoke is detected
STATUS_COLORS = {
    "safe": "#2E7D32",
    "warning": "#C62828",
    "warning_alt": "#FF6F00",
    "text": "#FFFFFF",
}

LIGHT_COLORS = {
    "background": "#F5F5F7",
    "surface": "#FFFFFF",
    "surface_secondary": "#F9F9F9",
    "text_primary": "#000000",
    "text_secondary": "#6E6E73",
    "text_tertiary": "#8E8E93",
    "border": "#E5E5EA",
    "border_light": "#F2F2F7",
}

DARK_COLORS = {
    "background": "#000000",
    "surface": "#1C1C1E",
    "surface_secondary": "#2C2C2E",
    "text_primary": "#FFFFFF",
    "text_secondary": "#98989D",
    "text_tertiary": "#636366",
    "border": "#38383A",
    "border_light": "#2C2C2E",
}

ThemeMode = Literal["light", "dark"]


class Theme:
    """Theme manager providing QSS stylesheets for light and dark modes."""

    def __init__(self, mode: ThemeMode = "light"):
        self.mode = mode
        self.colors = LIGHT_COLORS if mode == "light" else DARK_COLORS

    def get_stylesheet(self) -> str:
        """Generate complete QSS stylesheet for current theme mode."""
        colors = self.colors
        font_family = TYPOGRAPHY["font_family"]

        return f"""
        QMainWindow {{
            background-color: {colors["background"]};
            color: {colors["text_primary"]};
        }}

        QLabel#TitleLabel {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_2xl"]};
            font-weight: {TYPOGRAPHY["font_weight_bold"]};
            color: {colors["text_primary"]};
        }}

        QLabel#SubtitleLabel, QLabel#HintLabel {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_sm"]};
            color: {colors["text_secondary"]};
        }}

        QLabel#SectionLabel {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_lg"]};
            font-weight: {TYPOGRAPHY["font_weight_semibold"]};
            color: {colors["text_primary"]};
        }}

        QFrame#Card {{
            background-color: {colors["surface"]};
            border-radius: 16px;
            border: 1px solid {colors["border"]};
        }}

        /* Status panel */
        QFrame#StatusPanelSafe {{
            background-color: {STATUS_COLORS["safe"]};
            border-radius: 20px;
        }}

        QFrame#StatusPanelWarning {{
            background-color: {STATUS_COLORS["warning"]};
            border-radius: 20px;
        }}

        QFrame#StatusPanelWarningAlt {{
            background-color: {STATUS_COLORS["warning_alt"]};
            border-radius: 20px;
        }}

        QLabel#StatusText {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_status"]};
            font-weight: {TYPOGRAPHY["font_weight_bold"]};
            color: {STATUS_COLORS["text"]};
            background: transparent;
        }}

        QLabel#StatusSubtitle, QLabel#LastUpdatedText {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_base"]};
            color: {STATUS_COLORS["text"]};
            background: transparent;
        }}

        QLabel#StatusIcon {{
            background: transparent;
        }}

        QPushButton#PrimaryButton {{
            background-color: {COLOR_ACCENTS["blue"]};
            color: #FFFFFF;
            border: none;
            border-radius: 20px;
            padding: {SPACING["sm"]} {SPACING["xl"]};
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_base"]};
            font-weight: {TYPOGRAPHY["font_weight_semibold"]};
            min-height: 36px;
        }}

        QPushButton#PrimaryButton:hover {{
            background-color: {self._adjust_brightness(COLOR_ACCENTS["blue"], -10)};
        }}

        QPushButton#PrimaryButton:disabled {{
            background-color: {colors["border"]};
            color: {colors["text_tertiary"]};
        }}

        QPushButton#SecondaryButton {{
            background-color: {colors["surface_secondary"]};
            color: {COLOR_ACCENTS["blue"]};
            border: 1px solid {colors["border"]};
            border-radius: 20px;
            padding: {SPACING["sm"]} {SPACING["xl"]};
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_base"]};
            font-weight: {TYPOGRAPHY["font_weight_medium"]};
            min-height: 36px;
        }}

        QPushButton#SecondaryButton:hover {{
            background-color: {colors["border_light"]};
        }}

        QPushButton#SecondaryButton:disabled {{
            color: {colors["text_tertiary"]};
        }}

        QListWidget {{
            background-color: transparent;
            border: none;
            outline: none;
        }}

        QListWidget::item {{
            color: {colors["text_primary"]};
            padding: {SPACING["xs"]} {SPACING["md"]};
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_sm"]};
        }}

        QCheckBox {{
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_base"]};
            color: {colors["text_primary"]};
            spacing: {SPACING["sm"]};
        }}

        QLabel#StatusPill {{
            background-color: {colors["surface_secondary"]};
            color: {colors["text_secondary"]};
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
            font-family: {font_family};
            font-size: {TYPOGRAPHY["font_size_sm"]};
            font-weight: {TYPOGRAPHY["font_weight_medium"]};
        }}

        QLabel#StatusPillActive {{
            background-color: {self._rgba(COLOR_ACCENTS["green"], 0.15)};
            color: {COLOR_ACCENTS["green"]};
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
        }}

        QLabel#StatusPillError {{
            background-color: {self._rgba(COLOR_ACCENTS["red"], 0.15)};
            color: {COLOR_ACCENTS["red"]};
            border-radius: 12px;
            padding: {SPACING["xs"]} {SPACING["md"]};
        }}
        """

    def _adjust_brightness(self, hex_color: str, percent: int) -> str:
        """Adjust color brightness (simple approximation)."""
        hex_color = hex_color.lstrip("#")
        r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)

        factor = 1 + (percent / 100)
        r = max(0, min(255, int(r * factor)))
        g = max(0, min(255, int(g * factor)))
        b = max(0, min(255, int(b * factor)))

        return f"#{r:02x}{g:02x}{b:02x}"

    def _rgba(self, hex_color: str, alpha: float) -> str:
        hex_color = hex_color.lstrip("#")
        r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
        return f"rgba({r}, {g}, {b}, {alpha})"

    def toggle_mode(self) -> None:
        self.mode = "dark" if self.mode == "light" else "light"
        self.colors = LIGHT_COLORS if self.mode == "light" else DARK_COLORS
