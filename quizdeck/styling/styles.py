"""Centralized Qt stylesheets for the application."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QComboBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
        """

    @staticmethod
    def get_option_button_style(theme: Theme = Theme.LIGHT, *, correct: bool | None = None) -> str:
        if correct is None:
            return ""
        color = ColorPalette.ANSWER_CORRECT if correct else ColorPalette.ANSWER_WRONG
        return (
            f"background-color: {color.get(theme)};"
            f" color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};"
        )

    @staticmethod
    def get_feedback_style(theme: Theme = Theme.LIGHT, *, correct: bool) -> str:
        color = ColorPalette.ANSWER_CORRECT if correct else ColorPalette.ANSWER_WRONG
        return f"color: {color.get(theme)}; font-weight: bold;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
