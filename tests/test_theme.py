import pytest

from utils.theme import (
    AVAILABLE_FONTS,
    THEME_PRESETS,
    generate_font_url,
    generate_theme_css,
    get_theme_colors,
    is_valid_hex_color,
    validate_theme,
)


class TestValidateTheme:
    def test_preset_and_font(self):
        assert validate_theme({"preset": "sepia", "fontFamily": "Lora"}) == []

    def test_unknown_preset(self):
        errors = validate_theme({"preset": "neon"})
        assert len(errors) == 1
        assert errors[0].startswith("theme.preset must be one of")

    def test_custom_needs_colors(self):
        assert validate_theme({"preset": "custom"}) == [
            "theme.customColors is required for the custom preset",
        ]

    def test_custom_colors_checked(self):
        errors = validate_theme({
            "preset": "custom",
            "customColors": {"primary": "#123456", "secondary": "white", "accent": "#abcdef", "background": "#000"},
        })
        assert errors == [
            "theme.customColors.secondary must be a #RRGGBB color",
            "theme.customColors.background must be a #RRGGBB color",
        ]

    def test_not_an_object(self):
        assert validate_theme("dark") == ["theme must be an object"]


@pytest.mark.parametrize("color, ok", [
    ("#a1B2c3", True),
    ("#fff", False),
    ("123456", False),
    (None, False),
])
def test_hex_color(color, ok):
    assert is_valid_hex_color(color) is ok


class TestCss:
    def test_font_url_lists_weights(self):
        assert generate_font_url("DM Sans") == (
            "https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;700&display=block"
        )

    def test_unknown_font_falls_back(self):
        assert "EB+Garamond" in generate_font_url("Papyrus")

    def test_custom_colors_win(self):
        colors = {"primary": "#111111", "secondary": "#222222", "accent": "#333333", "background": "#444444"}
        settings = {"theme": {"preset": "custom", "customColors": colors}}
        assert get_theme_colors(settings) == colors

    def test_gradient_variable(self):
        css = generate_theme_css({"theme": {"preset": "gradient", "fontFamily": "Inter"}})
        assert "--background-gradient: linear-gradient(" in css
        assert css.startswith("@import url('https://fonts.googleapis.com/")

    def test_catalogue_sizes(self):
        assert len(AVAILABLE_FONTS) == 15
        assert set(THEME_PRESETS) == {"minimalist", "sepia", "dark", "gradient", "custom"}
