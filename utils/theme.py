"""
Theme presets, font catalogue and CSS variable generation for the public site.
"""
import re

# name -> (type, weights, Google Fonts family parameter)
AVAILABLE_FONTS = {
    # serif
    "EB Garamond": ("serif", [400, 500, 600, 700], "EB+Garamond"),
    "Playfair Display": ("serif", [400, 500, 600, 700, 800], "Playfair+Display"),
    "Cormorant Garamond": ("serif", [300, 400, 500, 600, 700], "Cormorant+Garamond"),
    "Merriweather": ("serif", [300, 400, 700, 900], "Merriweather"),
    "Lora": ("serif", [400, 500, 600, 700], "Lora"),
    "Crimson Text": ("serif", [400, 600, 700], "Crimson+Text"),
    # sans
    "Inter": ("sans", [300, 400, 500, 600, 700], "Inter"),
    "DM Sans": ("sans", [400, 500, 700], "DM+Sans"),
    "Work Sans": ("sans", [300, 400, 500, 600, 700], "Work+Sans"),
    "Poppins": ("sans", [300, 400, 500, 600, 700], "Poppins"),
    "Montserrat": ("sans", [300, 400, 500, 600, 700, 800], "Montserrat"),
    "Raleway": ("sans", [300, 400, 500, 600, 700], "Raleway"),
    "Outfit": ("sans", [300, 400, 500, 600, 700], "Outfit"),
    "Space Grotesk": ("sans", [300, 400, 500, 600, 700], "Space+Grotesk"),
    "Unbounded": ("sans", [400, 500, 600, 700], "Unbounded"),
}

DEFAULT_FONT = "EB Garamond"
DEFAULT_PRESET = "minimalist"

COLOR_KEYS = ("primary", "secondary", "accent", "background")

THEME_PRESETS = {
    "minimalist": {
        "primary": "#000000",
        "secondary": "#ffffff",
        "accent": "#111827",
        "background": "#ffffff",
    },
    "sepia": {
        "primary": "#3d2817",
        "secondary": "#f5e6d3",
        "accent": "#8b6f47",
        "background": "#faf8f3",
    },
    "dark": {
        "primary": "#ffffff",
        "secondary": "#0a0a0a",
        "accent": "#d4d4d4",
        "background": "#0a0a0a",
    },
    "gradient": {
        "primary": "#1a1a1a",
        "secondary": "#ffffff",
        "accent": "#4a5568",
        "background": "#f8fafc",
        "gradient": "linear-gradient(135deg, #f8fafc 0%, #e2e8f0 100%)",
    },
    # colors come from customColors; these are the fallback
    "custom": {
        "primary": "#000000",
        "secondary": "#ffffff",
        "accent": "#111827",
        "background": "#ffffff",
    },
}

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")

_SERIF_FALLBACK = "-apple-system, BlinkMacSystemFont, Georgia, serif"
_SANS_FALLBACK = '-apple-system, BlinkMacSystemFont, "Helvetica Neue", Arial, sans-serif'


def is_valid_preset(preset) -> bool:
    return preset in THEME_PRESETS


def is_valid_font(font_name) -> bool:
    return font_name in AVAILABLE_FONTS


def is_valid_hex_color(color) -> bool:
    return isinstance(color, str) and bool(_HEX_COLOR.match(color))


def validate_theme(theme) -> list:
    """Returns a list of error strings; empty when the theme is acceptable."""
    if not isinstance(theme, dict):
        return ["theme must be an object"]

    errors = []
    preset = theme.get("preset", DEFAULT_PRESET)
    if not is_valid_preset(preset):
        errors.append("theme.preset must be one of: " + ", ".join(THEME_PRESETS))

    font = theme.get("fontFamily", DEFAULT_FONT)
    if not is_valid_font(font):
        errors.append(f"Unknown font: {font}")

    custom = theme.get("customColors")
    if preset == "custom" and custom is None:
        errors.append("theme.customColors is required for the custom preset")
    if custom is not None:
        if not isinstance(custom, dict):
            errors.append("theme.customColors must be an object")
        else:
            for key in COLOR_KEYS:
                if not is_valid_hex_color(custom.get(key)):
                    errors.append(f"theme.customColors.{key} must be a #RRGGBB color")

    return errors


def generate_font_url(font_name) -> str:
    if font_name not in AVAILABLE_FONTS:
        font_name = DEFAULT_FONT
    _, weights, family = AVAILABLE_FONTS[font_name]
    joined = ";".join(str(w) for w in weights)
    return f"https://fonts.googleapis.com/css2?family={family}:wght@{joined}&display=block"


def get_theme_colors(settings=None) -> dict:
    theme = (settings or {}).get("theme")
    if not theme:
        return THEME_PRESETS[DEFAULT_PRESET]

    preset = theme.get("preset")
    custom = theme.get("customColors")
    if preset == "custom" and custom:
        return {key: custom[key] for key in COLOR_KEYS}

    return THEME_PRESETS.get(preset, THEME_PRESETS[DEFAULT_PRESET])


def generate_theme_css(settings=None) -> str:
    colors = get_theme_colors(settings)
    theme = (settings or {}).get("theme") or {}
    font_name = theme.get("fontFamily") or DEFAULT_FONT

    font = AVAILABLE_FONTS.get(font_name)
    fallback = _SERIF_FALLBACK if font and font[0] == "serif" else _SANS_FALLBACK

    lines = [
        f"@import url('{generate_font_url(font_name)}');",
        ":root {",
        f"  --color-primary: {colors['primary']};",
        f"  --color-secondary: {colors['secondary']};",
        f"  --color-accent: {colors['accent']};",
        f"  --color-background: {colors['background']};",
        f"  --font-family: '{font_name}', {fallback};",
    ]
    if colors.get("gradient"):
        lines.append(f"  --background-gradient: {colors['gradient']};")
    lines.append("}")
    return "\n".join(lines) + "\n"
