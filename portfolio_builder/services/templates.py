"""Portfolio template presets.

Templates are a closed set. Every ``TemplateKind`` maps to exactly one
``TemplatePreset`` holding the defaults applied when a user picks it and the
values the public page falls back to.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
import copy
import logging

logger = logging.getLogger(__name__)


class TemplateKind(str, Enum):
    MODERN = "modern"
    MINIMAL = "minimal"
    PROFESSIONAL = "professional"
    ELEGANT = "elegant"
    DARK = "dark"
    FUTURISTIC = "futuristic"


DEFAULT_TEMPLATE = TemplateKind.MODERN


@dataclass(frozen=True)
class TemplatePreset:
    kind: TemplateKind
    name: str
    description: str
    hero: Dict[str, Any] = field(default_factory=dict)
    customization: Dict[str, Any] = field(default_factory=dict)


def _gradient_hero(title, subtitle, start, end, cta_text):
    return {
        "title": title,
        "subtitle": subtitle,
        "background": {
            "type": "gradient",
            "gradient": {"from": start, "to": end, "direction": "to bottom"},
        },
        "ctaText": cta_text,
    }


def _color_hero(title, subtitle, color, cta_text):
    return {
        "title": title,
        "subtitle": subtitle,
        "background": {"type": "color", "color": color},
        "ctaText": cta_text,
    }


def _customization(primary, secondary, font, layout, spacing):
    return {
        "primaryColor": primary,
        "secondaryColor": secondary,
        "fontFamily": font,
        "layout": layout,
        "spacing": spacing,
    }


TEMPLATES: Dict[TemplateKind, TemplatePreset] = {
    TemplateKind.MODERN: TemplatePreset(
        kind=TemplateKind.MODERN,
        name="Creative",
        description="Clean, bold header, grid projects, and strong call-to-action.",
        hero=_gradient_hero("Welcome to My Portfolio", "Full Stack Developer", "#4F3B78", "#6B4F9E", "View My Work"),
        customization=_customization("#4F3B78", "#6B4F9E", "Inter", "modern", "comfortable"),
    ),
    TemplateKind.MINIMAL: TemplatePreset(
        kind=TemplateKind.MINIMAL,
        name="Minimal",
        description="Simple, lots of whitespace, left-aligned text, and soft cards.",
        hero=_color_hero("Hello, I'm a Developer", "Building digital experiences", "#ffffff", "Explore Projects"),
        customization=_customization("#2D3748", "#4A5568", "Inter", "minimal", "compact"),
    ),
    TemplateKind.PROFESSIONAL: TemplatePreset(
        kind=TemplateKind.PROFESSIONAL,
        name="Professional",
        description="Sidebar profile, timeline experience, and a formal palette.",
        hero=_color_hero("Professional Portfolio", "Showcasing My Expertise", "#e5e7eb", "Contact Me"),
        customization=_customization("#2563eb", "#1e293b", "Roboto", "professional", "comfortable"),
    ),
    TemplateKind.ELEGANT: TemplatePreset(
        kind=TemplateKind.ELEGANT,
        name="Elegant",
        description="Serif typography, soft gradients, and refined spacing.",
        hero=_gradient_hero("Elegant Portfolio", "Refined. Polished. Professional.", "#a18cd1", "#fbc2eb", "Discover More"),
        customization=_customization("#a18cd1", "#fbc2eb", "Georgia", "elegant", "comfortable"),
    ),
    TemplateKind.DARK: TemplatePreset(
        kind=TemplateKind.DARK,
        name="Dark",
        description="Dark background, high contrast text, and compact cards.",
        hero=_color_hero("Dark Portfolio", "Experience. Knowledge. Trust.", "#232b36", "Browse Portfolio"),
        customization=_customization("#fff", "#a0aec0", "Inter", "dark", "compact"),
    ),
    TemplateKind.FUTURISTIC: TemplatePreset(
        kind=TemplateKind.FUTURISTIC,
        name="Futuristic",
        description="Pastel neon accents, rounded panels, and playful motion.",
        hero=_gradient_hero("Welcome to the Future", "Innovative Developer & Creator", "#FFC2D1", "#FFC2D1", "Explore Projects"),
        customization=_customization("#FFC2D1", "#FFC2D1", "Inter", "futuristic", "comfortable"),
    ),
}


def resolve_template(value: Optional[str]) -> TemplateKind:
    """Map a stored template value to its kind.

    Unknown or empty values resolve to the default template.
    """
    if not value:
        return DEFAULT_TEMPLATE
    try:
        return TemplateKind(value)
    except ValueError:
        logger.warning("Unknown template %r; falling back to %s", value, DEFAULT_TEMPLATE.value)
        return DEFAULT_TEMPLATE


def get_preset(kind: TemplateKind) -> TemplatePreset:
    return TEMPLATES[kind]


def deep_merge(base: Dict[str, Any], overlay: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively overlay ``overlay`` onto a copy of ``base``.

    ``None`` values in the overlay do not replace values from the base.
    """
    merged = copy.deepcopy(base)
    for key, value in (overlay or {}).items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def apply_preset(kind: TemplateKind, hero: Optional[Dict[str, Any]], customization: Optional[Dict[str, Any]]):
    """Return (hero, customization) with the preset's defaults written over them."""
    preset = get_preset(kind)
    return deep_merge(hero or {}, preset.hero), deep_merge(customization or {}, preset.customization)


def build_presentation(template: Optional[str], hero: Optional[Dict[str, Any]], customization: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Values a renderer needs: preset defaults overlaid by the portfolio's own."""
    kind = resolve_template(template)
    preset = get_preset(kind)
    return {
        "template": kind.value,
        "name": preset.name,
        "hero": deep_merge(preset.hero, hero),
        "customization": deep_merge(preset.customization, customization),
    }
