"""Artistic style presets applied to image prompts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class StyleTag(str, Enum):
    """Closed set of artistic styles offered for image prompts."""

    NONE = "none"
    PHOTOREALISTIC = "photorealistic"
    CINEMATIC = "cinematic"
    ANIME = "anime"
    WATERCOLOR = "watercolor"
    OIL_PAINTING = "oil-painting"
    CYBERPUNK = "cyberpunk"
    STEAMPUNK = "steampunk"
    FANTASY_ART = "fantasy-art"
    ABSTRACT = "abstract"
    MINIMALIST = "minimalist"
    VINTAGE_PHOTO = "vintage-photo"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["StyleTag"]:
        """Return the matching tag, or None for unknown values."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class StylePreset:
    """Natural-language wrapper for one style; ``{prompt}`` marks the subject."""

    tag: StyleTag
    template: str

    def render(self, prompt: str) -> str:
        return self.template.format(prompt=prompt)


DEFAULT_PRESETS: tuple[StylePreset, ...] = (
    StylePreset(
        StyleTag.PHOTOREALISTIC,
        "Ultra-photorealistic, hyper-detailed photograph of {prompt}, 8K, professional photography.",
    ),
    StylePreset(
        StyleTag.CINEMATIC,
        "Cinematic film still of {prompt}, dramatic lighting, epic composition, "
        "shallow depth of field, anamorphic lens flare.",
    ),
    StylePreset(
        StyleTag.ANIME,
        "{prompt}, in the style of a modern fantasy anime movie, vibrant colors, "
        "detailed characters, beautiful scenery, trending on Pixiv.",
    ),
    StylePreset(
        StyleTag.WATERCOLOR,
        "A beautiful and delicate watercolor painting of {prompt}, soft edges, "
        "wet-on-wet technique, vibrant washes of color on textured paper.",
    ),
    StylePreset(
        StyleTag.OIL_PAINTING,
        "An epic oil painting of {prompt}, visible expressive brushstrokes, "
        "impasto texture, style of the old masters.",
    ),
    StylePreset(
        StyleTag.CYBERPUNK,
        "Cyberpunk concept art of {prompt}, neon-drenched cityscape, dystopian "
        "atmosphere, high-tech cybernetics, Blade Runner aesthetic.",
    ),
    StylePreset(
        StyleTag.STEAMPUNK,
        "Steampunk illustration of {prompt}, intricate gears and clockwork, "
        "polished brass and copper, Victorian-era technology.",
    ),
    StylePreset(
        StyleTag.FANTASY_ART,
        "Epic high-fantasy digital painting of {prompt}, mystical atmosphere, "
        "glowing magic, Lord of the Rings inspired, trending on ArtStation.",
    ),
    StylePreset(
        StyleTag.ABSTRACT,
        'An abstract expressionist interpretation of "{prompt}", dynamic shapes, '
        "bold colors, non-representational, evocative and emotional.",
    ),
    StylePreset(
        StyleTag.MINIMALIST,
        "Minimalist vector art of {prompt}, clean lines, simple shapes, "
        "limited color palette, flat design.",
    ),
    StylePreset(
        StyleTag.VINTAGE_PHOTO,
        "A gritty, grainy, sepia-toned vintage photograph of {prompt} from the 1920s, "
        "scratches and film grain, authentic period look.",
    ),
)


class StylePresetRegistry:
    """In-memory registry of style presets keyed by tag value."""

    def __init__(self, presets: Optional[tuple[StylePreset, ...]] = None) -> None:
        self._presets: Dict[str, StylePreset] = {}
        for preset in presets if presets is not None else DEFAULT_PRESETS:
            self.add(preset)

    def add(self, preset: StylePreset) -> None:
        """Register a style preset, replacing any with the same tag."""
        self._presets[preset.tag.value] = preset

    def list_presets(self) -> List[StylePreset]:
        """Return all registered presets."""
        return list(self._presets.values())

    def get(self, tag: str) -> Optional[StylePreset]:
        """Retrieve a preset by tag value, or None when unregistered."""
        return self._presets.get(tag)


_DEFAULT_REGISTRY = StylePresetRegistry()


def _clean_prompt(text: str) -> str:
    cleaned = text.strip()
    if cleaned.endswith((".", ",")):
        cleaned = cleaned[:-1]
    return cleaned


def apply_style(
    text: str,
    style: str,
    registry: Optional[StylePresetRegistry] = None,
) -> str:
    """Decorate an image prompt with the phrase for ``style``.

    ``none`` and empty text are returned unchanged. One trailing period or
    comma is dropped before the prompt is embedded. Tags without a preset
    fall back to ``"<prompt>, in the style of <tag words>."``.
    """
    style_value = style.value if isinstance(style, StyleTag) else (style or "")
    if not text or not style_value or style_value == StyleTag.NONE.value:
        return text

    cleaned = _clean_prompt(text)
    preset = (registry or _DEFAULT_REGISTRY).get(style_value)
    if preset is not None:
        return preset.render(cleaned)
    return f"{cleaned}, in the style of {style_value.replace('-', ' ')}."


def style_choices() -> list[tuple[str, str]]:
    """Return (label, value) pairs for a style dropdown, ``None`` first."""
    return [(tag.label, tag.value) for tag in StyleTag]
