"""Built-in prompt templates and example prompts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

PLACEHOLDER = "{userInput}"
ALL_CATEGORIES = "All"


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    """A fixed frame around the user's idea; ``template`` holds one placeholder."""

    id: str
    name: str
    description: str
    template: str
    category: str
    tags: tuple[str, ...] = ()
    is_default: bool = False

    def __post_init__(self) -> None:
        count = self.template.count(PLACEHOLDER)
        if count != 1:
            raise ValueError(
                f"Template '{self.id}' must contain {PLACEHOLDER} exactly once, found {count}"
            )

    def fill(self, user_input: str) -> str:
        return fill_template(self.template, user_input)


@dataclass(frozen=True, slots=True)
class PresetPrompt:
    """Ready-made image prompt offered in the direct image creator."""

    name: str
    prompt: str


def fill_template(template: str, user_input: str) -> str:
    """Replace the first placeholder with ``user_input`` verbatim."""
    return template.replace(PLACEHOLDER, user_input, 1)


_EXPERT_ENHANCER = """You are a master AI prompt architect. Your task is to execute a sophisticated, multi-step "Chain of Thought" process to transform a user's simple idea into a world-class, professional-grade prompt for a generative AI.

**The Process:**

**Step 1: Idea Deconstruction and Expert Council Formation**
First, deeply analyze the user's core concept. Based on this analysis, you will form a virtual "Council of Experts" composed of 3 to 5 distinct, relevant personas. These personas should be highly specific and tailored to the user's idea. For example, if the idea is "a spaceship," the council could include a "Veteran Sci-Fi Concept Artist," a "NASA Propulsion Engineer," and a "Cinematic VFX Supervisor."

**Step 2: Simulated Expert Roundtable**
Next, you will simulate a creative roundtable discussion. Each expert on the council will provide their unique, specialized input to dramatically improve the initial concept. They will add layers of detail, nuance, and technical specificity from their professional perspective.

**Step 3: Master Synthesis**
Finally, acting as the Master Prompt Synthesizer, you will meticulously review the insights from the expert roundtable. You will then synthesize all of these rich details into a single, cohesive, and exceptionally detailed final prompt.

**Crucial Instructions:**
-   **You understand multiple languages, including Hinglish.** If the user's prompt is in Hinglish, fully understand its intent and cultural context. The entire enhancement process should be based on this understanding, but the final synthesized prompt must be in clear, professional English for the generative AI.
-   **The entire process (Steps 1, 2, and 3) must happen internally within your reasoning process.**
-   **Output ONLY the final, synthesized prompt from Step 3.** Do not show the expert council, their discussion, or any other intermediate steps. Do not include any conversational text, introductions, explanations, or labels like "Final Prompt:".
-   The final output must be a single, comprehensive block of text, ready to be copied and pasted into a generative AI tool.

**User's Original Idea:**
---
{userInput}
---

Now, execute this entire process and generate the final, world-class prompt."""

_CLASSIC_ENHANCER = """You are a world-class AI prompt engineer. Your mission is to take a user's simple, vague, or low-quality prompt and transform it into a masterpiece of clarity, detail, and creative direction. The goal is to generate a professional-grade prompt that will guide a generative AI (like an image or text model) to produce a stunning and specific output.

**Your Enhancement Process:**
1.  **Deconstruct the Core Idea:** Identify the fundamental subject and intent of the user's prompt.
2.  **Inject Rich Detail:** Elaborate on the subject. What are its characteristics? Texture? Age? Expression?
3.  **Establish the Scene:** Build a world around the subject. Where is it? What's the environment? Time of day? Weather?
4.  **Define the Artistic Style:** Specify a clear artistic direction. Examples: "Photorealistic, 8K, cinematic," "Impressionistic oil painting," "Cyberpunk anime concept art," "Vintage 1950s travel poster."
5.  **Master the Composition:** Dictate the virtual camera work. Examples: "Dynamic low-angle shot," "Intimate close-up," "Sweeping panoramic view," "Rule of thirds composition."
6.  **Control the Lighting:** Set the mood with precise lighting instructions. Examples: "Golden hour lighting casting long shadows," "Dramatic Rembrandt lighting," "Eerie bioluminescent glow," "Soft, diffused morning light."
7.  **Infuse Mood & Emotion:** Describe the desired feeling. Examples: "A sense of awe and wonder," "A feeling of quiet melancholy," "An atmosphere of high-octane action and chaos."
8.  **Add Technical Keywords:** Include relevant technical terms that AI models understand, such as "hyperdetailed," "UHD," "trending on ArtStation," "Unreal Engine 5 render."

**Crucial Instructions:**
-   **You understand multiple languages, including Hinglish (a mix of Hindi and English).** If the user's prompt is in Hinglish, fully understand its intent, cultural context, and creative idea. Then, generate the enhanced prompt in clear, professional English, as that is what generative AI models understand best.
-   **Output ONLY the enhanced prompt.** Do not include any conversational text, introductions, explanations, or labels like "Enhanced Prompt:".
-   The final output must be a single, cohesive block of text ready to be copied and pasted into a generative AI tool.
-   If the user's prompt is already very detailed, refine and polish it further, focusing on artistic nuance and technical precision.

**User's Original Prompt:**
---
{userInput}
---

Now, generate the enhanced prompt based on these instructions."""

_IMAGE_GEN_PRO = """You are a prompt engineer for an advanced AI image generation model (like Midjourney or DALL-E 3). Your task is to take a user's simple concept and expand it into a rich, detailed, and artistically specific prompt.

**Instructions:**
-   You are fluent in Hinglish. If the user's concept is in Hinglish, interpret it and create a detailed prompt in professional English to ensure the best results from the image model.
-   Focus on visual elements: subject, composition, style, lighting, color palette, and camera details.
-   Use descriptive adjectives and sensory details.
-   Structure the prompt logically, often starting with the main subject.
-   Incorporate keywords that image models understand well, like "photorealistic, 8k, cinematic lighting, hyperdetailed, trending on Artstation, Unreal Engine".
-   Specify an art style (e.g., "impressionist painting", "cyberpunk concept art", "vintage photograph").
-   Define the camera shot (e.g., "wide-angle shot", "macro shot", "dutch angle").
-   Do NOT add any text that isn't part of the final prompt. No explanations, no "Here is the enhanced prompt:". Output ONLY the prompt itself.

**User's Concept:**
---
{userInput}
---

Generate the final, detailed image prompt now."""

_COPYWRITER = """You are an expert marketing copywriter and AI prompt engineer. Your goal is to take a user's product idea or topic and transform it into a prompt that an AI text model can use to generate compelling marketing copy (e.g., ad copy, social media posts, product descriptions).

**Instructions:**
-   You can understand ideas written in Hinglish. If the user's topic is in Hinglish, understand the core marketing need and generate the prompt in professional English.
-   Identify the target audience and the core value proposition from the user's input.
-   Structure the prompt to ask for specific formats (e.g., "Write 3 Facebook ad headlines", "Generate a 100-word product description").
-   Incorporate key copywriting formulas like AIDA (Attention, Interest, Desire, Action) or PAS (Problem, Agitate, Solve) into the prompt's request.
-   Specify the desired tone of voice (e.g., "professional and authoritative", "playful and witty", "empathetic and supportive").
-   Ask the AI to include a clear Call To Action (CTA).
-   Do NOT add any text that isn't part of the final prompt. No explanations. Output ONLY the prompt itself.

**User's Topic/Product:**
---
{userInput}
---

Generate the final, detailed copywriting prompt now."""

_CODE_GEN = """You are a senior software engineer and AI prompt specialist. Your task is to convert a user's plain-language request for a piece of code into a clear, detailed, and unambiguous prompt for an AI code generation model.

**Instructions:**
-   You can understand technical requests written in Hinglish. If the user's request is in Hinglish, translate the requirements into a precise technical prompt in English.
-   Specify the programming language and any necessary frameworks or libraries.
-   Clearly define the function/component's purpose, inputs (with data types), and expected outputs (with data types).
-   Include requirements for error handling, edge cases, and performance considerations.
-   Ask for code comments to explain complex logic.
-   If it's a UI component, describe its appearance and behavior.
-   The prompt should be structured to be easily understood by a code-generation model like Gemini or a fine-tuned version of GPT.
-   Do NOT add any text that isn't part of the final prompt. No explanations. Output ONLY the prompt itself.

**User's Request:**
---
{userInput}
---

Generate the final, detailed code generation prompt now."""


DEFAULT_TEMPLATES: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id="expert-enhancer",
        name="Dynamic Expert Enhancer (Recommended)",
        description=(
            'A multi-step process. An AI "council of experts" analyzes your idea, gives '
            "multi-faceted feedback, and a master synthesizer crafts the final prompt. "
            "The most powerful option for creativity and detail."
        ),
        template=_EXPERT_ENHANCER,
        category="General",
        tags=("advanced", "creative", "world-class", "recommended"),
        is_default=True,
    ),
    PromptTemplate(
        id="default",
        name="Classic Enhancer",
        description=(
            "An all-purpose starting point. Enriches any basic idea with vivid details, "
            "a specific artistic style and a clear scene."
        ),
        template=_CLASSIC_ENHANCER,
        category="General",
        tags=("creative", "detailed", "all-purpose"),
    ),
    PromptTemplate(
        id="image-gen",
        name="Image Generation Pro",
        description=(
            "Optimized for visual AI like Midjourney, DALL-E or Stable Diffusion. Turns a "
            "concept into a shot list with camera angles, lighting, composition and style."
        ),
        template=_IMAGE_GEN_PRO,
        category="Creative",
        tags=("image", "art", "visual", "midjourney"),
    ),
    PromptTemplate(
        id="copywriting",
        name="Marketing Copywriter",
        description=(
            "For persuasive sales and marketing content. Focuses on audience, tone of "
            "voice, value propositions and a compelling call-to-action."
        ),
        template=_COPYWRITER,
        category="Marketing",
        tags=("copywriting", "ads", "social media", "product"),
    ),
    PromptTemplate(
        id="code-gen",
        name="Code Generator Assistant",
        description=(
            "For developers. Structures a request into a technical specification: "
            "language, libraries, inputs/outputs and error handling."
        ),
        template=_CODE_GEN,
        category="Technical",
        tags=("code", "development", "software", "programming"),
    ),
)


PRESET_PROMPTS: tuple[PresetPrompt, ...] = (
    PresetPrompt(
        "Fantasy Landscape",
        "Breathtaking fantasy landscape, matte painting, epic scale, towering mountains, "
        "mystical forest, shimmering waterfalls, volumetric lighting, hyperdetailed, 8K, "
        "trending on Artstation.",
    ),
    PresetPrompt(
        "Sci-fi Character",
        "Full body portrait of a futuristic sci-fi character, intricate cybernetic "
        "enhancements, detailed armor, glowing neon accents, cinematic lighting, "
        "photorealistic, Unreal Engine 5 render.",
    ),
    PresetPrompt(
        "Cozy Room Interior",
        "A cozy, cluttered room interior, soft morning light filtering through a large "
        "window, plants on the windowsill, a steaming cup of coffee on a wooden table, "
        "Studio Ghibli inspired anime style, warm color palette.",
    ),
    PresetPrompt(
        "Cyberpunk Cityscape",
        "Sprawling cyberpunk cityscape at night, neon-drenched skyscrapers, flying "
        "vehicles, rain-slicked streets reflecting the glowing signs, Blade Runner "
        "aesthetic, cinematic, hyper-realistic.",
    ),
    PresetPrompt(
        "Mythical Creature",
        "An ethereal and majestic mythical creature, a griffin with iridescent feathers, "
        "perched on a cliff overlooking a stormy sea, dramatic lighting, fantasy concept "
        "art, highly detailed.",
    ),
    PresetPrompt(
        "Food Photography",
        "Delicious and vibrant food photography, a stack of fluffy pancakes with melting "
        "butter and dripping maple syrup, fresh berries on the side, shallow depth of "
        "field, professional food styling, 8k, photorealistic.",
    ),
)

LIVE_EXAMPLE_PROMPTS: tuple[str, ...] = (
    "A photorealistic image of an astronaut discovering a glowing, crystalline forest "
    "on an alien planet, two moons in the sky.",
    "Cinematic shot of a lone samurai warrior standing on a cliff overlooking a stormy "
    "sea, cherry blossom petals flying in the wind.",
    "Steampunk-style airship navigating through a city of towering, bronze skyscrapers, "
    "intricate gears and steam vents visible.",
    "A cozy, cluttered wizard's workshop, shelves filled with glowing potions and ancient "
    "books, a magical creature sleeping by the fireplace, anime style.",
    "Epic fantasy art of a majestic dragon with iridescent scales, perched atop a "
    "snow-covered mountain peak at sunrise.",
    "Cyberpunk cityscape at night, neon-drenched streets, flying cars, a mysterious "
    "figure in a trench coat looking up at the holographic ads.",
    "A beautiful watercolor painting of a Venetian canal scene, gondolas gently "
    "floating, colorful buildings reflected in the water.",
    "Minimalist vector art of a solitary deer in a misty, pine forest, using a limited "
    "color palette of blues and grays.",
    "An epic oil painting of a fierce naval battle between pirate ships during a "
    "thunderstorm, dramatic waves crashing.",
    "Vintage 1950s travel poster for a futuristic city on Mars, retro-style rockets and "
    "smiling families in space suits.",
)


class TemplateCatalog:
    """Read-only lookup over a fixed set of templates."""

    def __init__(self, templates: Optional[Sequence[PromptTemplate]] = None) -> None:
        self._templates: tuple[PromptTemplate, ...] = tuple(
            templates if templates is not None else DEFAULT_TEMPLATES
        )
        if not self._templates:
            raise ValueError("TemplateCatalog requires at least one template")

    def list_templates(self) -> List[PromptTemplate]:
        return list(self._templates)

    def categories(self) -> List[str]:
        """Return ``All`` followed by each category in first-seen order."""
        seen: list[str] = []
        for template in self._templates:
            if template.category not in seen:
                seen.append(template.category)
        return [ALL_CATEGORIES, *seen]

    def by_category(self, category: Optional[str]) -> List[PromptTemplate]:
        if not category or category == ALL_CATEGORIES:
            return list(self._templates)
        return [t for t in self._templates if t.category == category]

    def get(self, template_id: str) -> Optional[PromptTemplate]:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    def default_for(self, templates: Optional[Iterable[PromptTemplate]] = None) -> PromptTemplate:
        """Return the flagged default from ``templates``, else the first one."""
        pool = list(templates) if templates is not None else list(self._templates)
        if not pool:
            pool = list(self._templates)
        for template in pool:
            if template.is_default:
                return template
        return pool[0]

    def resolve_selection(self, category: Optional[str], template_id: Optional[str]) -> PromptTemplate:
        """Keep ``template_id`` if it is visible in ``category``, else pick that category's default."""
        visible = self.by_category(category)
        for template in visible:
            if template.id == template_id:
                return template
        return self.default_for(visible)


def find_preset_prompt(name: Optional[str]) -> str:
    """Return the preset prompt text for ``name`` or an empty string."""
    for preset in PRESET_PROMPTS:
        if preset.name == name:
            return preset.prompt
    return ""


def live_example(index: int) -> str:
    """Return the example prompt at ``index``, wrapping around the list."""
    return LIVE_EXAMPLE_PROMPTS[index % len(LIVE_EXAMPLE_PROMPTS)]
