"""One-off script for debugging enhancement and image generation end to end."""

from pathlib import Path

from config.settings import load_config
from modules.optimization.prompt_optimizer import PromptEnhancer
from modules.services.gemini_client import initialize_client
from modules.services.history_service import HistoryStore
from modules.services.image_service import ImageGenerator
from modules.ui.callbacks import build_callbacks


def main() -> None:
    # 1. real config and services; history stays in memory
    config = load_config()
    init = initialize_client(config)
    history = HistoryStore(None, limit=config.history_limit)

    callbacks = build_callbacks(
        config,
        enhancer=PromptEnhancer(init.client, history=history),
        image_generator=ImageGenerator(init.client),
        history=history,
        init_error=init.error,
    )

    # 2. enhance an idea, comparing both model variants
    idea = "a futuristic city street at sunset, a girl in a red kimono, neon lights"
    original, enhanced, secondary, status = callbacks["on_enhance"](idea, "image-gen", True)
    print("Status:", status)
    print("Primary:", enhanced)
    print("Secondary:", secondary)

    # 3. render the primary result
    image, status = callbacks["on_generate_image"](enhanced, "cinematic", "16:9")
    print("Status:", status)
    if image:
        out_path = Path("debug_enhance_output.png")
        image.save(out_path)
        print("Image saved:", out_path.resolve())
    else:
        print("No image returned; check the status message.")


if __name__ == "__main__":
    main()
