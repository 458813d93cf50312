"""Gradio layout composition for PromptMatrix."""

from __future__ import annotations

from typing import Any, Callable, Optional

import gradio as gr

from config.settings import AppConfig
from modules.optimization.prompt_optimizer import PromptEnhancer
from modules.optimization.prompt_templates import (
    ALL_CATEGORIES,
    PRESET_PROMPTS,
    TemplateCatalog,
    live_example,
)
from modules.optimization.style_presets import StyleTag, style_choices
from modules.services.feedback_service import FeedbackClassifier
from modules.services.gemini_client import ClientInit, initialize_client
from modules.services.history_service import ALL_TEMPLATES, HistoryStore, SortOrder
from modules.services.image_service import AspectRatio, ImageGenerator
from modules.services.speech_service import SpeechTranscriber
from modules.services.storage_service import StorageService
from modules.ui.callbacks import build_callbacks

HISTORY_HEADERS = ["Template", "Original", "Enhanced"]
LIVE_EXAMPLE_SECONDS = 3.0


def _keep(value: Any) -> Any:
    return gr.update() if value is None else value


def _wrap(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Translate ``None`` outputs into no-op component updates."""

    def inner(*args: Any) -> Any:
        result = fn(*args)
        if isinstance(result, tuple):
            return tuple(_keep(value) for value in result)
        return _keep(result)

    return inner


def _aspect_choices() -> list[str]:
    return [ratio.value for ratio in AspectRatio]


def _sort_choices() -> list[tuple[str, str]]:
    return [(f"Sort: {order.label}", order.value) for order in SortOrder]


def build_app(config: AppConfig, client_init: Optional[ClientInit] = None) -> Any:
    """Compose and return the Gradio application."""
    init = client_init or initialize_client(config)
    client = init.client

    catalog = TemplateCatalog()
    history = HistoryStore(config.history_path, limit=config.history_limit)
    enhancer = PromptEnhancer(client, history=history)
    image_generator = ImageGenerator(client, model=config.image_model)
    classifier = FeedbackClassifier(client, model=config.utility_model)
    transcriber = SpeechTranscriber(client, model=config.utility_model)

    cb = build_callbacks(
        config,
        enhancer=enhancer,
        image_generator=image_generator,
        classifier=classifier,
        transcriber=transcriber,
        history=history,
        catalog=catalog,
        storage=StorageService(config.export_dir),
        init_error=init.error,
    )

    default_template = catalog.default_for()
    template_choices = [(template.name, template.id) for template in catalog.list_templates()]

    with gr.Blocks(title="PromptMatrix") as demo:
        gr.Markdown("# PromptMatrix\nConstructing world-class AI prompts from your core ideas.")
        banner = gr.Markdown(cb["startup_message"]())
        with gr.Row():
            example_index = gr.State(0)
            live_example_box = gr.Textbox(
                label="Try an example",
                value=live_example(0),
                interactive=False,
                show_copy_button=True,
                scale=4,
            )
            with gr.Column(scale=1, min_width=140):
                next_example_btn = gr.Button("Next example")
                use_example_btn = gr.Button("Use this example")
        example_timer = gr.Timer(LIVE_EXAMPLE_SECONDS)

        with gr.Tab("Enhance"):
            with gr.Row():
                with gr.Column():
                    user_input = gr.Textbox(
                        label="Your idea",
                        lines=4,
                        placeholder="Describe a simple idea, in English or Hinglish",
                    )
                    mic_start = gr.State("")
                    mic = gr.Audio(label="Speak your idea", sources=["microphone"], type="filepath")
                    correct_btn = gr.Button("Correct spelling & grammar")
                    with gr.Row():
                        category = gr.Dropdown(
                            label="Category",
                            choices=catalog.categories(),
                            value=ALL_CATEGORIES,
                        )
                        template_select = gr.Dropdown(
                            label="Template",
                            choices=template_choices,
                            value=default_template.id,
                        )
                    template_description = gr.Markdown(default_template.description)
                    comparing = gr.Checkbox(label="Compare Pro vs Flash", value=False)
                    enhance_btn = gr.Button("Enhance prompt", variant="primary")
                    status = gr.Markdown("")

                with gr.Column():
                    original_out = gr.Textbox(label="Original", lines=3, interactive=False)
                    enhanced_out = gr.Textbox(label="Enhanced prompt", lines=10, show_copy_button=True)
                    enhanced_stats = gr.Markdown("")
                    secondary_out = gr.Textbox(
                        label="Flash model result (comparison)",
                        lines=10,
                        show_copy_button=True,
                    )
                    with gr.Row():
                        save_btn = gr.Button("Save as .txt")
                        export_file = gr.File(label="Download", interactive=False)
                    suggestions = gr.Radio(label="Suggestions (click to refine)", choices=[])
                    with gr.Row():
                        refine_instruction = gr.Textbox(label="Refine with your own instruction", lines=1)
                        refine_btn = gr.Button("Refine")

            with gr.Row():
                with gr.Column():
                    image_style = gr.Dropdown(
                        label="Artistic style",
                        choices=style_choices(),
                        value=StyleTag.NONE.value,
                    )
                    image_ratio = gr.Radio(label="Aspect ratio", choices=_aspect_choices(), value="1:1")
                    image_btn = gr.Button("Generate image from enhanced prompt")
                with gr.Column():
                    image_out = gr.Image(label="Generated image", type="pil")
                    image_status = gr.Markdown("")

        with gr.Tab("Image creator"):
            with gr.Row():
                with gr.Column():
                    preset = gr.Dropdown(
                        label="Preset prompts",
                        choices=[""] + [item.name for item in PRESET_PROMPTS],
                        value="",
                    )
                    direct_prompt = gr.Textbox(label="Image prompt", lines=4)
                    direct_style = gr.Dropdown(
                        label="Artistic style",
                        choices=style_choices(),
                        value=StyleTag.NONE.value,
                    )
                    direct_ratio = gr.Radio(label="Aspect ratio", choices=_aspect_choices(), value="1:1")
                    direct_btn = gr.Button("Generate image", variant="primary")
                with gr.Column():
                    direct_image = gr.Image(label="Generated image", type="pil")
                    direct_status = gr.Markdown("")

        with gr.Tab("History"):
            with gr.Row():
                history_search = gr.Textbox(label="Search history", placeholder="Search history...")
                history_sort = gr.Dropdown(label="Sort", choices=_sort_choices(), value=SortOrder.RECENT.value)
                history_filter = gr.Dropdown(
                    label="Template",
                    choices=cb["on_history_filters"](),
                    value=ALL_TEMPLATES,
                )
            history_table = gr.Dataframe(
                headers=HISTORY_HEADERS,
                value=cb["on_query_history"]("", SortOrder.RECENT.value, ALL_TEMPLATES),
                interactive=False,
                wrap=True,
            )
            gr.Markdown("Select a row to reuse its original idea.")
            clear_history_btn = gr.Button("Clear history", variant="stop")

        with gr.Tab("Feedback"):
            feedback_name = gr.Textbox(label="Name (optional)")
            feedback_text = gr.Textbox(label="Feedback", lines=5)
            feedback_btn = gr.Button("Send feedback", variant="primary")
            feedback_result = gr.Markdown("")
            feedback_status = gr.Markdown("")

        # Live example showcase ------------------------------------------------
        for trigger in (example_timer.tick, next_example_btn.click):
            trigger(
                fn=cb["on_next_example"],
                inputs=[example_index],
                outputs=[example_index, live_example_box],
                show_progress="hidden",
            )
        use_example_btn.click(fn=lambda text: text, inputs=[live_example_box], outputs=[user_input])

        # Enhance tab wiring -----------------------------------------------------
        def _category_update(selected_category: str, current_id: str) -> tuple[Any, str]:
            choices, selected_id, description = cb["on_category_change"](selected_category, current_id)
            return gr.update(choices=choices, value=selected_id), description

        category.change(
            fn=_category_update,
            inputs=[category, template_select],
            outputs=[template_select, template_description],
        )
        template_select.change(
            fn=cb["on_template_change"],
            inputs=[template_select],
            outputs=[template_description],
        )

        mic.start_recording(fn=lambda text: text or "", inputs=[user_input], outputs=[mic_start])
        mic.stop_recording(
            fn=_wrap(cb["on_transcribe"]),
            inputs=[mic, mic_start],
            outputs=[user_input, status],
        )
        correct_btn.click(fn=_wrap(cb["on_correct"]), inputs=[user_input], outputs=[user_input, status])

        def _history_filter_update() -> Any:
            return gr.update(choices=cb["on_history_filters"]())

        enhance_btn.click(
            fn=_wrap(cb["on_enhance"]),
            inputs=[user_input, template_select, comparing],
            outputs=[original_out, enhanced_out, secondary_out, status],
            concurrency_limit=1,
        ).then(
            fn=cb["on_query_history"],
            inputs=[history_search, history_sort, history_filter],
            outputs=[history_table],
        ).then(
            fn=_history_filter_update,
            outputs=[history_filter],
        ).then(
            fn=lambda text: gr.update(choices=cb["on_suggest"](text)[0], value=None),
            inputs=[enhanced_out],
            outputs=[suggestions],
        )
        enhanced_out.change(fn=cb["on_stats"], inputs=[enhanced_out], outputs=[enhanced_stats])

        refine_btn.click(
            fn=_wrap(cb["on_refine"]),
            inputs=[enhanced_out, refine_instruction],
            outputs=[enhanced_out, status],
        )
        suggestions.input(
            fn=_wrap(cb["on_refine"]),
            inputs=[enhanced_out, suggestions],
            outputs=[enhanced_out, status],
        )
        save_btn.click(fn=_wrap(cb["on_save_prompt"]), inputs=[enhanced_out], outputs=[export_file, status])

        image_btn.click(
            fn=cb["on_generate_image"],
            inputs=[enhanced_out, image_style, image_ratio],
            outputs=[image_out, image_status],
        )

        # Image creator wiring ---------------------------------------------------
        preset.change(fn=cb["on_preset_change"], inputs=[preset], outputs=[direct_prompt])
        direct_btn.click(
            fn=cb["on_generate_direct_image"],
            inputs=[direct_prompt, direct_style, direct_ratio],
            outputs=[direct_image, direct_status],
        )

        # History wiring ---------------------------------------------------------
        history_inputs = [history_search, history_sort, history_filter]
        for component in history_inputs:
            component.change(fn=cb["on_query_history"], inputs=history_inputs, outputs=[history_table])

        def _select_history(search: str, sort_order: str, template_filter: str, evt: gr.SelectData) -> Any:
            row = evt.index[0] if isinstance(evt.index, (list, tuple)) else evt.index
            return _keep(cb["on_select_history"](search, sort_order, template_filter, row))

        history_table.select(fn=_select_history, inputs=history_inputs, outputs=[user_input])
        clear_history_btn.click(fn=cb["on_clear_history"], outputs=[history_table]).then(
            fn=_history_filter_update,
            outputs=[history_filter],
        )

        # Feedback wiring --------------------------------------------------------
        feedback_btn.click(
            fn=_wrap(cb["on_submit_feedback"]),
            inputs=[feedback_name, feedback_text],
            outputs=[feedback_result, feedback_status],
        )

        demo.load(fn=cb["startup_message"], outputs=[banner])

    return demo
