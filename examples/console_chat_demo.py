"""Minimal console front end for the chat controller.

Type a message, or a number to send one of the suggested prompts.
Set DEFAULT_EXCHANGER=echo to try it without a backend.
"""

from chat_core.api.service import get_default_controller
from chat_core.domain.models import ChatViewState


def render(state: ChatViewState) -> None:
    if state.is_loading:
        print("... agent is thinking")
        return
    last = state.conversation.last
    if last is not None and last.role == "agent":
        print("Agent:", last.content)
    if state.error:
        print("Error:", state.error)


if __name__ == "__main__":
    controller = get_default_controller()
    cfg = controller.config
    print(cfg.header_title)
    print(cfg.header_description)
    if cfg.suggested_prompts:
        print(cfg.suggested_prompts_title)
        for i, prompt in enumerate(cfg.suggested_prompts, 1):
            print(f"  [{i}] {prompt}")
    controller.subscribe(render)
    callbacks = controller.input_callbacks()
    while True:
        try:
            text = input("You: ")
        except (EOFError, KeyboardInterrupt):
            break
        if text.isdigit() and 0 < int(text) <= len(cfg.suggested_prompts):
            callbacks.on_prompt_select(cfg.suggested_prompts[int(text) - 1])
        else:
            callbacks.on_submit_text(text)
