"""NiceGUI chat page that relays prompts and lists the exchanges."""

import asyncio

from nicegui import ui

from promptrelay.models.schemas import Exchange
from promptrelay.ui.client import RelayClient
from promptrelay.ui.session import ChatSession, PromptSubmitter

CUSTOM_CSS = """
<style>
    body { background: #171717; min-height: 100vh; }

    .bubble-prompt {
        background: #737373;
        color: white;
        border-radius: 16px;
    }

    .bubble-answer {
        background: #404040;
        color: white;
        border-radius: 16px;
    }

    .bubble-answer pre { white-space: pre-wrap; }
</style>
"""


def build_chat_page(client: PromptSubmitter | None = None) -> None:
    """Build the chat widgets on the current page.

    Args:
        client: Relay client for this tab; a RelayClient by default.
    """
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession(client or RelayClient())

    exchanges_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.input
    push_btn: ui.button
    cancel_btn: ui.button

    def render_exchange(exchange: Exchange) -> None:
        with ui.column().classes("w-full gap-4"):
            with ui.row().classes("w-full justify-end"):
                ui.label(exchange.prompt).classes("bubble-prompt p-4 max-w-[80%]")
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("bubble-answer p-4 max-w-[80%]"):
                    ui.markdown(exchange.answer)

    def refresh() -> None:
        if session.busy:
            push_btn.disable()
            cancel_btn.enable()
        else:
            push_btn.enable()
            cancel_btn.disable()

        exchanges_container.clear()
        with exchanges_container:
            if session.busy:
                with ui.row().classes("items-center gap-2 text-white"):
                    ui.spinner(size="md", color="white")
                    ui.label("Loading...")
                return

            if session.error is not None:
                with ui.row().classes("w-full items-center gap-2 text-red-400"):
                    ui.icon("error")
                    ui.label(f"{session.error.kind.value}: {session.error.message}")

            for exchange in session.exchanges:
                render_exchange(exchange)

    async def push() -> None:
        if session.busy:
            return

        text = input_field.value or ""
        task = asyncio.create_task(session.submit(text))
        # Let the submission reach its network call so busy is set
        await asyncio.sleep(0)
        refresh()

        exchange = await task
        if exchange is not None:
            input_field.value = ""
        elif session.error is not None:
            ui.notify(session.error.message, type="negative")

        refresh()
        if exchange is not None:
            scroll_area.scroll_to(percent=1.0)

    def cancel() -> None:
        if session.cancel():
            ui.notify("Request cancelled", type="warning")
        refresh()

    def new_chat() -> None:
        session.reset()
        input_field.value = ""
        refresh()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto px-4").style("height: 100vh"):
        # Prompt bar
        with ui.row().classes("w-full items-center gap-2 py-4"):
            input_field = (
                ui.input(placeholder="Ask me anything")
                .props("outlined rounded dense bg-color=white")
                .classes("flex-grow")
                .on("keydown.enter", push)
                .mark("prompt")
            )
            push_btn = ui.button("Push", on_click=push).props("rounded color=black").mark("push")
            cancel_btn = (
                ui.button("Cancel", on_click=cancel)
                .props("rounded flat color=white")
                .mark("cancel")
            )
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Exchanges
        with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
            exchanges_container = ui.column().classes("w-full gap-4")

    refresh()


@ui.page("/chat")
def chat_page() -> None:
    """Main chat page."""
    build_chat_page()


def main() -> None:
    ui.run(title="Prompt Relay", port=8080, reload=False)


if __name__ == "__main__":
    main()
