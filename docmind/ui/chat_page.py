"""NiceGUI chat interface for document sessions."""

import html
import os
from datetime import datetime

from nicegui import app, events, ui
from pydantic import ValidationError

from docmind.gateway.client import close_gateway
from docmind.gateway.errors import DeleteError, FetchError, UploadError
from docmind.models.schemas import DocumentFile, Message, Role
from docmind.session import ControllerState, Workspace
from docmind.ui.markdown import markdown_to_html

ACCEPTED_FILE_TYPES = ".pdf,.txt,.docx"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; min-height: 100vh; }

    .sidebar { background: white; border-right: 1px solid #e5e7eb; }

    .session-item { border-radius: 8px; cursor: pointer; transition: background 0.15s; }
    .session-item:hover { background: #f3f4f6; }
    .session-item.active { background: #eef2ff; color: #4338ca; }
    .session-item .delete-btn { opacity: 0; transition: opacity 0.15s; }
    .session-item:hover .delete-btn { opacity: 1; }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: #4f46e5; }
    .avatar-assistant { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #4f46e5;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #4f46e5; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


def session_label(session_id: str) -> str:
    """Short sidebar label for a session id."""
    return f"{session_id.split('-')[0]}... Session"


def show_error(message: str) -> None:
    """Persistent error notification, dismissed by the user."""
    ui.notify(message, type="negative", timeout=0, close_button=True)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    workspace = Workspace()
    controller = workspace.controller

    sessions_container: ui.column
    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        with ui.element("div").classes(
            f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        ):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[75%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        content = html.escape(msg.content, quote=False).replace("\n", "<br>")
                    else:
                        content = markdown_to_html(msg.content)
                    ui.html(content, sanitize=True).classes("text-sm leading-relaxed")
                ui.label(datetime.fromtimestamp(msg.timestamp).strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Searching the document...").classes(
                        "text-sm text-gray-500 italic"
                    )

    def render_placeholder(icon: str, title: str, subtitle: str) -> None:
        with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
            ui.icon(icon).classes("text-5xl text-gray-300")
            ui.label(title).classes("text-lg text-gray-500")
            ui.label(subtitle).classes("text-sm text-gray-400")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if controller.state is ControllerState.IDLE:
                render_placeholder(
                    "upload_file",
                    "No document selected",
                    "Upload a document or pick a session to start asking questions.",
                )
            elif controller.state is ControllerState.LOADING:
                ui.spinner(size="lg").classes("self-center mt-16")
            elif not controller.timeline:
                render_placeholder(
                    "forum",
                    "Ask your first question",
                    "Answers come from the uploaded document only.",
                )
            else:
                for msg in controller.timeline:
                    render_message(msg)
            if workspace.queries.is_in_flight():
                render_typing_indicator()
        update_send_button()

    def update_send_button() -> None:
        if input_field.value.strip() and workspace.queries.can_ask():
            send_btn.enable()
        else:
            send_btn.disable()

    def refresh_sessions() -> None:
        sessions_container.clear()
        with sessions_container:
            if not workspace.registry.session_ids:
                ui.label("No active sessions").classes("text-sm text-gray-400 italic px-2")
                return
            for session_id in workspace.registry:
                active = " active" if session_id == controller.active_session_id else ""
                with (
                    ui.row()
                    .classes(f"session-item{active} w-full items-center justify-between p-3 no-wrap")
                    .on("click", lambda sid=session_id: select_session(sid))
                ):
                    with ui.row().classes("items-center gap-3 no-wrap overflow-hidden"):
                        ui.icon("description").classes("text-lg")
                        ui.label(session_label(session_id)).classes("truncate text-sm font-medium")
                    # stop: the row's own click would select the session
                    ui.button(icon="delete").props("flat round dense size=sm").classes(
                        "delete-btn"
                    ).on("click.stop", lambda sid=session_id: delete_session(sid))

    def on_controller_change() -> None:
        refresh_messages()
        refresh_sessions()

    async def load_sessions() -> None:
        try:
            await workspace.registry.refresh()
        except FetchError as e:
            show_error(f"Could not fetch sessions: {e}")
        refresh_sessions()

    async def select_session(session_id: str) -> None:
        try:
            await controller.select(session_id)
        except FetchError as e:
            show_error(f"Could not load session history: {e}")

    async def delete_session(session_id: str) -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label("Are you sure you want to delete this session?")
            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative")
        confirmed = await dialog
        if not confirmed:
            return
        try:
            await controller.delete(session_id)
        except DeleteError as e:
            show_error(f"Failed to delete session: {e}")
        refresh_sessions()

    async def send_message() -> None:
        text = input_field.value
        if not text.strip() or not workspace.queries.can_ask():
            return
        input_field.value = ""
        await workspace.queries.ask(text)
        refresh_messages()

    # === Upload dialog ===
    with ui.dialog().props("persistent") as upload_dialog, ui.card().classes("w-[28rem]"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("New Document Session").classes("text-lg font-semibold")
            close_btn = ui.button(icon="close", on_click=upload_dialog.close).props(
                "flat round dense"
            )
        ui.label("Upload a PDF, TXT or DOCX file to chat with it.").classes(
            "text-sm text-gray-500"
        )
        with ui.row().classes("w-full gap-3"):
            chunk_size_input = ui.number(
                "Chunk size", value=workspace.gateway.config.chunk_size, min=1, precision=0
            ).classes("flex-1")
            chunk_overlap_input = ui.number(
                "Chunk overlap", value=workspace.gateway.config.chunk_overlap, min=1, precision=0
            ).classes("flex-1")
        upload_spinner = ui.row().classes("items-center gap-2")
        with upload_spinner:
            ui.spinner()
            ui.label("Processing document...").classes("text-sm text-gray-500")
        upload_spinner.set_visibility(False)

        async def handle_upload(e: events.UploadEventArguments) -> None:
            document = DocumentFile(
                filename=e.file.name,
                content=await e.file.read(),
                content_type=e.file.content_type or "application/octet-stream",
            )
            close_btn.disable()
            upload_spinner.set_visibility(True)
            try:
                await workspace.uploader.upload(
                    document,
                    chunk_size=int(chunk_size_input.value or workspace.gateway.config.chunk_size),
                    chunk_overlap=int(
                        chunk_overlap_input.value or workspace.gateway.config.chunk_overlap
                    ),
                )
            except UploadError as err:
                show_error(f"Error uploading file: {err}")
            except ValidationError:
                show_error("Invalid chunk size or overlap: both must be positive whole numbers")
            else:
                upload_dialog.close()
            finally:
                close_btn.enable()
                upload_spinner.set_visibility(False)
                uploader.reset()
                refresh_sessions()

        uploader = (
            ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
            .props(f"accept={ACCEPTED_FILE_TYPES} flat bordered")
            .classes("w-full")
        )

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("sidebar w-72 h-full p-4 gap-4"):
            with ui.row().classes("items-center gap-2 px-2 pt-2"):
                ui.icon("chat").classes("text-white bg-indigo-600 rounded-lg p-1.5 text-xl")
                ui.label("DocuMind AI").classes("text-xl font-bold text-indigo-600")
            ui.button(
                "New Document Session", icon="add", on_click=upload_dialog.open
            ).props("unelevated color=indigo").classes("w-full rounded-xl")
            ui.label("History").classes(
                "text-xs font-semibold text-gray-400 uppercase tracking-wider px-2"
            )
            with ui.scroll_area().classes("flex-grow w-full"):
                sessions_container = ui.column().classes("w-full gap-1")

        # Chat
        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.row().classes("w-full px-6 py-4 bg-white border-b items-center gap-3"):
                ui.icon("description").classes("text-indigo-600 text-xl")
                ui.label().bind_text_from(
                    controller,
                    "active_session_id",
                    backward=lambda sid: session_label(sid) if sid else "No session selected",
                ).classes("font-medium text-gray-700")
                ui.button(icon="close", on_click=controller.deselect).props(
                    "flat round dense"
                ).bind_visibility_from(controller, "active_session_id", backward=bool)

            with (
                ui.scroll_area().classes("flex-grow w-full"),
                ui.column().classes("w-full max-w-3xl mx-auto p-6"),
            ):
                messages_container = ui.column().classes("w-full gap-4")

            with ui.row().classes("w-full max-w-3xl mx-auto p-4 gap-3 items-end no-wrap"):
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(
                            placeholder="Ask a question about the document...",
                            on_change=update_send_button,
                        )
                        .props("autogrow borderless dense rows=1")
                        .classes("w-full")
                        .on("keydown.enter.prevent", send_message)
                    )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=indigo"
                )

    controller.subscribe(on_controller_change)
    refresh_messages()
    refresh_sessions()
    ui.timer(0, load_sessions, once=True)


def main() -> None:
    app.on_shutdown(close_gateway)
    ui.run(
        title="DocuMind AI",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        reload=False,
    )


if __name__ == "__main__":
    main()
