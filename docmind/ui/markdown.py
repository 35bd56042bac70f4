"""Minimal Markdown to HTML conversion for assistant answers."""

import html
import re

_CODE_BLOCK_CLASSES = "bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"
_INLINE_CODE_CLASSES = "bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs"

_UNORDERED_ITEM = re.compile(r"^[-*]\s+")
_ORDERED_ITEM = re.compile(r"^\d+\.\s+")


def _wrap_list_items(text: str, item: re.Pattern[str], open_tag: str, close_tag: str) -> str:
    """Group consecutive list lines matching ``item`` into one list element."""
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if item.match(stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            result.append(f"<li>{item.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(close_tag)
            in_list = False
        result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    HTML in the input is escaped first, quotes included. Only http(s) link
    targets become anchors; anything else stays plain text.
    """
    text = html.escape(text, quote=True)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        rf'<pre class="{_CODE_BLOCK_CLASSES}"><code>\2</code></pre>',
        text,
    )
    text = re.sub(r"`([^`]+)`", rf'<code class="{_INLINE_CODE_CLASSES}">\1</code>', text)

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\((https?://[^)\s]+)\)",
        r'<a href="\2" class="text-indigo-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list_items(
        text, _UNORDERED_ITEM, '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"
    )
    text = _wrap_list_items(
        text, _ORDERED_ITEM, '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"
    )

    return text.replace("\n", "<br>")
