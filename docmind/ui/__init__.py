"""NiceGUI interface - thin visualization layer for document chat.

Responsibilities:
    - Session sidebar with selection and deletion
    - Upload dialog for new document sessions
    - Chat timeline display with Markdown answers
    - Question input, disabled while a question is pending

Holds no session state of its own. Renders what docmind.session owns.
"""
