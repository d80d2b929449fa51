"""Editor host around the live analyzer."""

from refinelab.editor.session import EditorSession

__all__ = ["EditorSession"]
