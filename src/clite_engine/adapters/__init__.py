"""Host adapters that drive an EditorSession from a UI toolkit."""
