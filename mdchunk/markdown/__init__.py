"""Markdown-aware splitting: tree, wrappers, cutting and chunk assembly."""
