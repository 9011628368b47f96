from __future__ import annotations

import json

from ..models import ProcessedBlog


def format_json(blog: ProcessedBlog, *, indent: int | None = 2) -> str:
    return json.dumps(blog.to_dict(), ensure_ascii=False, indent=indent)


def _minutes(value: int) -> str:
    return f"{value} min" if value == 1 else f"{value} mins"


def format_markdown(blog: ProcessedBlog) -> str:
    """Render a processed blog as a short Markdown card."""
    return (
        f"## {blog.title}\n\n"
        f"Source: {blog.url}\n\n"
        f"Words: {blog.word_count} | Reading time: {_minutes(blog.read_time)}\n\n"
        f"### Summary\n\n{blog.summary}\n\n"
        f"### Translated summary\n\n{blog.translated_summary}\n"
    )
