"""Rich console handler for restoration events.

Where: platform/logging/handlers.py
What: Render structured ``restoration.*`` log records with icons, colours, and compact paths.
Why: Keep console formatting out of the use cases, which only attach ``extra`` fields.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class RestorationRichHandler(RichHandler):
    """Rich handler that renders restoration events and keeps paths readable."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "restoration.pass.start": ("🔎", "cyan"),
        "restoration.pass.complete": ("✅", "green"),
        "restoration.pass.error": ("❌", "red"),
        "restoration.file.available": ("🎬", "green"),
        "restoration.file.relocated": ("📦", "magenta"),
        "restoration.file.missing": ("⚠️", "yellow"),
        "restoration.file.corrupted": ("⛔", "red"),
    }
    _FILE_PREFIXES: ClassVar[dict[str, str]] = {
        "restoration.file.available": "Available ",
        "restoration.file.relocated": "Relocated ",
        "restoration.file.missing": "Missing ",
        "restoration.file.corrupted": "Corrupted ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path relative to ``base`` with coloured separators and truncation."""

        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and self._is_relative_to(pure_path, base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        is_windows = isinstance(display_path, PureWindowsPath)
        separator = "\\" if is_windows else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if anchor and not truncated:
            display_string = anchor.rstrip("\\/") + separator if is_windows else separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)
        if not display_string:
            display_string = "."

        text = Text()
        for char in display_string:
            if char in {"/", "\\", "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _is_relative_to(path: PurePath, other: PurePath) -> bool:
        try:
            _ = path.relative_to(other)
            return True
        except ValueError:
            return False

    def _render_restoration_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured restoration events with dedicated styling."""

        event = getattr(record, "restoration_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))
        base = getattr(record, "project_dir", None)

        if event.startswith("restoration.pass"):
            if event == "restoration.pass.start":
                total = getattr(record, "total", None)
                _ = body.append("Restoration start")
                if isinstance(total, int):
                    _ = body.append(f" [total={total}]")
            elif event == "restoration.pass.complete":
                _ = body.append("Restoration complete")
                metrics = [
                    f"{key}={value}"
                    for key in ("restored", "relocated", "missing", "corrupted")
                    if isinstance(value := getattr(record, key, None), int)
                ]
                duration = getattr(record, "duration_seconds", None)
                if isinstance(duration, (int, float)):
                    metrics.append(f"duration={duration:.2f}s")
                if metrics:
                    _ = body.append(" [" + ", ".join(metrics) + "]")
            else:
                _ = body.append("Restoration error")
                error = getattr(record, "error_message", None)
                if error:
                    _ = body.append(f" ({error})")
            if base:
                _ = body.append(" @ ")
                _ = body.append_text(self._format_path(str(base)))
        else:
            prefix = self._FILE_PREFIXES.get(event)
            if prefix:
                _ = body.append(prefix)
            source_path = getattr(record, "source_path", None)
            target_path = getattr(record, "target_path", None)
            if source_path:
                _ = body.append_text(self._format_path(str(source_path), base=base))
            if event == "restoration.file.relocated" and target_path:
                _ = body.append(" → ")
                _ = body.append_text(self._format_path(str(target_path), base=base))

            details: list[str] = []
            confidence = getattr(record, "confidence", None)
            if isinstance(confidence, (int, float)):
                details.append(f"confidence={confidence:.2f}")
            issues = getattr(record, "issues", None)
            if isinstance(issues, (list, tuple)) and issues:
                details.append("; ".join(str(issue) for issue in issues))
            if details:
                _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = self._render_restoration_message(record)
        if rendered is not None:
            return rendered
        return super().render_message(record, message)


__all__ = ["RestorationRichHandler"]
