"""Segmenter for description/example markup.

Splits text into plain runs and <example> blocks. Only ``example`` (with an
optional ``prefix:``), and ``file`` are interpreted; every other element is
written back into the surrounding text as-is.
"""

from __future__ import annotations

from html.parser import HTMLParser

from .models import ExampleBlock, FileBlock, MarkupSegment

Attrs = list[tuple[str, str | None]]


def _is_example(tag: str) -> bool:
    return tag == "example" or tag.endswith(":example")


def _format_attrs(attrs: Attrs) -> str:
    return " ".join(f'{key}="{value if value is not None else ""}"' for key, value in attrs)


def _open_tag(tag: str, attrs: Attrs, closed: str) -> str:
    attr_string = _format_attrs(attrs)
    return f"<{tag}{' ' + attr_string if attr_string else ''}{closed}>"


def _ampersand_stand_in(text: str) -> str:
    """Pick a private-use character that does not occur in text."""
    code = 0xE000
    while chr(code) in text:
        code += 1
    return chr(code)


class _MarkupSegmenter(HTMLParser):
    """Event handlers building the segment list.

    The parser never sees a literal "&": it is swapped for a private-use
    character before feeding and swapped back in every handler, so entity
    references, bare ampersands and attribute values come out exactly as
    written.
    """

    def __init__(self, amp: str) -> None:
        super().__init__(convert_charrefs=False)
        self.segments: list[MarkupSegment] = []
        self._amp = amp
        self._text: str | None = None
        self._example: ExampleBlock | None = None
        self._file: FileBlock | None = None

    def _raw(self, value: str | None) -> str | None:
        return None if value is None else value.replace(self._amp, "&")

    def _raw_attrs(self, attrs: Attrs) -> Attrs:
        return [(self._raw(key), self._raw(value)) for key, value in attrs]

    def _append(self, text: str) -> None:
        self._text = text if self._text is None else self._text + text

    def _flush_text(self) -> None:
        if self._text:
            self.segments.append(self._text)
        self._text = None

    def handle_starttag(self, tag: str, attrs: Attrs) -> None:
        attrs = self._raw_attrs(attrs)
        attr_map = dict(attrs)
        if _is_example(tag):
            self._flush_text()
            self._example = ExampleBlock(
                module=attr_map.get("module"), deps=attr_map.get("deps")
            )
        elif tag == "file":
            self._file = FileBlock(name=attr_map.get("name"), src=attr_map.get("src"))
            self._text = None
        else:
            self._append(_open_tag(self._raw(tag), attrs, ""))

    def handle_startendtag(self, tag: str, attrs: Attrs) -> None:
        if _is_example(tag) or tag == "file":
            self.handle_starttag(tag, attrs)
            self.handle_endtag(tag)
        else:
            self._append(_open_tag(self._raw(tag), self._raw_attrs(attrs), "/"))

    def handle_endtag(self, tag: str) -> None:
        if _is_example(tag):
            self._flush_text()
            if self._example is not None:
                self.segments.append(self._example)
            self._example = None
            self._file = None
        elif tag == "file":
            if self._file is None:
                # Stray </file>: nothing was opened, keep the text as-is
                self._append("</file>")
                return
            self._file.content = self._text or ""
            self._text = None
            if self._example is None:
                self._example = ExampleBlock()
            self._example.files.append(self._file)
            self._file = None
        else:
            self._append(f"</{self._raw(tag)}>")

    def handle_data(self, data: str) -> None:
        self._append(self._raw(data))

    def close(self) -> None:
        super().close()
        if self._text is not None:
            self.segments.append(self._text)
            self._text = None


def parse_markup(text: str) -> list[MarkupSegment]:
    """Split markup into plain strings and ExampleBlock segments, in order."""
    amp = _ampersand_stand_in(text)
    segmenter = _MarkupSegmenter(amp)
    segmenter.feed(text.replace("&", amp))
    segmenter.close()
    return segmenter.segments
