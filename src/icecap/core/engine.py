"""Marker-driven mutation engine for static HTML templates.

An :class:`IceCap` instance wraps a BeautifulSoup tree and exposes operations
targeting elements flagged with ``data-ice="<id>"``:

`text` / `attr` / `load`
: Combine a new value with the current text, attribute, or inner HTML of
  every matching marker using a :class:`WriteMode`.

`loop`
: Replace a marker with one clone per item, each clone being filled by its own
  child engine.

`into`
: Run a callback against a child engine scoped to each matching marker.

`drop`
: Remove matching markers.

Markers filled through ``load`` receive a transient ``data-ice-loaded`` flag.
Nodes below a flagged ancestor are invisible to later lookups so that an outer
template never reaches into content owned by a sub-template. The flag is
stripped from serialized output.

Example::

    ice = IceCap('<p data-ice="name"></p>')
    ice.text("name", "Alice")
    ice.html  # '<p data-ice="name">Alice</p>'
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import logging
from typing import Any, ClassVar

from bs4.element import PageElement, Tag
from pydantic import ValidationError

from . import markers
from .config import IceCapOptions, coerce_options
from .diagnostics import MARKER_NOT_FOUND, DiagnosticEmitter
from .exceptions import InvalidArgumentError, InvalidStateError
from .modes import LoopShorthand, WriteMode, compile_pattern


logger = logging.getLogger(__name__)

LoopCallback = Callable[[int, Any, "IceCap"], None]
IntoCallback = Callable[[Any, "IceCap"], None]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class IceCap:
    """Fill an HTML skeleton by mutating its ``data-ice`` markers."""

    MODE_APPEND: ClassVar[WriteMode] = WriteMode.APPEND
    MODE_WRITE: ClassVar[WriteMode] = WriteMode.WRITE
    MODE_REMOVE: ClassVar[WriteMode] = WriteMode.REMOVE
    MODE_PREPEND: ClassVar[WriteMode] = WriteMode.PREPEND

    CALLBACK_TEXT: ClassVar[LoopShorthand] = LoopShorthand.TEXT
    CALLBACK_LOAD: ClassVar[LoopShorthand] = LoopShorthand.LOAD

    debug: ClassVar[bool] = False

    def __init__(
        self,
        html: str | Tag,
        options: IceCapOptions | Mapping[str, Any] | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        if html is None or (isinstance(html, str) and not html):
            raise InvalidArgumentError("html must be specified.")

        self._options = coerce_options(options)

        if isinstance(html, str):
            self._root: Tag | None = markers.parse_document(html, self._options.parser)
        elif isinstance(html, Tag):
            self._root = html
        else:
            raise InvalidArgumentError(
                f"html must be markup or a BeautifulSoup tag. html = {html!r}"
            )

        self._emitter = emitter
        self._html: str | None = None

    @classmethod
    def set_debug(cls, enabled: bool) -> None:
        """Toggle ``marker_not_found`` diagnostics for every instance."""
        IceCap.debug = bool(enabled)

    @property
    def options(self) -> IceCapOptions:
        return self._options

    @property
    def auto_close(self) -> bool:
        return self._options.auto_close

    @auto_close.setter
    def auto_close(self, value: bool) -> None:
        self._set_option("auto_close", value)

    @property
    def auto_drop(self) -> bool:
        return self._options.auto_drop

    @auto_drop.setter
    def auto_drop(self, value: bool) -> None:
        self._set_option("auto_drop", value)

    def _set_option(self, name: str, value: Any) -> None:
        try:
            setattr(self._options, name, value)
        except ValidationError as exc:
            raise InvalidArgumentError(f"invalid option {name}: {exc}") from exc

    @property
    def closed(self) -> bool:
        return self._root is None

    @property
    def root(self) -> Tag | None:
        """The wrapped tree, or ``None`` once the instance is closed."""
        return self._root

    # Marker resolution -------------------------------------------------

    def resolve(self, marker_id: str) -> list[Tag]:
        """Return the markers matching ``marker_id`` outside loaded regions."""
        if self._root is None:
            raise InvalidStateError("can not operation after close.")
        if not marker_id:
            raise InvalidArgumentError("id must be specified.")

        nodes = markers.find_markers(self._root, marker_id)

        if not nodes:
            logger.debug("node not found. id = %s", marker_id)
            emitter = self._emitter
            if IceCap.debug and emitter is not None and emitter.debug_enabled:
                emitter.event(MARKER_NOT_FOUND, {"id": marker_id})

        return nodes

    # Write operations --------------------------------------------------

    def text(
        self, marker_id: str, value: Any, mode: WriteMode | str = WriteMode.APPEND
    ) -> IceCap:
        """Combine ``value`` with the text content of every matching marker."""
        write_mode = WriteMode.coerce(mode)
        nodes = self.resolve(marker_id)

        if self._options.auto_drop and _is_blank(value):
            markers.remove_all(nodes)
            return self

        text = _as_text(value)
        results = [write_mode.apply(node.get_text(), text) for node in nodes]
        for node, result in zip(nodes, results):
            node.string = result

        return self

    def attr(
        self,
        marker_id: str,
        key: str,
        value: Any,
        mode: WriteMode | str = WriteMode.APPEND,
    ) -> IceCap:
        """Combine ``value`` with attribute ``key`` of every matching marker."""
        write_mode = WriteMode.coerce(mode)
        nodes = self.resolve(marker_id)

        text = _as_text(value)
        results = [
            write_mode.apply(markers.coerce_attribute(node.get(key)), text) for node in nodes
        ]
        for node, result in zip(nodes, results):
            node[key] = result

        return self

    def load(
        self, marker_id: str, content: Any, mode: WriteMode | str = WriteMode.APPEND
    ) -> IceCap:
        """Insert ``content`` as markup into every matching marker.

        ``content`` may be another :class:`IceCap`, whose output is pulled on
        demand, or anything convertible to a string. Filled markers are flagged
        so their descendants are skipped by later lookups.
        """
        write_mode = WriteMode.coerce(mode)
        nodes = self.resolve(marker_id)

        # Reading an engine's html may close it; only do so once the call can succeed.
        html = content.peek_output() if isinstance(content, IceCap) else _as_text(content)
        if write_mode is WriteMode.REMOVE:
            compile_pattern(html)
        if isinstance(content, IceCap):
            html = content.html

        if self._options.auto_drop and not html:
            markers.remove_all(nodes)
            return self

        if write_mode is WriteMode.WRITE:
            results = [html for _ in nodes]
        else:
            results = [write_mode.apply(markers.inner_html(node), html) for node in nodes]

        for node, result in zip(nodes, results):
            markers.mark_loaded(node)
            markers.set_inner_html(node, result)

        return self

    # Structural operations ---------------------------------------------

    def loop(
        self,
        marker_id: str,
        values: Sequence[Any],
        callback: LoopCallback | LoopShorthand | str,
    ) -> IceCap:
        """Expand every matching marker into one clone per item of ``values``.

        ``callback`` receives ``(index, value, child)`` where ``child`` is an
        engine wrapping the clone for that item. The shorthands ``"text"`` and
        ``"html"`` write the value into the clone with :meth:`text` or
        :meth:`load`. An empty ``values`` removes the markers.
        """
        if not isinstance(values, Sequence) or isinstance(values, (str, bytes, bytearray)):
            raise InvalidArgumentError(f'values must be array. values = "{values}"')

        handler = self._loop_handler(marker_id, callback)
        nodes = self.resolve(marker_id)

        if not values:
            markers.remove_all(nodes)
            return self

        for node in nodes:
            fragments: list[PageElement] = []
            for index, value in enumerate(values):
                cloned = markers.clone(node)
                container = markers.make_container(cloned)
                handler(index, value, IceCap(container, self._options, self._emitter))
                # The callback may have dropped its own clone.
                if cloned.parent is container:
                    fragments.append(cloned.extract())
                    fragments.append(markers.separator())

            if node.parent is not None:
                node.insert_before(*fragments)
            elif self._root is not None:
                self._root.extend(fragments)
            node.extract()
            logger.debug("expanded marker %s into %d items", marker_id, len(values))

        return self

    def _loop_handler(
        self, marker_id: str, callback: LoopCallback | LoopShorthand | str
    ) -> LoopCallback:
        if isinstance(callback, str):
            shorthand = LoopShorthand.coerce(callback)
            if shorthand is LoopShorthand.TEXT:

                def _text(_index: int, value: Any, ice: IceCap) -> None:
                    ice.text(marker_id, value)

                return _text

            def _load(_index: int, value: Any, ice: IceCap) -> None:
                ice.load(marker_id, value)

            return _load

        if not callable(callback):
            raise InvalidArgumentError(f'callback must be function. callback = "{callback}"')
        return callback

    def into(self, marker_id: str, value: Any, callback: IntoCallback) -> IceCap:
        """Run ``callback(value, child)`` for every matching marker.

        ``child`` is an engine scoped to one marker. Markers are removed
        without calling ``callback`` when ``value`` is empty.
        """
        nodes = self.resolve(marker_id)

        if _is_blank(value) or (
            isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 0
        ):
            markers.remove_all(nodes)
            return self

        if not callable(callback):
            raise InvalidArgumentError(f'callback must be function. callback = "{callback}"')

        for node in nodes:
            callback(value, IceCap(node, self._options, self._emitter))

        return self

    def drop(self, marker_id: str, is_drop: bool = True) -> IceCap:
        """Remove every matching marker unless ``is_drop`` is false."""
        if not is_drop:
            return self

        markers.remove_all(self.resolve(marker_id))
        return self

    # Lifecycle ---------------------------------------------------------

    def peek_output(self) -> str:
        """Serialize the current tree without closing the instance."""
        if self._root is None:
            return self._html or ""

        loaded = markers.strip_loaded(self._root)
        try:
            self._html = self._root.decode_contents()
        finally:
            markers.restore_loaded(loaded)
        return self._html

    def finalize(self) -> str:
        """Serialize the tree, close the instance, and return the output."""
        self.close()
        return self._html or ""

    def close(self) -> IceCap:
        """Cache the output and release the tree. Closing twice is a no-op."""
        if self._root is None:
            return self

        self.peek_output()
        self._root = None
        logger.debug("closed template engine")
        return self

    @property
    def html(self) -> str:
        """Rendered HTML, closing the instance first when ``auto_close`` is set."""
        if self._root is None:
            return self._html or ""

        if self._options.auto_close:
            return self.finalize()
        return self.peek_output()

    def __str__(self) -> str:
        return self.peek_output()


__all__ = ["IceCap", "IntoCallback", "LoopCallback"]
