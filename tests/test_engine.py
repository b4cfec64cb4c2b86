from bs4 import BeautifulSoup
import pytest

from icecap import IceCap, InvalidArgumentError, InvalidStateError, WriteMode


def _open(html: str, **options: bool) -> IceCap:
    return IceCap(html, {"auto_close": False, **options})


def test_text_fills_named_marker() -> None:
    ice = IceCap('<p data-ice="name"></p>')
    ice.text("name", "Alice")
    assert ice.html == '<p data-ice="name">Alice</p>'


def test_text_write_overwrites_previous_value() -> None:
    ice = _open('<p data-ice="name">old</p>')
    ice.text("name", "Alice", "write")
    ice.text("name", "Bob", IceCap.MODE_WRITE)
    assert ice.html == '<p data-ice="name">Bob</p>'


@pytest.mark.parametrize(
    ("mode", "value", "expected"),
    [
        (WriteMode.APPEND, "!", "Hello World!"),
        (WriteMode.PREPEND, ">> ", "&gt;&gt; Hello World"),
        (WriteMode.WRITE, "Bye", "Bye"),
        (WriteMode.REMOVE, "o", "Hell Wrld"),
        (WriteMode.REMOVE, r"\s+W", "Helloorld"),
    ],
)
def test_text_modes(mode: WriteMode, value: str, expected: str) -> None:
    ice = _open('<p data-ice="msg">Hello World</p>')
    ice.text("msg", value, mode)
    assert ice.html == f'<p data-ice="msg">{expected}</p>'


def test_text_is_escaped() -> None:
    ice = _open('<p data-ice="msg"></p>')
    ice.text("msg", "<b>bold</b> & co")
    assert ice.html == '<p data-ice="msg">&lt;b&gt;bold&lt;/b&gt; &amp; co</p>'


def test_text_applies_to_every_matching_marker() -> None:
    ice = _open('<p data-ice="x">a</p><p data-ice="x">b</p>')
    ice.text("x", "!")
    assert ice.html == '<p data-ice="x">a!</p><p data-ice="x">b!</p>'


def test_text_coerces_non_string_values() -> None:
    ice = _open('<span data-ice="count"></span>')
    ice.text("count", 42)
    assert ice.html == '<span data-ice="count">42</span>'


def test_auto_drop_removes_marker_on_empty_text() -> None:
    ice = IceCap('<div><span data-ice="x">keep</span></div>', {"auto_drop": True})
    ice.text("x", "")
    assert ice.html == "<div></div>"


def test_auto_drop_removes_marker_on_missing_text() -> None:
    ice = _open('<span data-ice="x">keep</span>')
    ice.text("x", None)
    assert ice.html == ""


def test_without_auto_drop_empty_text_is_written() -> None:
    ice = _open('<span data-ice="x">keep</span>', auto_drop=False)
    ice.text("x", "")
    assert ice.html == '<span data-ice="x">keep</span>'
    ice.text("x", None, "write")
    assert ice.html == '<span data-ice="x"></span>'


def test_attr_modes() -> None:
    ice = _open('<a class="btn" data-ice="link"></a>')
    ice.attr("link", "class", " primary")
    ice.attr("link", "href", "/home")
    ice.attr("link", "title", "Go ", "prepend")
    assert ice.html == '<a class="btn primary" data-ice="link" href="/home" title="Go "></a>'

    ice.attr("link", "class", r"\s*btn", "remove")
    ice.attr("link", "href", "/about", "write")
    assert ice.html == '<a class=" primary" data-ice="link" href="/about" title="Go "></a>'


def test_attr_is_written_even_when_empty() -> None:
    ice = _open('<a data-ice="link"></a>', auto_drop=True)
    ice.attr("link", "href", None)
    assert ice.html == '<a data-ice="link" href=""></a>'


def test_attr_on_tag_with_multi_valued_class() -> None:
    soup = BeautifulSoup('<div><p class="a b" data-ice="x"></p></div>', "html.parser")
    ice = IceCap(soup.div, {"auto_close": False})
    ice.attr("x", "class", " c")
    assert ice.html == '<p class="a b c" data-ice="x"></p>'


def test_load_inserts_markup_and_hides_loaded_flag() -> None:
    ice = _open('<div data-ice="body"><i>a</i></div>')
    ice.load("body", "<b>b</b>")
    assert ice.html == '<div data-ice="body"><i>a</i><b>b</b></div>'
    assert "data-ice-loaded" not in ice.html
    assert ice.root is not None
    assert ice.root.find(attrs={"data-ice-loaded": "1"}) is not None


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        ("append", "<i>a</i><b>b</b>"),
        ("prepend", "<b>b</b><i>a</i>"),
        ("write", "<b>b</b>"),
    ],
)
def test_load_modes(mode: str, expected: str) -> None:
    ice = _open('<div data-ice="body"><i>a</i></div>')
    ice.load("body", "<b>b</b>", mode)
    assert ice.html == f'<div data-ice="body">{expected}</div>'


def test_load_remove_mode_strips_pattern_from_markup() -> None:
    ice = _open('<div data-ice="body"><br/>x<br/>y</div>')
    ice.load("body", "<br/>", "remove")
    assert ice.html == '<div data-ice="body">xy</div>'


def test_load_accepts_another_engine() -> None:
    child = IceCap('<b data-ice="v"></b>')
    child.text("v", "hi")
    parent = _open('<div data-ice="slot"></div>')
    parent.load("slot", child)
    assert parent.html == '<div data-ice="slot"><b data-ice="v">hi</b></div>'
    assert child.closed


def test_loaded_regions_are_excluded_from_lookups() -> None:
    ice = _open('<div data-ice="outer"></div>')
    ice.load("outer", '<span data-ice="inner"></span>')
    assert ice.resolve("inner") == []
    ice.text("inner", "ignored")
    assert ice.html == '<div data-ice="outer"><span data-ice="inner"></span></div>'


def test_load_empty_content_drops_marker() -> None:
    ice = _open('<p>a</p><div data-ice="slot">x</div>')
    ice.load("slot", None)
    assert ice.html == "<p>a</p>"


def test_load_empty_content_without_auto_drop_flags_marker() -> None:
    ice = _open('<div data-ice="slot">x</div>', auto_drop=False)
    ice.load("slot", "", "write")
    assert ice.html == '<div data-ice="slot"></div>'
    assert ice.root is not None
    assert ice.root.div is not None
    assert ice.root.div.get("data-ice-loaded") == "1"


def test_unknown_mode_fails_before_touching_nodes() -> None:
    html = '<p data-ice="x">a</p><p data-ice="x">b</p>'
    ice = _open(html)
    with pytest.raises(InvalidArgumentError, match="unknown mode"):
        ice.text("x", "!", "bogus")
    with pytest.raises(InvalidArgumentError, match="unknown mode"):
        ice.attr("x", "class", "y", "bogus")
    with pytest.raises(InvalidArgumentError, match="unknown mode"):
        ice.load("x", "<b></b>", "bogus")
    assert ice.html == html


def test_invalid_pattern_in_remove_mode() -> None:
    ice = _open('<p data-ice="x">a(b</p>')
    with pytest.raises(InvalidArgumentError, match="invalid pattern"):
        ice.text("x", "(", "remove")
    assert ice.html == '<p data-ice="x">a(b</p>'


def test_missing_marker_is_not_an_error() -> None:
    html = '<p data-ice="x">a</p>'
    ice = _open(html)
    ice.text("nope", "v").attr("nope", "k", "v").load("nope", "<b></b>").drop("nope")
    ice.loop("nope", ["a"], "text").into("nope", "value", lambda value, child: None)
    assert ice.html == html


def test_resolve_requires_an_id() -> None:
    ice = _open("<p></p>")
    with pytest.raises(InvalidArgumentError, match="id must be specified"):
        ice.text("", "x")


@pytest.mark.parametrize("source", ["", None, 42])
def test_construction_requires_markup(source: object) -> None:
    with pytest.raises(InvalidArgumentError):
        IceCap(source)  # type: ignore[arg-type]


def test_wraps_existing_tag_without_copying() -> None:
    soup = BeautifulSoup('<section><p data-ice="a"></p></section>', "html.parser")
    ice = IceCap(soup.section, {"auto_close": False})
    ice.text("a", "x")
    assert str(soup) == '<section><p data-ice="a">x</p></section>'
    assert ice.html == '<p data-ice="a">x</p>'


def test_close_invalidates_mutations_but_keeps_output() -> None:
    ice = _open('<p data-ice="a"></p>')
    ice.text("a", "x")
    ice.close()
    assert ice.closed
    assert ice.root is None
    for operation in (
        lambda: ice.text("a", "y"),
        lambda: ice.attr("a", "k", "v"),
        lambda: ice.load("a", "<b></b>"),
        lambda: ice.loop("a", ["y"], "text"),
        lambda: ice.into("a", "y", lambda value, child: None),
        lambda: ice.drop("a"),
    ):
        with pytest.raises(InvalidStateError):
            operation()
    assert ice.html == '<p data-ice="a">x</p>'
    assert ice.close() is ice


def test_auto_close_finalizes_on_read() -> None:
    ice = IceCap('<p data-ice="a"></p>')
    ice.text("a", "x")
    assert ice.html == '<p data-ice="a">x</p>'
    assert ice.closed
    assert ice.html == '<p data-ice="a">x</p>'


def test_peek_output_keeps_instance_open() -> None:
    ice = IceCap('<p data-ice="a"></p>')
    assert ice.peek_output() == '<p data-ice="a"></p>'
    assert str(ice) == '<p data-ice="a"></p>'
    assert not ice.closed
    ice.text("a", "x")
    assert ice.finalize() == '<p data-ice="a">x</p>'
    assert ice.closed


def test_option_properties_are_writable() -> None:
    ice = IceCap("<p></p>")
    assert ice.auto_close and ice.auto_drop
    ice.auto_close = False
    ice.auto_drop = False
    assert ice.options.auto_close is False
    assert ice.options.auto_drop is False
    _ = ice.html
    assert not ice.closed


def test_invalid_option_assignment_raises_invalid_argument() -> None:
    ice = IceCap("<p></p>")
    with pytest.raises(InvalidArgumentError, match="invalid option auto_close"):
        ice.auto_close = "sometimes"  # type: ignore[assignment]
    with pytest.raises(InvalidArgumentError, match="invalid option auto_drop"):
        ice.auto_drop = "sometimes"  # type: ignore[assignment]
    assert ice.auto_close is True
    assert ice.auto_drop is True


def test_load_with_bad_pattern_leaves_content_engine_open() -> None:
    child = IceCap('<b data-ice="v">(</b>')
    parent = _open('<div data-ice="slot">x</div>')
    with pytest.raises(InvalidArgumentError, match="invalid pattern"):
        parent.load("slot", child, "remove")
    assert not child.closed
    assert parent.html == '<div data-ice="slot">x</div>'
    assert child.html == '<b data-ice="v">(</b>'
    assert child.closed
