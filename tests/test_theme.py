"""Tests for non-destructive theme composition and the default layout.

The composition tests use a tiny base theme whose render function lists the
slot content it receives, so the base/derived relationship can be checked
without parsing HTML. The layout tests render the default theme and inspect
the markup with BeautifulSoup.

Usage
-----
Run ``pytest tests/test_theme.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup
from jinja2 import DictLoader, Environment

from docsite.config import SiteConfigBuilder, head_tag, leaf, link, section
from docsite.config.theme import register_globals, template_slot
from docsite.theme import (
    DEFAULT_SLOTS,
    BaseTheme,
    SlotBinding,
    SlotCollisionWarning,
    ThemeComposer,
    default_theme,
    with_base,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pytest_mock import MockerFixture

    from docsite.config import SiteConfig
    from docsite.theme import LayoutContext, SlotRenderer


def _list_render(
    context: LayoutContext,
    slots: cabc.Mapping[str, SlotRenderer],
    environment: Environment,
) -> str:
    template = environment.get_template("page.jinja")
    filled = {name: slots[name](context) for name in sorted(slots)}
    return template.render(path=context.path, filled=filled)


@pytest.fixture
def list_theme() -> BaseTheme:
    """Return a base theme exposing two slots and a plain template."""
    environment = Environment(
        loader=DictLoader(
            {
                "page.jinja": (
                    "{{ path }}|{% for name, html in filled.items() %}"
                    "{{ name }}={{ html }};{% endfor %}{{ project | default('') }}"
                )
            }
        ),
        autoescape=False,
    )
    return BaseTheme(
        name="list",
        render=_list_render,
        environment=environment,
        slots=frozenset({"doc-before", "doc-after"}),
    )


@pytest.fixture
def plain_site() -> SiteConfig:
    """Return a minimal site used only to build layout contexts."""
    return SiteConfigBuilder("SilentCast").build()


def test_zero_bindings_match_base(list_theme: BaseTheme, plain_site: SiteConfig) -> None:
    """A composition with no bindings renders exactly like the base."""
    context = plain_site.page_context("/guide/")
    composed = ThemeComposer(list_theme).compose()
    assert composed.layout(context) == list_theme.layout(context)
    assert composed.warnings == ()


def test_slot_content_is_injected(list_theme: BaseTheme, plain_site: SiteConfig) -> None:
    """Bound renderers receive the page context."""
    composed = (
        ThemeComposer(list_theme)
        .bind("doc-after", lambda ctx: f"after:{ctx.path}")
        .compose()
    )
    output = composed.layout(plain_site.page_context("/guide/"))
    assert output == "/guide/|doc-after=after:/guide/;", output


def test_duplicate_binding_warns_and_last_wins(
    list_theme: BaseTheme, plain_site: SiteConfig
) -> None:
    """Re-binding a slot is a warned, deterministic replacement."""
    composer = ThemeComposer(list_theme).bind("doc-before", lambda ctx: "first")
    with pytest.warns(SlotCollisionWarning, match="doc-before"):
        composer.bind("doc-before", lambda ctx: "second")
    composed = composer.compose()

    output = composed.layout(plain_site.page_context("/"))
    assert "doc-before=second;" in output, output
    assert "first" not in output, "earlier binding must be replaced"
    assert composed.collisions == ("doc-before",)


def test_bind_all_applies_in_order(list_theme: BaseTheme, plain_site: SiteConfig) -> None:
    """Bulk bindings keep their declared order."""
    bindings = [
        SlotBinding("doc-before", lambda ctx: "a"),
        SlotBinding("doc-after", lambda ctx: "b"),
    ]
    composed = ThemeComposer(list_theme).bind_all(bindings).compose()
    assert composed.layout(plain_site.page_context("/")) == "/|doc-after=b;doc-before=a;"


def test_empty_slot_name_rejected(list_theme: BaseTheme) -> None:
    """Slot bindings need a name."""
    with pytest.raises(ValueError, match="slot name"):
        ThemeComposer(list_theme).bind("  ", lambda ctx: "")


def test_unknown_slot_is_recorded(list_theme: BaseTheme) -> None:
    """Slots the base does not expose are reported as warnings."""
    composed = ThemeComposer(list_theme).bind("hero", lambda ctx: "x").compose()
    assert composed.unknown_slots == ("hero",)
    assert composed.warnings == ("slot 'hero' is not exposed by theme 'list'",)


def test_enhancers_do_not_touch_base(
    list_theme: BaseTheme, plain_site: SiteConfig
) -> None:
    """App helpers land on the derived environment only."""
    composed = (
        ThemeComposer(list_theme)
        .enhance_app(register_globals({"project": "SilentCast"}))
        .compose()
    )
    context = plain_site.page_context("/")
    assert composed.layout(context).endswith("SilentCast")
    assert "project" not in list_theme.environment.globals, (
        "base environment globals must stay untouched"
    )
    assert not list_theme.layout(context).endswith("SilentCast")
    assert composed.base is list_theme


def test_template_slot_sees_build_globals() -> None:
    """Template slots render with globals registered by enhancers."""
    site = (
        SiteConfigBuilder("SilentCast")
        .theme(
            ThemeComposer(default_theme()).bind(
                "home-hero-before",
                template_slot('<p class="banner">v{{ build.version }}</p>'),
            )
        )
        .build(signals={"version": "2.0.0"})
    )
    soup = BeautifulSoup(site.render_page("/"), "html.parser")
    banner = soup.select_one("p.banner")
    assert banner is not None, "home hero slot must render on the home page"
    assert banner.get_text() == "v2.0.0"

    doc_page = BeautifulSoup(site.render_page("/guide/"), "html.parser")
    assert doc_page.select_one("p.banner") is None, "home slots only render on /"


def test_default_theme_exposes_documented_slots() -> None:
    """The default base theme exposes every documented slot."""
    theme = default_theme()
    assert theme.slots == frozenset(DEFAULT_SLOTS)
    assert theme.name == "default"


def test_layout_renders_sidebar_and_active_links(guide_site: SiteConfig) -> None:
    """The page chrome reflects the resolved sidebar and active entries."""
    soup = BeautifulSoup(
        guide_site.render_page("/guide/advanced/logging", title="Logging"),
        "html.parser",
    )

    assert soup.title is not None
    assert soup.title.get_text() == "Logging | SilentCast"
    titles = [node.get_text() for node in soup.select(".sidebar-section__title")]
    assert titles == ["Section B"], f"sidebar titles {titles!r}"
    details = soup.select_one("details.sidebar-section")
    assert details is not None, "collapsible sections render as <details>"
    assert details.has_attr("open"), "the section holding the page stays open"
    active = soup.select_one("a.sidebar-link.is-active")
    assert active is not None
    assert active["href"] == "/guide/advanced/logging"

    guide_link = soup.select_one("nav.nav-bar__menu > a.nav-link")
    assert guide_link is not None
    assert "is-active" in guide_link["class"]
    dropdown = soup.select_one(".nav-dropdown__label")
    assert dropdown is not None
    assert dropdown.get_text() == "v1.4.0"
    external = soup.select_one('a[href="https://github.com/example/silentcast/releases"]')
    assert external is not None
    assert external["target"] == "_blank"


def test_layout_without_sidebar(guide_site: SiteConfig) -> None:
    """Pages outside every prefix render without a sidebar."""
    soup = BeautifulSoup(guide_site.render_page("/contributing"), "html.parser")
    assert soup.select_one("aside.sidebar") is None
    contributing = soup.select_one('a[href="/contributing"]')
    assert contributing is not None
    assert "is-active" in contributing["class"]


def test_layout_emits_head_and_search() -> None:
    """Head tags, search wiring, and page content appear in the output."""
    site = (
        SiteConfigBuilder("SilentCast", base="/silentcast/")
        .nav(link("Guide", "/guide/"))
        .sidebar("/guide/", section("Basics", leaf("Install", "/guide/install")))
        .metadata(
            head_tags=[
                head_tag("link", rel="icon", href="/logo.svg"),
                head_tag("meta", name="theme-color", content_="#5f67ee"),
            ]
        )
        .build()
    )
    soup = BeautifulSoup(
        site.render_page("/guide/install", content_html="<h1>Install</h1>"),
        "html.parser",
    )

    icon = soup.select_one('head link[rel="icon"]')
    assert icon is not None
    assert icon["href"] == "/silentcast/logo.svg"
    meta = soup.select_one('head meta[name="theme-color"]')
    assert meta is not None
    assert meta["content"] == "#5f67ee"

    search = soup.select_one("#search")
    assert search is not None
    assert search["data-provider"] == "local"
    button = search.select_one("button")
    assert button is not None
    assert button.get_text() == "Search"

    hrefs = [anchor["href"] for anchor in soup.select("a.nav-link, a.sidebar-link")]
    assert hrefs == ["/silentcast/guide/", "/silentcast/guide/install"], (
        f"internal links must be served under the base, got {hrefs!r}"
    )
    title_link = soup.select_one("a.nav-bar__title")
    assert title_link is not None
    assert title_link["href"] == "/silentcast/"

    heading = soup.select_one("article.doc h1")
    assert heading is not None
    assert heading.get_text() == "Install"
    sidebar_title = soup.select_one("section.sidebar-section h2")
    assert sidebar_title is not None, "sections without a collapse flag are static"


def test_render_page_requires_theme() -> None:
    """A configuration without a composed theme cannot render pages."""
    from docsite.config import SiteConfig, SiteMetadata

    site = SiteConfig(metadata=SiteMetadata(title="SilentCast"))
    with pytest.raises(RuntimeError, match="No theme"):
        site.render_page("/")


@pytest.mark.parametrize(
    ("target", "base", "expected"),
    [
        ("/guide/install", "/silentcast/", "/silentcast/guide/install"),
        ("/logo.svg", "/silentcast/", "/silentcast/logo.svg"),
        ("/guide/", "/", "/guide/"),
        ("https://github.com/example", "/silentcast/", "https://github.com/example"),
        ("//cdn.example.com/a.js", "/silentcast/", "//cdn.example.com/a.js"),
        ("mailto:team@example.com", "/silentcast/", "mailto:team@example.com"),
    ],
)
def test_with_base(target: str, base: str, expected: str) -> None:
    """Only internal paths are served under the deployment base."""
    assert with_base(target, base) == expected, f"{target!r} under {base!r}"


def test_external_nav_links_ignore_base() -> None:
    """External targets and the logo render correctly under a base path."""
    site = (
        SiteConfigBuilder("SilentCast", base="/silentcast/")
        .nav(link("Releases", "https://github.com/example/silentcast/releases"))
        .metadata(logo="/logo.svg")
        .build()
    )
    soup = BeautifulSoup(site.render_page("/"), "html.parser")
    external = soup.select_one("a.nav-link")
    assert external is not None
    assert external["href"] == "https://github.com/example/silentcast/releases"
    logo = soup.select_one("img.nav-bar__logo")
    assert logo is not None
    assert logo["src"] == "/silentcast/logo.svg"


def test_template_slot_compiles_once(mocker: MockerFixture) -> None:
    """Slot templates are compiled once per composed environment."""
    site = (
        SiteConfigBuilder("SilentCast")
        .theme(
            ThemeComposer(default_theme()).bind(
                "doc-after", template_slot("<p>{{ ctx.path }}</p>")
            )
        )
        .build()
    )
    assert site.theme is not None
    spy = mocker.spy(site.theme.environment, "from_string")

    first = site.render_page("/guide/a")
    second = site.render_page("/guide/b")

    assert spy.call_count == 1, f"expected one compilation, got {spy.call_count}"
    assert "<p>/guide/a</p>" in first
    assert "<p>/guide/b</p>" in second


def test_build_leaves_caller_composer_untouched() -> None:
    """Building a site never adds helpers to the composer it was given."""
    composer = ThemeComposer(default_theme()).bind("doc-after", lambda ctx: "x")
    builder = SiteConfigBuilder("SilentCast").theme(composer)

    first = builder.build(signals={"version": "1.0.0"})
    second = builder.build(signals={"version": "2.0.0"})

    assert "build" not in composer.compose().environment.globals, (
        "build globals must only land on the built site's theme"
    )
    assert first.theme is not None
    assert second.theme is not None
    assert first.theme.environment.globals["build"] == {"version": "1.0.0"}
    assert second.theme.environment.globals["build"] == {"version": "2.0.0"}
    assert second.warnings == (), "repeated builds must not record collisions"
