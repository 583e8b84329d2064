"""Search and site-metadata configuration builders."""

from __future__ import annotations

import types

from .helpers import _flatten_translations, _optional_bool, _optional_str, _string_mapping
from .models import (
    ConfigProblem,
    EditLinkConfig,
    FooterConfig,
    HeadTag,
    SearchConfig,
    SearchProvider,
    SiteMetadata,
    SocialLink,
)


def _build_search_config(
    payload: object, problems: list[ConfigProblem]
) -> SearchConfig:
    """Build the search provider selection and its UI strings."""
    match payload:
        case None:
            return SearchConfig()
        case dict() as data:
            pass
        case _:
            problems.append(ConfigProblem("search", "search must be a mapping"))
            return SearchConfig()

    raw_provider = str(data.get("provider", SearchProvider.LOCAL.value)).strip().lower()
    try:
        provider = SearchProvider(raw_provider)
    except ValueError:
        known = ", ".join(member.value for member in SearchProvider)
        problems.append(
            ConfigProblem(
                "search.provider", f"unknown provider {raw_provider!r} (known: {known})"
            )
        )
        provider = SearchProvider.LOCAL

    translations: dict[str, str] = {}
    match data.get("translations"):
        case None:
            pass
        case dict() as table:
            if provider is SearchProvider.LOCAL:
                translations = _flatten_translations(table)
        case _:
            problems.append(
                ConfigProblem("search.translations", "translations must be a mapping")
            )

    return SearchConfig(
        provider=provider,
        translations=types.MappingProxyType(translations),
        options=_string_mapping(data.get("options"), "search.options", problems),
    )


def _build_site_metadata(
    payload: object, problems: list[ConfigProblem]
) -> SiteMetadata:
    """Build global title, description, head tags, and footer metadata."""
    match payload:
        case dict() as data:
            pass
        case _:
            problems.append(ConfigProblem("site", "site metadata must be a mapping"))
            return SiteMetadata(title="")

    last_updated = _optional_bool(
        data.get("last_updated"), "site.last_updated", problems
    )
    return SiteMetadata(
        title=_optional_str(data.get("title")) or "",
        description=_optional_str(data.get("description")) or "",
        base=_optional_str(data.get("base")) or "/",
        lang=_optional_str(data.get("lang")) or "en-US",
        head_tags=_build_head_tags(data.get("head"), problems),
        footer=_build_footer(data.get("footer"), problems),
        social_links=_build_social_links(data.get("social_links"), problems),
        edit_link=_build_edit_link(data.get("edit_link"), problems),
        last_updated=bool(last_updated),
        logo=_optional_str(data.get("logo")),
    )


def _build_head_tags(
    entries: object, problems: list[ConfigProblem]
) -> tuple[HeadTag, ...]:
    """Build ordered ``<head>`` elements such as icons and social previews."""
    match entries:
        case None:
            return ()
        case list() as items:
            iterable = items
        case _:
            problems.append(ConfigProblem("site.head", "head must be a list"))
            return ()
    tags: list[HeadTag] = []
    for index, entry in enumerate(iterable):
        location = f"site.head[{index}]"
        match entry:
            case {"tag": tag, **rest}:
                pass
            case _:
                problems.append(ConfigProblem(location, "head entries require a 'tag'"))
                continue
        tags.append(
            HeadTag(
                tag=str(tag or "").strip(),
                attrs=_string_mapping(rest.get("attrs"), f"{location}.attrs", problems),
                content=_optional_str(rest.get("content")),
            )
        )
    return tuple(tags)


def _build_footer(
    payload: object, problems: list[ConfigProblem]
) -> FooterConfig | None:
    match payload:
        case None:
            return None
        case dict() as data:
            return FooterConfig(
                message=_optional_str(data.get("message")),
                copyright=_optional_str(data.get("copyright")),
            )
        case _:
            problems.append(ConfigProblem("site.footer", "footer must be a mapping"))
            return None


def _build_social_links(
    entries: object, problems: list[ConfigProblem]
) -> tuple[SocialLink, ...]:
    match entries:
        case None:
            return ()
        case list() as items:
            iterable = items
        case _:
            problems.append(
                ConfigProblem("site.social_links", "social links must be a list")
            )
            return ()
    links: list[SocialLink] = []
    for index, entry in enumerate(iterable):
        match entry:
            case {"icon": icon, "link": link, **rest} if icon and link:
                links.append(
                    SocialLink(
                        icon=str(icon),
                        link=str(link),
                        aria_label=_optional_str(rest.get("aria_label")),
                    )
                )
            case _:
                problems.append(
                    ConfigProblem(
                        f"site.social_links[{index}]",
                        "social links require 'icon' and 'link'",
                    )
                )
    return tuple(links)


def _build_edit_link(
    payload: object, problems: list[ConfigProblem]
) -> EditLinkConfig | None:
    match payload:
        case None:
            return None
        case {"pattern": pattern, **rest} if _optional_str(pattern):
            return EditLinkConfig(
                pattern=str(pattern).strip(),
                text=_optional_str(rest.get("text")) or "Edit this page",
            )
        case _:
            problems.append(
                ConfigProblem("site.edit_link", "edit_link requires a 'pattern'")
            )
            return None


__all__ = ["_build_head_tags", "_build_search_config", "_build_site_metadata"]
