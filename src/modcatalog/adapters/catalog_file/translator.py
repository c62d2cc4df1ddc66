"""Translate between catalog documents and domain entities."""

from __future__ import annotations

from logging import getLogger

from modcatalog.domain.model import (
    Author,
    Catalog,
    Compatibility,
    Group,
    Mod,
    infer_sources,
)

from .schema import (
    AuthorDocument,
    CatalogDocument,
    CompatibilityDocument,
    GroupDocument,
    ModDocument,
)

log = getLogger(__name__)


def catalog_from_document(document: CatalogDocument) -> Catalog:
    """Build a catalog with fresh lookup indices from a parsed document.

    Raises ``ValueError`` for documents that violate entity invariants, such
    as two mods sharing an identifier.
    """

    mods = [_mod_from_document(item) for item in document.mods]
    seen: set[int] = set()
    for mod in mods:
        if mod.steam_id in seen:
            raise ValueError(f"Duplicate mod identifier {mod.steam_id}")
        seen.add(mod.steam_id)

    catalog = Catalog(
        version=document.version,
        structure_version=document.structure_version,
        update_date=document.update_date,
        compatible_game_version=document.compatible_game_version,
        note=document.note,
        report_header_text=document.report_header_text,
        report_footer_text=document.report_footer_text,
        mods=mods,
        compatibilities=[
            Compatibility(
                first_mod_id=item.first_mod_id,
                second_mod_id=item.second_mod_id,
                status=item.status,
                note=item.note,
            )
            for item in document.compatibilities
        ],
        groups=[
            Group(group_id=item.group_id, name=item.name, members=list(item.members))
            for item in document.groups
        ],
        authors=[_author_from_document(item) for item in document.authors],
        required_assets=list(document.required_assets),
    )
    log.debug(
        "Catalog %s: %d mods, %d groups, %d compatibilities, %d authors.",
        catalog.version_string(),
        len(catalog.mods),
        len(catalog.groups),
        len(catalog.compatibilities),
        len(catalog.authors),
    )
    return catalog


def _mod_from_document(item: ModDocument) -> Mod:
    required_dlc = list(dict.fromkeys(item.required_dlc))
    required_mods = list(dict.fromkeys(item.required_mods))
    dlc_sources = item.required_dlc_sources
    if dlc_sources is None:
        dlc_sources = infer_sources(required_dlc, item.exclusion_for_required_dlc)
    mod_sources = item.required_mod_sources
    if mod_sources is None:
        mod_sources = infer_sources(required_mods, item.exclusion_for_required_mods)

    mod = Mod(
        steam_id=item.steam_id,
        name=item.name,
        published=item.published,
        updated=item.updated,
        author_id=item.author_id,
        author_url=item.author_url,
        archive_url=item.archive_url,
        source_url=item.source_url,
        compatible_game_version=item.compatible_game_version,
        required_dlc=required_dlc,
        required_mods=required_mods,
        successors=list(item.successors),
        alternatives=list(item.alternatives),
        recommendations=list(item.recommendations),
        stability=item.stability,
        stability_note=item.stability_note,
        statuses=list(dict.fromkeys(item.statuses)),
        generic_note=item.generic_note,
        exclusion_for_source_url=item.exclusion_for_source_url,
        exclusion_for_game_version=item.exclusion_for_game_version,
        exclusion_for_no_description=item.exclusion_for_no_description,
        exclusion_for_required_dlc=list(item.exclusion_for_required_dlc),
        exclusion_for_required_mods=list(item.exclusion_for_required_mods),
        # Provenance only for entries that are actually present
        required_dlc_sources={k: v for k, v in dlc_sources.items() if k in required_dlc},
        required_mod_sources={k: v for k, v in mod_sources.items() if k in required_mods},
        review_date=item.review_date,
        auto_review_date=item.auto_review_date,
        change_notes=list(item.change_notes),
    )
    mod.clamp_updated()
    return mod


def _author_from_document(item: AuthorDocument) -> Author:
    return Author(
        steam_id=item.steam_id,
        custom_url=item.custom_url,
        name=item.name,
        last_seen=item.last_seen,
        retired=item.retired,
        exclusion_for_retired=item.exclusion_for_retired,
        change_notes=list(item.change_notes),
    )


def catalog_to_document(catalog: Catalog) -> CatalogDocument:
    return CatalogDocument(
        version=catalog.version,
        structure_version=catalog.structure_version,
        update_date=catalog.update_date,
        compatible_game_version=catalog.compatible_game_version,
        note=catalog.note,
        report_header_text=catalog.report_header_text,
        report_footer_text=catalog.report_footer_text,
        mods=[_mod_to_document(mod) for mod in catalog.mods],
        compatibilities=[
            CompatibilityDocument(
                first_mod_id=item.first_mod_id,
                second_mod_id=item.second_mod_id,
                status=item.status,
                note=item.note,
            )
            for item in catalog.compatibilities
        ],
        groups=[
            GroupDocument(group_id=group.group_id, name=group.name, members=list(group.members))
            for group in catalog.groups
        ],
        authors=[
            AuthorDocument(
                steam_id=author.steam_id,
                custom_url=author.custom_url,
                name=author.name,
                last_seen=author.last_seen,
                retired=author.retired,
                exclusion_for_retired=author.exclusion_for_retired,
                change_notes=list(author.change_notes),
            )
            for author in catalog.authors
        ],
        required_assets=list(catalog.required_assets),
    )


def _mod_to_document(mod: Mod) -> ModDocument:
    return ModDocument(
        steam_id=mod.steam_id,
        name=mod.name,
        published=mod.published,
        updated=mod.updated,
        author_id=mod.author_id,
        author_url=mod.author_url,
        archive_url=mod.archive_url,
        source_url=mod.source_url,
        compatible_game_version=mod.compatible_game_version,
        required_dlc=list(mod.required_dlc),
        required_mods=list(mod.required_mods),
        successors=list(mod.successors),
        alternatives=list(mod.alternatives),
        recommendations=list(mod.recommendations),
        stability=mod.stability,
        stability_note=mod.stability_note,
        statuses=list(mod.statuses),
        generic_note=mod.generic_note,
        exclusion_for_source_url=mod.exclusion_for_source_url,
        exclusion_for_game_version=mod.exclusion_for_game_version,
        exclusion_for_no_description=mod.exclusion_for_no_description,
        exclusion_for_required_dlc=list(mod.exclusion_for_required_dlc),
        exclusion_for_required_mods=list(mod.exclusion_for_required_mods),
        required_dlc_sources=dict(mod.required_dlc_sources),
        required_mod_sources=dict(mod.required_mod_sources),
        review_date=mod.review_date,
        auto_review_date=mod.auto_review_date,
        change_notes=list(mod.change_notes),
    )


__all__ = ["catalog_from_document", "catalog_to_document"]
