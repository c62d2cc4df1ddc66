"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Source(StrEnum):
    """Who reported a fact to the reconciliation layer."""

    SCRAPER = "scraper"
    IMPORTER = "importer"


class Stability(StrEnum):
    NOT_REVIEWED = "NotReviewed"
    INCOMPATIBLE_ACCORDING_TO_WORKSHOP = "IncompatibleAccordingToWorkshop"
    REMOVED_FROM_GAME = "RemovedFromGame"
    BROKEN = "Broken"
    MAJOR_ISSUES = "MajorIssues"
    MINOR_ISSUES = "MinorIssues"
    USERS_REPORT_ISSUES = "UsersReportIssues"
    STABLE = "Stable"


class Status(StrEnum):
    UNLISTED_IN_WORKSHOP = "UnlistedInWorkshop"
    REMOVED_FROM_WORKSHOP = "RemovedFromWorkshop"
    NO_COMMENT_SECTION = "NoCommentSection"
    NO_DESCRIPTION = "NoDescription"
    NO_LONGER_NEEDED = "NoLongerNeeded"
    DEPRECATED = "Deprecated"
    ABANDONED = "Abandoned"
    BREAKS_EDITORS = "BreaksEditors"
    MODS_SAVEGAME = "ModsSavegame"
    SAVES_CANT_LOAD_WITHOUT = "SavesCantLoadWithout"
    SOURCE_UNAVAILABLE = "SourceUnavailable"
    SOURCE_BUNDLED = "SourceBundled"
    SOURCE_NOT_UPDATED = "SourceNotUpdated"
    SOURCE_OBFUSCATED = "SourceObfuscated"
    MUSIC_COPYRIGHTED = "MusicCopyrighted"
    MUSIC_COPYRIGHT_FREE = "MusicCopyrightFree"
    MUSIC_COPYRIGHT_UNKNOWN = "MusicCopyrightUnknown"


class CompatibilityStatus(StrEnum):
    SAME_MOD = "SameMod"
    SAME_FUNCTIONALITY = "SameFunctionality"
    INCOMPATIBLE = "Incompatible"
    MAJOR_ISSUES = "MajorIssues"
    MINOR_ISSUES = "MinorIssues"
    REQUIRES_SPECIFIC_SETTINGS = "RequiresSpecificSettings"
    COMPATIBLE_ACCORDING_TO_AUTHOR = "CompatibleAccordingToAuthor"


class DLC(StrEnum):
    DELUXE = "Deluxe"
    AFTER_DARK = "AfterDark"
    SNOWFALL = "Snowfall"
    MATCH_DAY = "MatchDay"
    NATURAL_DISASTERS = "NaturalDisasters"
    MASS_TRANSIT = "MassTransit"
    GREEN_CITIES = "GreenCities"
    PARKLIFE = "Parklife"
    INDUSTRIES = "Industries"
    CAMPUS = "Campus"
    SUNSET_HARBOR = "SunsetHarbor"
    AIRPORTS = "Airports"
    PLAZAS_AND_PROMENADES = "PlazasAndPromenades"
    FINANCIAL_DISTRICTS = "FinancialDistricts"


class ExclusionState(StrEnum):
    """Human-override state for a scraper-discoverable value.

    ``MANUAL``: a human decided the value; the scraper must leave it alone.
    ``PENDING_REAPPLICATION``: a human withdrew their own decision; the next
    scraper observation re-applies automatic discovery and resets to ``NONE``.
    """

    NONE = "none"
    MANUAL = "manual"
    PENDING_REAPPLICATION = "pending_reapplication"


class EntryKind(StrEnum):
    """Ledger record discriminator."""

    CATALOG = "catalog"
    NEW_MOD = "new_mod"
    NEW_GROUP = "new_group"
    NEW_COMPATIBILITY = "new_compatibility"
    NEW_AUTHOR = "new_author"
    UPDATED_MOD = "updated_mod"
    UPDATED_AUTHOR = "updated_author"
    REMOVED_MOD = "removed_mod"
    REMOVED_GROUP = "removed_group"
    REMOVED_COMPATIBILITY = "removed_compatibility"
