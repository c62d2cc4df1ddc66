"""Public mutation API used by collectors.

Every operation takes the run's ``ReconciliationContext`` first. Calls whose
outcome depends on who reported the fact take a keyword-only ``source``.
"""

from __future__ import annotations

from .authors import (
    get_or_add_author,
    retire_eligible_authors,
    update_author,
    update_authors_last_seen,
)
from .catalog_text import set_catalog_note, set_report_footer, set_report_header, set_review_date
from .context import DEFAULT_RETIREMENT_MONTHS, ReconciliationContext
from .groups import (
    add_compatibility,
    add_group,
    add_group_member,
    remove_compatibility,
    remove_group,
    remove_group_member,
)
from .mods import (
    add_alternative,
    add_recommendation,
    add_required_assets,
    add_required_dlc,
    add_required_mod,
    add_successor,
    get_or_add_mod,
    remove_alternative,
    remove_mod,
    remove_recommendation,
    remove_required_dlc,
    remove_required_mod,
    remove_successor,
    update_mod,
)
from .statuses import STATUS_CONFLICTS, add_status, remove_status

__all__ = [  # noqa: RUF022
    # context
    "DEFAULT_RETIREMENT_MONTHS",
    "ReconciliationContext",
    # mods
    "get_or_add_mod",
    "update_mod",
    "remove_mod",
    "add_required_assets",
    "add_required_dlc",
    "remove_required_dlc",
    "add_required_mod",
    "remove_required_mod",
    "add_successor",
    "remove_successor",
    "add_alternative",
    "remove_alternative",
    "add_recommendation",
    "remove_recommendation",
    # statuses
    "STATUS_CONFLICTS",
    "add_status",
    "remove_status",
    # authors
    "get_or_add_author",
    "update_author",
    "update_authors_last_seen",
    "retire_eligible_authors",
    # groups and compatibilities
    "add_group",
    "remove_group",
    "add_group_member",
    "remove_group_member",
    "add_compatibility",
    "remove_compatibility",
    # catalog
    "set_catalog_note",
    "set_report_header",
    "set_report_footer",
    "set_review_date",
]
