"""Owner of the three asset slots and the derived display state.

Every mutation follows the same single pass:
slot replacement -> trigger cache invalidation -> id/badge normalization ->
comparison -> result returned to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from assetsync.domain.model import SourceRole

from .apply import commit_generated, delete_local
from .badge import BadgeSelection, resolve_canonical_badge_name, resolve_display_badge
from .contracts import ComparisonContext, ComparisonResult, Diagnostics
from .engine import compare_sources, published_label
from .hooks import hooks_for
from .identity import allocate_local_id, resolve_canonical_id
from .source import AssetSource

if TYPE_CHECKING:
    from assetsync.domain.model import Asset, AssetKind

    from .hooks import KindHooks

log = getLogger(__name__)


class ReentrantRefreshError(RuntimeError):
    """Raised when a refresh is requested while another one is running."""


@dataclass(slots=True, eq=False)
class AssetReconciler:
    """Reconcile the generated, local and published copies of one asset."""

    kind: AssetKind
    context: ComparisonContext = field(default_factory=ComparisonContext)
    hooks: KindHooks | None = None

    generated: AssetSource = field(init=False)
    local: AssetSource = field(init=False)
    published: AssetSource = field(init=False)

    _result: ComparisonResult = field(init=False, default_factory=ComparisonResult)
    _id: int = field(init=False, default=0)
    _badge_name: str | None = field(init=False, default=None)
    _badge: BadgeSelection | None = field(init=False, default=None)
    _refreshing: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.hooks is None:
            self.hooks = hooks_for(self.kind)
        builder = self.hooks.build_triggers
        self.generated = AssetSource(SourceRole.GENERATED, build_triggers=builder)
        self.local = AssetSource(SourceRole.LOCAL, build_triggers=builder)
        self.published = AssetSource(SourceRole.PUBLISHED, build_triggers=builder)

    @property
    def result(self) -> ComparisonResult:
        return self._result

    @property
    def id(self) -> int:
        return self._id

    @property
    def badge_name(self) -> str | None:
        return self._badge_name

    @property
    def badge(self) -> BadgeSelection | None:
        return self._badge

    @property
    def other(self) -> AssetSource | None:
        if self._result.other is None:
            return None
        return self.source(self._result.other)

    @property
    def display_asset(self) -> Asset | None:
        """Asset whose title/description/points are shown."""

        return self.generated.asset or self.published.asset or self.local.asset

    @property
    def source_line(self) -> int:
        asset = self.generated.asset
        return asset.source_line if asset is not None else 0

    def source(self, role: SourceRole) -> AssetSource:
        return {
            SourceRole.GENERATED: self.generated,
            SourceRole.LOCAL: self.local,
            SourceRole.PUBLISHED: self.published,
        }[role]

    def load(
        self,
        *,
        generated: Asset | None = None,
        local: Asset | None = None,
        published: Asset | None = None,
    ) -> ComparisonResult:
        """Replace all three slots and recompute."""

        self.generated.set_asset(generated)
        self.local.set_asset(local)
        self.published.set_asset(published)
        return self.refresh()

    def refresh(self) -> ComparisonResult:
        if self._refreshing:
            raise ReentrantRefreshError("Refresh requested while a refresh is running")

        self._refreshing = True
        try:
            slots = {"generated": self.generated, "local": self.local, "published": self.published}
            self.published.label = published_label(self.published)
            self._id = resolve_canonical_id(**slots)
            self._badge_name = resolve_canonical_badge_name(**slots)
            self._badge = resolve_display_badge(
                local=self.local,
                published=self.published,
                default_badge_name=self._badge_name,
            )
            self._result = compare_sources(**slots, hooks=self.hooks, context=self.context)
        finally:
            self._refreshing = False

        log.debug(
            "Refreshed %s %s: state=%s, can_update=%s",
            self.kind.display_name,
            self._id,
            self._result.state,
            self._result.can_update,
        )
        return self._result

    def allocate_local_id(self, candidate: int) -> bool:
        allocated = allocate_local_id(
            candidate,
            generated=self.generated,
            local=self.local,
            published=self.published,
        )
        self.refresh()
        return allocated

    def commit(
        self,
        diagnostics: Diagnostics | None = None,
        *,
        validate_all: bool = False,
    ) -> ComparisonResult:
        """Promote the generated asset to the local slot."""

        assert self.hooks is not None
        commit_generated(
            generated=self.generated,
            local=self.local,
            hooks=self.hooks,
            canonical_id=self._id,
            badge_name=self._badge_name,
            diagnostics=diagnostics if diagnostics is not None else Diagnostics(),
            validate_all=validate_all,
        )
        return self.refresh()

    def delete(self, diagnostics: Diagnostics | None = None) -> ComparisonResult:
        assert self.hooks is not None
        delete_local(local=self.local, hooks=self.hooks, diagnostics=diagnostics)
        return self.refresh()
