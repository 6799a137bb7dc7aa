"""Single-record store for the organization profile."""

from invoiceflow.application.action_logger import ActionLogger
from invoiceflow.config import get_logger
from invoiceflow.core.entities.action_log import OrganizationLogDetails
from invoiceflow.core.entities.organization import (
    DEFAULT_INVOICE_HEADER_COLOR,
    DEFAULT_THEME_ACCENT_COLOR,
    OrganizationDetails,
)
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore

logger = get_logger(__name__)


class OrganizationRepository:
    """Owns the organization profile. Created with defaults, never deleted."""

    def __init__(
        self,
        store: PersistentStore[OrganizationDetails | None],
        action_logger: ActionLogger,
        header_color: str = DEFAULT_INVOICE_HEADER_COLOR,
        accent_color: str = DEFAULT_THEME_ACCENT_COLOR,
    ):
        self._store = store
        self._action_logger = action_logger
        self._header_color = header_color
        self._accent_color = accent_color

    def defaults(self) -> OrganizationDetails:
        """The profile a fresh installation starts with."""
        return OrganizationDetails(
            company_name="",
            company_logo="",
            gst_number="",
            address="",
            contact_details="",
            invoice_header_color=self._header_color,
            theme_accent_color=self._accent_color,
        )

    async def get(self) -> OrganizationDetails:
        """Current profile with every missing or empty default field back-filled."""
        return self._backfilled(await self._store.read())

    async def set(self, details: OrganizationDetails) -> OrganizationDetails:
        """
        Merge defaults < previous < new and persist.

        Only fields explicitly set on ``details`` count as new; the rest keep
        their previous value.
        """
        new_values = details.model_dump(exclude_unset=True)

        async def merge(previous: OrganizationDetails | None) -> OrganizationDetails:
            merged = self.defaults().model_dump()
            if previous is not None:
                merged.update(previous.model_dump(exclude_unset=True))
            merged.update(new_values)
            return OrganizationDetails(**merged)

        result = await self._store.mutate(merge)
        await self._action_logger.log_action(
            "Updated Organization Settings",
            OrganizationLogDetails(**new_values),
        )
        logger.info("organization_updated", fields=sorted(new_values))
        return self._backfilled(result)

    def _backfilled(self, stored: OrganizationDetails | None) -> OrganizationDetails:
        if stored is None:
            return self.defaults()
        values = self.defaults().model_dump()
        values.update(
            (name, value) for name, value in stored.model_dump().items() if value is not None
        )
        return OrganizationDetails(**values).with_defaults(self._header_color, self._accent_color)
