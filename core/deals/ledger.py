from __future__ import annotations

import logging
from typing import Collection, NoReturn, Sequence

from core.errors import DealNotFound, OperationNotImplemented
from core.persistence import DealStore
from core.types import Deal

logger = logging.getLogger(__name__)


class DealLedger:
    """Enumeration and closure of open deals.

    Deals are created outside this service; the ledger only lists and deletes.
    """

    def __init__(self, *, store: DealStore) -> None:
        self._store = store

    def list_active_deals(self, *, all: bool, ids: Collection[str] = ()) -> Sequence[Deal]:
        """Return every open deal.

        Listing a subset by id is not implemented and raises
        OperationNotImplemented rather than returning a partial result.
        """
        if not all:
            raise OperationNotImplemented("selective active deal listing")
        return list(self._store.get_deals())

    def list_potential_deals(self) -> NoReturn:
        # Requires market-data analysis that lives outside this service.
        raise OperationNotImplemented("potential deal listing")

    def close_deals(self, *, all: bool, ids: Sequence[str] = ()) -> int:
        """Delete deals and return how many were removed.

        With ``all`` every stored deal is removed (zero is fine). Otherwise ids
        are deleted in order and the first unknown id raises DealNotFound;
        deals already removed stay removed and later ids are not attempted.
        """
        if all:
            deals = self._store.get_deals()
            for deal in deals:
                self._store.delete_deal(deal_id=deal.id)
            logger.info(f"Closed all deals ({len(deals)})")
            return len(deals)

        closed = 0
        for deal_id in ids:
            if self._store.get_deal(deal_id=deal_id) is None:
                raise DealNotFound(deal_id)
            self._store.delete_deal(deal_id=deal_id)
            closed += 1
            logger.info(f"Deal {deal_id} closed")
        return closed
