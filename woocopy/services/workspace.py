"""
Operator workspace: persisted settings plus the live run controller
"""
import logging
from typing import List, Optional

from ..config import settings
from ..models import CatalogItem, ConnectionProfile
from .generator import DescriptionGenerator
from .run_controller import RunController
from .store import JsonStore
from .woocommerce import WooCommerceClient

logger = logging.getLogger(__name__)


class Workspace:
    """Resolves stored state into the objects the pipeline needs"""

    def __init__(
        self,
        store: JsonStore,
        generator: Optional[DescriptionGenerator] = None,
        catalog: Optional[WooCommerceClient] = None,
        auto_push: bool = settings.AUTO_PUSH_DEFAULT,
    ):
        self.store = store
        if catalog is None:
            catalog = WooCommerceClient.from_connection(store.load_connection())
        self.controller = RunController(generator or DescriptionGenerator(), catalog, auto_push=auto_push)
        self.controller.results = store.load_results()
        self.controller.recently_updated = store.load_recently_updated()
        self.selection: List[str] = []

    @property
    def catalog(self) -> WooCommerceClient:
        return self.controller.catalog

    def connect(self, connection: ConnectionProfile, catalog: Optional[WooCommerceClient] = None) -> WooCommerceClient:
        """Swap in a catalog client for new connection details"""
        self.controller.catalog = catalog or WooCommerceClient.from_connection(connection)
        return self.controller.catalog

    def selected_items(self) -> List[CatalogItem]:
        """Selected products from the cached snapshot, in selection order"""
        by_id = {p.id: p for p in self.store.load_products()}
        missing = [i for i in self.selection if i not in by_id]
        if missing:
            logger.warning(f"Selected products missing from snapshot: {', '.join(missing)}")
        return [by_id[i] for i in self.selection if i in by_id]

    def toggle(self, item_id: str) -> bool:
        """Flip selection of one product; returns the new selected flag"""
        if item_id in self.selection:
            self.selection.remove(item_id)
            return False
        self.selection.append(item_id)
        return True

    def persist_run(self) -> None:
        self.store.save_results(self.controller.results)
        self.store.save_recently_updated(self.controller.recently_updated)

    def clear(self) -> None:
        """Forget everything: stored data, selection, results, connection"""
        self.store.clear()
        self.selection = []
        self.controller.results = {}
        self.controller.recently_updated = []
        self.controller.summary = None
        self.connect(ConnectionProfile())


_workspace: Optional[Workspace] = None


def get_workspace() -> Workspace:
    """Process-wide workspace for the HTTP layer"""
    global _workspace
    if _workspace is None:
        _workspace = Workspace(JsonStore(settings.STORE_PATH))
    return _workspace
