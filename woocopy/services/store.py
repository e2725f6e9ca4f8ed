"""
Local JSON key-value store for connection, profile, catalog snapshot and results
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..models import BusinessProfile, CatalogItem, ConnectionProfile, GenerationResult

logger = logging.getLogger(__name__)

CONNECTION_KEY = "woo_connection"
GENERATOR_KEY = "grok_api_key"
PROFILE_KEY = "business_context"
PRODUCTS_KEY = "products"
RESULTS_KEY = "generated_descriptions"
RECENTLY_UPDATED_KEY = "recently_updated"


class JsonStore:
    """Opaque key-value persistence backed by one JSON file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning(f"Failed to load store {self.path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def clear(self) -> None:
        self._save({})
        logger.info("Cleared all stored data")

    # Typed accessors

    def load_connection(self) -> ConnectionProfile:
        return ConnectionProfile.model_validate(self.get(CONNECTION_KEY) or {})

    def save_connection(self, connection: ConnectionProfile) -> None:
        self.set(CONNECTION_KEY, connection.model_dump(by_alias=True))

    def load_generator_key(self) -> str:
        return self.get(GENERATOR_KEY) or ""

    def save_generator_key(self, api_key: str) -> None:
        # An empty key is not stored, so a previous key survives
        if api_key:
            self.set(GENERATOR_KEY, api_key)

    def load_profile(self) -> BusinessProfile:
        return BusinessProfile.model_validate(self.get(PROFILE_KEY) or {})

    def save_profile(self, profile: BusinessProfile) -> None:
        self.set(PROFILE_KEY, profile.model_dump(by_alias=True, mode="json"))

    def load_products(self) -> List[CatalogItem]:
        return [CatalogItem.model_validate(p) for p in self.get(PRODUCTS_KEY) or []]

    def save_products(self, products: List[CatalogItem]) -> None:
        self.set(PRODUCTS_KEY, [p.model_dump(by_alias=True) for p in products])

    def load_results(self) -> Dict[str, GenerationResult]:
        raw = self.get(RESULTS_KEY) or {}
        return {str(k): GenerationResult.model_validate(v) for k, v in raw.items()}

    def save_results(self, results: Dict[str, GenerationResult]) -> None:
        self.set(RESULTS_KEY, {k: v.model_dump(by_alias=True) for k, v in results.items()})

    def load_recently_updated(self) -> List[str]:
        return [str(i) for i in self.get(RECENTLY_UPDATED_KEY) or []]

    def save_recently_updated(self, ids: List[str]) -> None:
        self.set(RECENTLY_UPDATED_KEY, list(ids))

