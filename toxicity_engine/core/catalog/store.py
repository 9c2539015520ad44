"""
ReferenceCatalog: read-only access to symptom items, drug modules and regimens.
Instantiated explicitly and passed into the engine; there is no process-wide instance.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..errors import NotFoundError
from ..models import Attribute, DrugModule, Regimen, SymptomItem, find_drug_module

logger = logging.getLogger(__name__)


class ReferenceCatalog:
    """
    Holds the PRO-CTCAE item library, the drug-module library and the regimen
    definitions. Contents are treated as immutable once loaded; lookups return
    the stored objects, never copies that callers could diverge from.
    """

    def __init__(self,
                 items: Optional[Iterable[SymptomItem]] = None,
                 drug_modules: Optional[Iterable[DrugModule]] = None,
                 regimens: Optional[Iterable[Regimen]] = None):
        self._items: List[SymptomItem] = []
        self._drug_modules: List[DrugModule] = []
        self._regimens: Dict[str, Regimen] = {}
        self._items_by_id: Dict[str, SymptomItem] = {}
        self._loaded = False

        if items is not None or drug_modules is not None or regimens is not None:
            self._load(items or [], drug_modules or [], regimens or [])

    def initialize(self) -> None:
        """Load the bundled reference data modules."""
        from .data.proctcae_items import PROCTCAE_ITEMS
        from .data.drug_modules import DRUG_MODULES
        from .data.regimens import REGIMENS

        self._load(PROCTCAE_ITEMS, DRUG_MODULES, REGIMENS)

    def _load(self,
              items: Iterable[SymptomItem],
              drug_modules: Iterable[DrugModule],
              regimens: Iterable[Regimen]) -> None:
        self._items = list(items)
        self._drug_modules = list(drug_modules)
        self._regimens = {r.regimen_code: r for r in regimens}
        self._items_by_id = {item.item_id: item for item in self._items}
        self._loaded = True
        logger.info(
            "ReferenceCatalog loaded %d items (%d symptoms), %d drug modules, %d regimens",
            len(self._items),
            len({i.symptom_term for i in self._items}),
            len(self._drug_modules),
            len(self._regimens),
        )

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def items(self) -> List[SymptomItem]:
        return list(self._items)

    @property
    def drug_modules(self) -> List[DrugModule]:
        return list(self._drug_modules)

    @property
    def regimens(self) -> List[Regimen]:
        return list(self._regimens.values())

    # ------------------------------------------------------------------
    # Item lookup
    # ------------------------------------------------------------------

    def get_item(self, item_id: str) -> SymptomItem:
        item = self._items_by_id.get(item_id)
        if item is None:
            raise NotFoundError("Symptom item", item_id)
        return item

    def find_items(self,
                   symptom_term: str,
                   attribute: Optional[Attribute] = None) -> List[SymptomItem]:
        """Items for a symptom term, optionally narrowed to one attribute, in catalog order."""
        return [
            item for item in self._items
            if item.symptom_term == symptom_term
            and (attribute is None or item.attribute == attribute)
        ]

    def items_for_symptom(self, symptom_term: str) -> Dict[Attribute, SymptomItem]:
        """Attribute -> first catalog item for the symptom."""
        by_attribute: Dict[Attribute, SymptomItem] = {}
        for item in self.find_items(symptom_term):
            by_attribute.setdefault(item.attribute, item)
        return by_attribute

    # ------------------------------------------------------------------
    # Regimens & drug modules
    # ------------------------------------------------------------------

    def get_regimen(self, regimen_code: str) -> Regimen:
        regimen = self._regimens.get(regimen_code)
        if regimen is None:
            raise NotFoundError("Regimen", regimen_code)
        return regimen

    def find_drug_module(self, name: str) -> Optional[DrugModule]:
        """Case-insensitive match on drug name or any alternative name."""
        return find_drug_module(name, self._drug_modules)
