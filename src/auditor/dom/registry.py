# src/auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Set

from .core import AuditRule, ElementDefinition

logger = logging.getLogger(__name__)

ELEMENTS_PACKAGE = "auditor.dom.elements"


class DOMRegistry:
    """
    Registry of structural audit rules, keyed by tag name.

    Discovers ElementDefinition modules in the 'auditor.dom.elements' package.
    Each instance holds its own tables; modules are visited in name order so
    that rule order is stable between runs.
    """

    def __init__(self):
        self._rules: Dict[str, List[AuditRule]] = {}
        self._all_codes: Set[str] = set()
        self._loaded = False

    def discover(self) -> "DOMRegistry":
        """
        Discovers and registers all element definitions found in the elements package.

        A module takes part when it exposes a `DEFINITION` attribute that is an
        ElementDefinition. Modules that fail to import are logged and skipped.
        """
        if self._loaded:
            return self

        elements_pkg = importlib.import_module(ELEMENTS_PACKAGE)
        names = sorted(name for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__))

        for name in names:
            full_name = f"{ELEMENTS_PACKAGE}.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading rule module {name}: {e}")
                continue

            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, ElementDefinition):
                self.register(defn)
                logger.debug(f"Rules loaded: {name} -> {', '.join(defn.tag_names)}")

        self._loaded = True
        return self

    def register(self, defn: ElementDefinition) -> None:
        """Registers every rule of a definition under each of its tag names."""
        for tag_name in defn.tag_names:
            self._rules.setdefault(tag_name, []).extend(defn.audit_rules)
        self._all_codes.update(defn.codes)

    def get_rules(self, tag_name: str) -> List[AuditRule]:
        """Returns the rules registered for a tag name (empty if none)."""
        return self._rules.get(tag_name, [])

    def get_all_possible_codes(self) -> List[str]:
        """Returns all unique rule identifiers the registered rules may emit."""
        return sorted(self._all_codes)
