import re
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Set, Union

from bs4 import BeautifulSoup, Tag

from ..model import Finding

if TYPE_CHECKING:
    from .models import MarkupDocument

# The pseudo tag name under which document-wide rules are registered.
DOCUMENT = "#document"

# A document "opts in" to localization checks when it already uses a translation convention.
TRANSLATION_CONVENTION = re.compile(r"data-i18n|\b(?:i18n\.t|t|translate|__)\(")


def audit_spec(codes: List[str]):
    """
    Decorator to declare which rule identifiers a specific audit rule function returns.
    Facilitates auto-discovery by the DOMRegistry and the pattern batteries.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


# An audit rule receives the node it applies to (the BeautifulSoup root for
# document rules) plus the parsed document, and returns its findings.
AuditRule = Callable[[Union[Tag, BeautifulSoup], "MarkupDocument"], List[Finding]]


class ElementDefinition:
    """
    Configuration object binding one or more HTML tags to their audit rules.
    """

    def __init__(
            self,
            tag_names: Union[str, Sequence[str]],
            audit_rules: Optional[List[AuditRule]] = None,
            possible_codes: Optional[List[str]] = None
    ):
        self.tag_names = (tag_names,) if isinstance(tag_names, str) else tuple(tag_names)
        self.audit_rules = audit_rules or []

        # --- Auto-Discovery of Rule Codes ---
        final_codes: Set[str] = set(possible_codes or [])

        for rule in self.audit_rules:
            if hasattr(rule, 'defined_codes'):
                final_codes.update(rule.defined_codes)

        self.codes = sorted(final_codes)


def attr_text(tag: Tag, name: str) -> Optional[str]:
    """
    Returns an attribute as a plain string. Multi-valued attributes (class, rel)
    are joined with spaces. Missing attributes return None.
    """
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def attr_tokens(tag: Tag, name: str) -> List[str]:
    """Returns a whitespace separated attribute (class, rel) as lowercase tokens."""
    value = attr_text(tag, name)
    return value.lower().split() if value else []

