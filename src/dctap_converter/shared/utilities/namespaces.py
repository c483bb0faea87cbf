"""
Namespace resolution between full URIs and prefixed names.

Resolution is best-effort: values that cannot be compressed or expanded
are returned unchanged and no exception is raised.

Usage:
    from dctap_converter.shared.utilities.namespaces import NamespaceResolver

    resolver = NamespaceResolver(store.namespaces.list(workspace_id))
    resolver.compress("http://purl.org/dc/terms/title")   # "dcterms:title"
    resolver.expand("dcterms:title")                      # "http://purl.org/dc/terms/title"
"""

from typing import Iterable, List, Optional, Sequence

from rdflib import Namespace as RDFNamespace
from rdflib.namespace import DCTERMS, FOAF, OWL, RDF, RDFS, SKOS, XSD

from ...constants import ShapeConventions
from ..models.dctap import Namespace

# LC / BIBFRAME ecosystem namespaces not shipped with rdflib.
BF = RDFNamespace("http://id.loc.gov/ontologies/bibframe/")
BFLC = RDFNamespace("http://id.loc.gov/ontologies/bflc/")
BFSIMPLE = RDFNamespace("http://id.loc.gov/ontologies/bfsimple/")
CC = RDFNamespace("http://creativecommons.org/ns#")
SP = RDFNamespace("http://id.loc.gov/ontologies/sp/")
POM = RDFNamespace("http://performedmusicontology.org/ontology/")
MADS = RDFNamespace("http://www.loc.gov/mads/rdf/v1#")

# Seeded into every new workspace, in this order.
DEFAULT_NAMESPACES: List[Namespace] = [
    Namespace("rdf", str(RDF)),
    Namespace("rdfs", str(RDFS)),
    Namespace("xsd", str(XSD)),
    Namespace("owl", str(OWL)),
    Namespace("skos", str(SKOS)),
    Namespace("dcterms", str(DCTERMS)),
    Namespace("foaf", str(FOAF)),
    Namespace("bf", str(BF)),
    Namespace("bflc", str(BFLC)),
    Namespace("bfsimple", str(BFSIMPLE)),
    Namespace("cc", str(CC)),
    Namespace("sp", str(SP)),
    Namespace("pom", str(POM)),
    Namespace("mads", str(MADS)),
]

DEFAULT_PREFIXES = frozenset(ns.prefix for ns in DEFAULT_NAMESPACES)


def compress(uri: str, namespaces: Sequence[Namespace]) -> str:
    """Return ``prefix:local`` for the first namespace whose URI prefixes ``uri``.

    Namespaces are tried in the order given. Without a match the input is
    returned unchanged.
    """
    if not uri:
        return uri
    for ns in namespaces:
        if ns.uri and uri.startswith(ns.uri):
            return f"{ns.prefix}:{uri[len(ns.uri):]}"
    return uri


def expand(value: str, namespaces: Sequence[Namespace]) -> str:
    """Expand a prefixed name to a full URI.

    Values containing ``://`` are already full URIs and are returned as-is,
    even when the text before the colon matches a known prefix. Unknown
    prefixes are returned unchanged.
    """
    if not value or ":" not in value:
        return value
    if "://" in value:
        return value
    prefix, local = value.split(":", 1)
    for ns in namespaces:
        if ns.prefix == prefix:
            return f"{ns.uri}{local}"
    return value


def prefix_of(value: Optional[str]) -> Optional[str]:
    """Return the text before the first colon, or None if there is none.

    A leading colon (empty prefix) also yields None.
    """
    if not value:
        return None
    index = value.find(":")
    if index <= 0:
        return None
    return value[:index]


def placeholder_uri(prefix: str) -> str:
    """URI used for a namespace prefix that was referenced but never declared."""
    return ShapeConventions.PLACEHOLDER_NAMESPACE_TEMPLATE.format(prefix=prefix)


class NamespaceResolver:
    """Bidirectional URI <-> prefixed-name mapping over a namespace table."""

    def __init__(self, namespaces: Optional[Iterable[Namespace]] = None):
        self.namespaces: List[Namespace] = list(namespaces if namespaces is not None else DEFAULT_NAMESPACES)

    @property
    def prefixes(self) -> List[str]:
        return [ns.prefix for ns in self.namespaces]

    def is_known(self, prefix: str) -> bool:
        return any(ns.prefix == prefix for ns in self.namespaces)

    def compress(self, uri: Optional[str]) -> Optional[str]:
        if uri is None:
            return None
        return compress(uri, self.namespaces)

    def expand(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return expand(value, self.namespaces)
