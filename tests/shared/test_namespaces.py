"""
Tests for namespace resolution between URIs and prefixed names.
"""

import pytest

from dctap_converter.shared.models.dctap import Namespace
from dctap_converter.shared.utilities.namespaces import (
    DEFAULT_NAMESPACES,
    NamespaceResolver,
    compress,
    expand,
    placeholder_uri,
    prefix_of,
)


@pytest.fixture
def resolver():
    """Resolver over the default namespace table."""
    return NamespaceResolver(DEFAULT_NAMESPACES)


@pytest.mark.unit
class TestDefaultNamespaces:
    """Seeded namespace table."""

    def test_default_table_order(self):
        """The fourteen defaults appear in their seeding order."""
        assert [ns.prefix for ns in DEFAULT_NAMESPACES] == [
            "rdf", "rdfs", "xsd", "owl", "skos", "dcterms", "foaf",
            "bf", "bflc", "bfsimple", "cc", "sp", "pom", "mads",
        ]

    def test_default_uris(self):
        """Well-known URIs come from rdflib's namespace constants."""
        table = {ns.prefix: ns.uri for ns in DEFAULT_NAMESPACES}
        assert table["dcterms"] == "http://purl.org/dc/terms/"
        assert table["xsd"] == "http://www.w3.org/2001/XMLSchema#"
        assert table["bf"] == "http://id.loc.gov/ontologies/bibframe/"


@pytest.mark.unit
class TestCompressExpand:
    """compress()/expand() behavior."""

    def test_compress(self, resolver):
        """A URI under a known namespace becomes a prefixed name."""
        assert resolver.compress("http://purl.org/dc/terms/title") == "dcterms:title"

    def test_expand(self, resolver):
        """A known prefix expands to the full URI."""
        assert resolver.expand("dcterms:title") == "http://purl.org/dc/terms/title"

    def test_round_trip(self, resolver):
        """expand(compress(u)) returns u for a URI under a known namespace."""
        uri = "http://id.loc.gov/ontologies/bibframe/Instance"
        assert resolver.expand(resolver.compress(uri)) == uri

    def test_unknown_uri_unchanged(self, resolver):
        """URIs without a matching namespace are returned as-is."""
        assert resolver.compress("http://example.com/thing") == "http://example.com/thing"

    def test_unknown_prefix_unchanged(self, resolver):
        """Prefixed names with an unknown prefix are returned as-is."""
        assert resolver.expand("ex:thing") == "ex:thing"

    def test_full_uri_not_expanded(self):
        """Values containing :// are never expanded, even if the scheme is a prefix."""
        namespaces = [Namespace("http", "http://wrong/")]
        assert expand("http://purl.org/dc/terms/title", namespaces) == "http://purl.org/dc/terms/title"

    def test_first_matching_namespace_wins(self):
        """Namespaces are tried in order."""
        namespaces = [Namespace("a", "http://x/"), Namespace("b", "http://x/y/")]
        assert compress("http://x/y/z", namespaces) == "a:y/z"

    def test_none_passthrough(self, resolver):
        """None stays None."""
        assert resolver.compress(None) is None
        assert resolver.expand(None) is None

    def test_value_without_colon(self, resolver):
        """Plain values are not expanded."""
        assert resolver.expand("title") == "title"


@pytest.mark.unit
class TestPrefixHelpers:
    """prefix_of() and placeholder_uri()."""

    def test_prefix_of(self):
        """The prefix is the text before the first colon."""
        assert prefix_of("foaf:name") == "foaf"
        assert prefix_of("http://example.org/a") == "http"

    def test_prefix_of_missing(self):
        """No colon, a leading colon, or an empty value yield None."""
        assert prefix_of("name") is None
        assert prefix_of(":name") is None
        assert prefix_of(None) is None

    def test_placeholder_uri(self):
        """Unknown prefixes get an example.org placeholder."""
        assert placeholder_uri("ex") == "http://example.org/ex/"

    def test_is_known(self, resolver):
        """is_known checks the resolver's table."""
        assert resolver.is_known("bflc")
        assert not resolver.is_known("ex")
