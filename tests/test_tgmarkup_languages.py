"""Tests for the libprisma language registry."""

import logging
from types import MappingProxyType

import pytest

from tgmarkup.ast_nodes import PreNode
from tgmarkup.exceptions import TgMarkupError, UnsupportedLanguageError
from tgmarkup.languages import (
    DEFAULT_ALIAS_OVERRIDES,
    LIBPRISMA_TABLE,
    Language,
    LanguageRegistry,
    getDefaultRegistry,
    mustNormalizeLanguage,
    normalizeLanguage,
    supportedLanguages,
)

# ============================================================================
# Default Registry Tests
# ============================================================================


class TestDefaultRegistry:
    """Test cases for the registry built from the built-in table."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("python", "python"),
            ("PY", "python"),
            ("  Python\t", "python"),
            ("html", "markup"),
            ("XML", "markup"),
            ("svg", "markup"),
            ("mathml", "markup"),
            ("js", "javascript"),
            ("ts", "typescript"),
            ("c++", "cpp"),
            ("go-mod", "go-module"),
            ("go-module", "go-module"),
            ("sh", "bash"),
            ("shell", "bash"),
            ("cs", "csharp"),
            ("xls", "excel-formula"),
            ("false", "false"),
            (Language.GO_MODULE, "go-module"),
        ],
    )
    def testNormalize(self, defaultRegistry, value, expected):
        assert defaultRegistry.normalize(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "not-a-real-language", "klingon", None])
    def testNormalizeNotFound(self, defaultRegistry, value):
        assert defaultRegistry.normalize(value) is None

    def testCanonicalTagsSortedAndDistinct(self, defaultRegistry):
        tags = defaultRegistry.listCanonicalTags()
        assert tags == sorted(tags)
        assert len(tags) == len(set(tags))
        assert len(tags) == 288

    def testCanonicalTagsMatchLanguageEnum(self, defaultRegistry):
        assert set(defaultRegistry.listCanonicalTags()) == {language.value for language in Language}

    def testEveryTableRowResolves(self, defaultRegistry):
        for line in LIBPRISMA_TABLE.strip().splitlines():
            _, aliasesCsv = line.split("\t")
            tags = {defaultRegistry.normalize(alias) for alias in aliasesCsv.split(",")}
            assert len(tags) == 1, line
            assert None not in tags, line

    def testAliasEquivalence(self, defaultRegistry):
        """Every alias of a language resolves to the tag every other alias resolves to."""
        for tag in defaultRegistry.listCanonicalTags():
            for alias in defaultRegistry.aliasesFor(tag):
                assert defaultRegistry.normalize(alias) == tag

    def testOverridesApplied(self, defaultRegistry):
        for alias, target in DEFAULT_ALIAS_OVERRIDES.items():
            assert defaultRegistry.normalize(alias) == target

    def testAliasesFor(self, defaultRegistry):
        assert defaultRegistry.aliasesFor("JS") == ["javascript", "js"]
        assert defaultRegistry.aliasesFor("python") == ["py", "python"]
        assert defaultRegistry.aliasesFor("xml") == ["atom", "html", "markup", "mathml", "rss", "ssml", "svg", "xml"]
        assert defaultRegistry.aliasesFor("klingon") == []

    def testDisplayName(self, defaultRegistry):
        assert defaultRegistry.displayName("sh") == "Bash"
        assert defaultRegistry.displayName("py") == "Python"
        assert defaultRegistry.displayName("c++") == "C++"
        assert defaultRegistry.displayName("klingon") is None

    def testContains(self, defaultRegistry):
        assert "PY" in defaultRegistry
        assert "klingon" not in defaultRegistry
        assert 42 not in defaultRegistry

    def testLen(self, defaultRegistry):
        assert len(defaultRegistry) > len(defaultRegistry.listCanonicalTags())

    def testReadOnly(self, defaultRegistry):
        assert isinstance(defaultRegistry.aliases, MappingProxyType)
        with pytest.raises(TypeError):
            defaultRegistry.aliases["klingon"] = "python"  # type: ignore[index]

    def testBuiltOnce(self):
        assert getDefaultRegistry() is getDefaultRegistry()

    def testLanguageEnumValues(self):
        assert Language.PYTHON == "python"
        assert Language.CPP == "cpp"
        assert Language.MARKUP == "markup"


class TestStrictNormalize:
    """Test cases for mustNormalize."""

    def testResolves(self, defaultRegistry):
        assert defaultRegistry.mustNormalize("Py") == "python"

    def testRaisesWithOriginalInput(self, defaultRegistry):
        with pytest.raises(UnsupportedLanguageError) as excInfo:
            defaultRegistry.mustNormalize("  Klingon ")
        assert excInfo.value.language == "  Klingon "
        assert "Klingon" in str(excInfo.value)

    def testErrorHierarchy(self, defaultRegistry):
        with pytest.raises(ValueError):
            defaultRegistry.mustNormalize("")
        with pytest.raises(TgMarkupError):
            defaultRegistry.mustNormalize(None)


# ============================================================================
# Table Parsing Tests
# ============================================================================


class TestFromTable:
    """Test cases for building registries from alternate tables."""

    def testParsesWellFormedRows(self, smallTable):
        registry = LanguageRegistry.fromTable(smallTable, overrides={})
        assert registry.listCanonicalTags() == ["bar", "baz", "foo"]
        assert registry.normalize("F") == "foo"
        assert registry.normalize("b2") == "bar"
        assert registry.normalize("bz") == "baz"
        assert registry.displayName("b2") == "Bar Lang"

    def testSkipsMalformedRows(self, smallTable):
        registry = LanguageRegistry.fromTable(smallTable, overrides={})
        for value in ("no tab separator here", "too", "many", "fields", "empty aliases"):
            assert registry.normalize(value) is None
        assert len(registry) == 6

    def testDuplicateAliasesCollapse(self, smallTable):
        registry = LanguageRegistry.fromTable(smallTable, overrides={})
        assert registry.aliasesFor("foo") == ["f", "foo"]

    def testDefaultOverridesUsedWhenNoneGiven(self, caplog):
        table = "Python\tpython,py\nMarkup\tmarkup"
        with caplog.at_level(logging.WARNING, logger="tgmarkup.languages"):
            registry = LanguageRegistry.fromTable(table)
        assert registry.normalize("html") == "markup"
        # javascript, typescript, go-module and cpp are not in this table
        assert registry.normalize("js") == "javascript"
        assert "javascript" in registry.listCanonicalTags()
        assert any("not in the table" in record.getMessage() for record in caplog.records)

    def testOverrideWinsOnCollision(self):
        registry = LanguageRegistry.fromTable("Foo\tfoo,x\nBar\tbar", overrides={"X": "BAR"})
        assert registry.normalize("x") == "bar"
        assert registry.aliasesFor("foo") == ["foo"]

    def testLaterRowWinsOnCollision(self):
        registry = LanguageRegistry.fromTable("Foo\tfoo,x\nBar\tbar,x", overrides={})
        assert registry.normalize("x") == "bar"

    def testEmptyOverridesIgnored(self):
        registry = LanguageRegistry.fromTable("Foo\tfoo", overrides={"": "foo", "f": "  "})
        assert len(registry) == 1

    def testUnusableOverrideTargetIgnored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tgmarkup.languages"):
            registry = LanguageRegistry.fromTable("Foo\tfoo", overrides={"bad": "has space", "worse": 'a"b'})
        assert registry.normalize("bad") is None
        assert registry.normalize("worse") is None
        assert registry.listCanonicalTags() == ["foo"]
        assert "not a usable tag" in caplog.text

    def testUnusableCanonicalRowSkipped(self):
        registry = LanguageRegistry.fromTable("Bad\tbad tag,bt\nFoo\tfoo", overrides={})
        assert registry.normalize("bt") is None
        assert registry.listCanonicalTags() == ["foo"]

    def testEveryDefaultTagFitsPreNode(self, defaultRegistry):
        for tag in defaultRegistry.listCanonicalTags():
            assert PreNode("x", tag).language == tag

    def testEmptyTable(self):
        registry = LanguageRegistry.fromTable("", overrides={})
        assert len(registry) == 0
        assert registry.listCanonicalTags() == []
        assert registry.normalize("python") is None


# ============================================================================
# Module Level Helpers Tests
# ============================================================================


class TestModuleHelpers:
    """Test cases for module level helpers."""

    def testDefaultRegistryHelpers(self, defaultRegistry):
        assert normalizeLanguage("ts") == "typescript"
        assert normalizeLanguage("nope") is None
        assert mustNormalizeLanguage("py") == "python"
        assert supportedLanguages() == defaultRegistry.listCanonicalTags()

    def testExplicitRegistry(self, smallTable):
        registry = LanguageRegistry.fromTable(smallTable, overrides={})
        assert normalizeLanguage("f", registry) == "foo"
        assert supportedLanguages(registry) == ["bar", "baz", "foo"]
        with pytest.raises(UnsupportedLanguageError):
            mustNormalizeLanguage("python", registry)

    def testEmptyRegistryIsNotReplacedByDefault(self):
        registry = LanguageRegistry.fromTable("", overrides={})
        assert normalizeLanguage("python", registry) is None
        assert supportedLanguages(registry) == []
