"""Tests for identifier normalization and collision resolution."""

from __future__ import annotations

from dataclasses import replace

import pytest

from sdkgen.core.config import load_rules
from sdkgen.core.errors import NamingConfigurationError
from sdkgen.core.naming import (
    CaseEquality,
    CollisionReason,
    DisambiguationStrategy,
    NamingCase,
    NamingRules,
    Scope,
    check_rules,
    convert_case,
    normalize,
    numeric_suffix,
    resolve,
    resolve_all,
)


class TestNormalize:
    def test_pascal_case(self) -> None:
        assert normalize("bar", NamingCase.PASCAL_CASE) == "Bar"
        assert normalize("resource_name", NamingCase.PASCAL_CASE) == "ResourceName"

    def test_snake_case_splits_acronyms(self) -> None:
        assert normalize("HTTPServer", NamingCase.SNAKE_CASE) == "http_server"
        assert normalize("userName", NamingCase.SNAKE_CASE) == "user_name"

    def test_invalid_characters_replaced(self) -> None:
        assert normalize("a.b c", NamingCase.PASCAL_CASE) == "ABC"

    def test_leading_digit_gets_prefix(self) -> None:
        assert normalize("2fa", NamingCase.PASCAL_CASE) == "_2fa"
        assert normalize("2fa", NamingCase.PASCAL_CASE, digit_prefix="X") == "X2fa"

    def test_empty_name_never_empty(self) -> None:
        assert normalize("", NamingCase.PASCAL_CASE) == "Field"
        assert normalize("___", NamingCase.SNAKE_CASE) == "field"

    def test_convert_case_camel(self) -> None:
        assert convert_case("ResourceInput", NamingCase.CAMEL_CASE) == "resourceInput"


class TestNumericSuffix:
    def test_decimal(self) -> None:
        assert numeric_suffix(1, "0123456789") == "1"
        assert numeric_suffix(10, "0123456789") == "10"

    def test_custom_alphabet(self) -> None:
        assert numeric_suffix(1, "ab") == "b"
        assert numeric_suffix(2, "ab") == "ba"

    def test_unary_alphabet(self) -> None:
        assert numeric_suffix(3, "x") == "xxx"


class TestScope:
    def test_case_insensitive_find(self) -> None:
        scope = Scope(CaseEquality.INSENSITIVE)
        scope.reserve("Get")
        assert "get" in scope
        assert "GET" in scope

    def test_case_sensitive_find(self) -> None:
        scope = Scope(CaseEquality.SENSITIVE)
        scope.reserve("Get")
        assert "Get" in scope
        assert "get" not in scope

    def test_reserve_ignores_duplicates(self) -> None:
        scope = Scope(CaseEquality.INSENSITIVE)
        first = scope.reserve("Id")
        assert scope.reserve("ID") is first
        assert len(scope) == 1

    def test_register_duplicate_raises(self) -> None:
        scope = Scope(CaseEquality.SENSITIVE, label="test")
        resolve("bar", scope, NamingRules(language="x"))
        with pytest.raises(ValueError, match="already registered"):
            scope.register(scope.identifiers[0])


class TestResolve:
    def test_no_collision_keeps_normalized(self, structural_rules: NamingRules) -> None:
        scope = Scope.for_rules(structural_rules)
        identifier = resolve("bar", scope, structural_rules)
        assert identifier.origin == "bar"
        assert identifier.spelling == "Bar"
        assert not identifier.renamed
        assert scope.events == []

    def test_structural_member_is_avoided(self, structural_rules: NamingRules) -> None:
        scope = Scope.for_rules(structural_rules)
        scope.reserve("Get")
        identifier = resolve("get", scope, structural_rules)
        assert identifier.spelling == "Get1"
        [event] = scope.events
        assert event.reason == CollisionReason.STRUCTURAL_MEMBER
        assert event.conflicts_with == "Get"

    def test_reserved_word_is_case_sensitive(self) -> None:
        rules = load_rules("dotnet")
        scope = Scope.for_rules(rules)
        names = resolve_all(["default", "event", "object", "string"], scope, rules)
        assert [i.spelling for i in names] == ["Default", "Event", "Object", "String"]
        assert scope.events == []

    def test_reserved_word_exact_match(self) -> None:
        rules = replace(load_rules("dotnet"), member_case=NamingCase.CAMEL_CASE)
        scope = Scope.for_rules(rules)
        identifier = resolve("class", scope, rules)
        assert identifier.spelling == "class1"
        assert scope.events[0].reason == CollisionReason.RESERVED_WORD
        assert scope.events[0].conflicts_with == "class"

    def test_python_keyword_uses_rename_table(self) -> None:
        rules = load_rules("python")
        scope = Scope.for_rules(rules)
        assert resolve("lambda", scope, rules).spelling == "lambda_"
        assert resolve("class", scope, rules).spelling == "class_"

    def test_rename_table_before_suffix(self) -> None:
        rules = load_rules("dotnet")
        scope = Scope.for_rules(rules)
        scope.reserve("Id")
        assert resolve("id", scope, rules).spelling == "ResourceId"

    def test_suffix_after_rename_taken(self) -> None:
        rules = load_rules("dotnet")
        scope = Scope.for_rules(rules)
        scope.reserve("Id")
        resolve("id", scope, rules)
        assert resolve("ID", scope, rules).spelling == "Id1"

    def test_suffix_separator(self) -> None:
        rules = load_rules("python")
        scope = Scope.for_rules(rules)
        resolve("bar", scope, rules)
        assert resolve("Bar", scope, rules).spelling == "bar_1"

    def test_suffix_skips_taken_candidates(self, structural_rules: NamingRules) -> None:
        scope = Scope.for_rules(structural_rules)
        resolve_all(["foo", "foo1", "FOO"], scope, structural_rules)
        assert scope.spellings() == ["Foo", "Foo1", "Foo2"]

    def test_callback_receives_event(self, structural_rules: NamingRules) -> None:
        seen = []
        scope = Scope.for_rules(structural_rules, label="dotnet:example::Thing")
        resolve("empty", scope, structural_rules)
        resolve("Empty", scope, structural_rules, on_collision=seen.append)
        assert len(seen) == 1
        assert seen[0].scope == "dotnet:example::Thing"
        assert seen[0].desired == "Empty"
        assert seen[0].conflicts_with == "empty"
        assert seen[0].reason == CollisionReason.SCOPE_MEMBER
        assert "Empty1" in seen[0].describe()

    def test_rename_is_logged(self, structural_rules, caplog) -> None:
        scope = Scope.for_rules(structural_rules)
        resolve("a", scope, structural_rules)
        with caplog.at_level("INFO", logger="sdkgen"):
            resolve("A", scope, structural_rules)
        assert "Collision resolved" in caplog.text

    def test_order_dependence(self, structural_rules: NamingRules) -> None:
        first = Scope.for_rules(structural_rules)
        resolve_all(["id", "ID"], first, structural_rules)
        second = Scope.for_rules(structural_rules)
        resolve_all(["ID", "id"], second, structural_rules)

        assert {i.origin: i.spelling for i in first} == {"id": "Id", "ID": "Id1"}
        assert {i.origin: i.spelling for i in second} == {"ID": "Id", "id": "Id1"}


class TestNoForwardProgress:
    def test_empty_alphabet_rejected(self) -> None:
        rules = NamingRules(language="broken", suffix_alphabet="")
        with pytest.raises(NamingConfigurationError, match="suffix alphabet"):
            check_rules(rules)

    def test_empty_alphabet_fails_on_collision(self) -> None:
        rules = NamingRules(language="broken", suffix_alphabet="")
        scope = Scope.for_rules(rules)
        scope.reserve("Get")
        with pytest.raises(NamingConfigurationError) as excinfo:
            resolve("get", scope, rules)
        assert excinfo.value.language == "broken"

    def test_fixed_table_without_entry(self) -> None:
        rules = NamingRules(
            language="fixed",
            disambiguation=DisambiguationStrategy.FIXED_RENAME_TABLE,
            rename_table={"Id": "ResourceId"},
        )
        check_rules(rules)
        scope = Scope.for_rules(rules)
        scope.reserve("Urn")
        with pytest.raises(NamingConfigurationError, match="no free candidate"):
            resolve("urn", scope, rules)

    def test_empty_fixed_table_rejected(self) -> None:
        rules = NamingRules(
            language="fixed", disambiguation=DisambiguationStrategy.FIXED_RENAME_TABLE
        )
        with pytest.raises(NamingConfigurationError):
            check_rules(rules)
