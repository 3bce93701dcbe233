"""Gap detection and report formatting tests."""

from __future__ import annotations

from depenforcer.model import DependencyRecord, Module
from depenforcer.rules.report import (
    BEGIN_MARKER,
    END_MARKER,
    build_failure_message,
    find_missing,
    format_dependency,
)


def test_format_dependency_with_type() -> None:
    dep = DependencyRecord("com.example", "lib", "1.2.3", "war")
    assert format_dependency(dep, "  ") == (
        "<dependency>\n"
        "  <groupId>com.example</groupId>\n"
        "  <artifactId>lib</artifactId>\n"
        "  <type>war</type>\n"
        "</dependency>"
    )


def test_format_dependency_omits_jar_type() -> None:
    dep = DependencyRecord("com.github.mikkoi", "test-dependency", "1.2.3-TEST", "jar")
    assert format_dependency(dep, "  ") == (
        "<dependency>\n"
        "  <groupId>com.github.mikkoi</groupId>\n"
        "  <artifactId>test-dependency</artifactId>\n"
        "</dependency>"
    )


def test_format_dependency_default_indent_is_four_spaces() -> None:
    text = format_dependency(DependencyRecord("g", "a"))
    assert "\n    <groupId>g</groupId>\n" in text


def test_find_missing_keeps_order_and_duplicates() -> None:
    a = Module("g", "a", "1")
    b = Module("g", "b", "1")
    c = Module("g", "c", "1")
    declared = [b.to_dependency()]
    assert find_missing([c, a, b, a], declared) == [c, a, a]


def test_find_missing_requires_matching_version_and_type() -> None:
    a = Module("g", "a", "1", "pom")
    assert find_missing([a], [DependencyRecord("g", "a", "1", "jar")]) == [a]
    assert find_missing([a], [DependencyRecord("g", "a", "2", "pom")]) == [a]
    assert find_missing([a], [DependencyRecord("g", "a", "1", "pom")]) == []


def test_build_failure_message_layout() -> None:
    current = Module("G", "Root", "1", "pom")
    missing = [Module("G", "A", "1"), Module("G", "B", "1", "war")]

    message = build_failure_message(current, missing)

    assert message.split("\n") == [
        "Project 'G:Root' is missing dependency 'G:A:jar'.",
        "Project 'G:Root' is missing dependency 'G:B:war'.",
        "Missing definitions from the project 'G:Root':",
        BEGIN_MARKER,
        "<dependency>",
        "    <groupId>G</groupId>",
        "    <artifactId>A</artifactId>",
        "</dependency>",
        "<dependency>",
        "    <groupId>G</groupId>",
        "    <artifactId>B</artifactId>",
        "    <type>war</type>",
        "</dependency>",
        END_MARKER,
    ]
